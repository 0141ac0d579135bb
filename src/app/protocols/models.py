"""Modelos trocados com os colaboradores externos (bridge e chat storage)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _LookupModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ContactInfo(_LookupModel):
    found: bool = False
    push_name: str = ""
    full_name: str = ""

    @property
    def display_name(self) -> str:
        """Push name com fallback para o nome completo."""
        return self.push_name or self.full_name


class GroupInfo(_LookupModel):
    jid: str = ""
    name: str = ""


class SelfInfo(_LookupModel):
    """Identidade do dispositivo conectado."""

    jid: str = ""
    push_name: str = ""


class StoredMessage(_LookupModel):
    """Mensagem persistida pelo chat storage do bridge."""

    id: str
    chat_jid: str = ""
    sender: str = ""
    content: str = ""
    timestamp: datetime | None = None
    is_from_me: bool = False
    media_type: str = ""
    filename: str = ""
    poll_title: str = ""
    poll_options: list[str] = Field(default_factory=list)
    # Hex, como o chat storage grava
    poll_message_secret: str = ""
