"""Contrato do chat storage (mensagens persistidas pelo cliente)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import StoredMessage


class ChatStorageProtocol(Protocol):
    """Consulta de mensagens já armazenadas."""

    async def get_message_by_id(self, message_id: str) -> StoredMessage | None: ...
