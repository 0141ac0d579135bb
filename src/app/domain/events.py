"""Eventos brutos recebidos do bridge do protocolo WhatsApp.

Modelos estruturais: espelham o que o cliente multi-device entrega, sem
regras de negócio. Campos binários chegam em base64 no JSON.
"""

from __future__ import annotations

import base64
import binascii
from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

PROTOCOL_REVOKE = "REVOKE"
PROTOCOL_MESSAGE_EDIT = "MESSAGE_EDIT"


def _b64_to_bytes(value: object) -> object:
    # Aceita alfabeto padrão e URL-safe (pydantic serializa bytes como URL-safe)
    if isinstance(value, str):
        normalized = value.strip().replace("-", "+").replace("_", "/")
        padded = normalized + ("=" * (-len(normalized) % 4))
        try:
            return base64.b64decode(padded, validate=True)
        except (ValueError, binascii.Error) as exc:
            raise ValueError("invalid base64 value") from exc
    return value


Base64Bytes = Annotated[bytes, BeforeValidator(_b64_to_bytes)]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class _RawModel(BaseModel):
    # bytes voltam a base64 em model_dump(mode="json") (reenvio ao bridge)
    model_config = ConfigDict(extra="ignore", frozen=True, ser_json_bytes="base64")


class MessageKey(_RawModel):
    """Chave que referencia outra mensagem (reação, voto, revoke, edição)."""

    id: str = ""
    remote_jid: str = ""
    from_me: bool = False
    participant: str = ""


class ContextInfo(_RawModel):
    mentioned_jids: list[str] = Field(default_factory=list)
    is_forwarded: bool = False
    forwarding_score: int = 0
    quoted_message_id: str = ""


class ExtendedText(_RawModel):
    text: str = ""
    matched_text: str = ""
    title: str = ""
    description: str = ""
    context_info: ContextInfo | None = None


class MediaContent(_RawModel):
    """Campos comuns a image/video/audio/document/sticker/ptv."""

    url: str = ""
    direct_path: str = ""
    mimetype: str = ""
    caption: str = ""
    file_name: str = ""
    file_length: int = 0
    gif_playback: bool = False
    context_info: ContextInfo | None = None


class Location(_RawModel):
    degrees_latitude: float = 0.0
    degrees_longitude: float = 0.0
    name: str = ""
    address: str = ""


class LiveLocation(_RawModel):
    degrees_latitude: float = 0.0
    degrees_longitude: float = 0.0
    sequence_number: int = 0
    time_offset: int = 0
    caption: str = ""


class ContactCard(_RawModel):
    display_name: str = ""
    vcard: str = ""


class Reaction(_RawModel):
    key: MessageKey = Field(default_factory=MessageKey)
    text: str = ""


class PollCreation(_RawModel):
    name: str = ""
    options: list[str] = Field(default_factory=list)
    selectable_options_count: int = 0


class EncryptedVote(_RawModel):
    enc_payload: Base64Bytes = b""
    enc_iv: Base64Bytes = b""


class PollUpdate(_RawModel):
    poll_creation_message_key: MessageKey = Field(default_factory=MessageKey)
    vote: EncryptedVote = Field(default_factory=EncryptedVote)


class ProtocolMessage(_RawModel):
    """Mensagem de controle (REVOKE, MESSAGE_EDIT, ...)."""

    type: str = ""
    key: MessageKey = Field(default_factory=MessageKey)
    edited_message: MessageContent | None = None


class MessageContent(_RawModel):
    """Conteúdo de uma mensagem; no máximo um bloco principal preenchido."""

    conversation: str = ""
    extended_text: ExtendedText | None = None
    image: MediaContent | None = None
    video: MediaContent | None = None
    audio: MediaContent | None = None
    document: MediaContent | None = None
    sticker: MediaContent | None = None
    ptv: MediaContent | None = None
    location: Location | None = None
    live_location: LiveLocation | None = None
    contact: ContactCard | None = None
    reaction: Reaction | None = None
    poll_creation: PollCreation | None = None
    poll_update: PollUpdate | None = None
    protocol: ProtocolMessage | None = None
    message_secret: Base64Bytes | None = None

    @property
    def text(self) -> str:
        """Texto principal (conversation ou extended text)."""
        if self.conversation:
            return self.conversation
        if self.extended_text is not None:
            return self.extended_text.text
        return ""

    @property
    def context_info(self) -> ContextInfo | None:
        """ContextInfo do bloco que o carrega (texto ou mídia)."""
        if self.extended_text is not None and self.extended_text.context_info:
            return self.extended_text.context_info
        for media in (self.image, self.video, self.audio, self.document, self.sticker, self.ptv):
            if media is not None and media.context_info is not None:
                return media.context_info
        return None


ProtocolMessage.model_rebuild()


class MessageInfo(_RawModel):
    id: str
    chat: str
    sender: str
    is_from_me: bool = False
    is_group: bool = False
    push_name: str = ""
    timestamp: datetime = Field(default_factory=_utcnow)


class MessageEvent(_RawModel):
    type: Literal["message"] = "message"
    info: MessageInfo
    message: MessageContent = Field(default_factory=MessageContent)
    is_view_once: bool = False


class ReceiptEvent(_RawModel):
    type: Literal["receipt"] = "receipt"
    message_ids: list[str] = Field(default_factory=list)
    chat: str
    sender: str
    is_from_me: bool = False
    # Vazio = "delivered" (convenção do protocolo)
    receipt_type: str = ""
    timestamp: datetime = Field(default_factory=_utcnow)


class GroupInfoEvent(_RawModel):
    type: Literal["group_info"] = "group_info"
    jid: str
    sender: str = ""
    timestamp: datetime = Field(default_factory=_utcnow)
    join: list[str] = Field(default_factory=list)
    leave: list[str] = Field(default_factory=list)
    promote: list[str] = Field(default_factory=list)
    demote: list[str] = Field(default_factory=list)


class DeleteForMeEvent(_RawModel):
    type: Literal["delete_for_me"] = "delete_for_me"
    chat: str
    sender: str
    is_from_me: bool = False
    message_id: str
    timestamp: datetime = Field(default_factory=_utcnow)


RawEvent = Annotated[
    MessageEvent | ReceiptEvent | GroupInfoEvent | DeleteForMeEvent,
    Field(discriminator="type"),
]

RAW_EVENT_ADAPTER: TypeAdapter[RawEvent] = TypeAdapter(RawEvent)


def parse_raw_event(data: object) -> RawEvent:
    """Valida JSON do bridge em um evento tipado.

    Raises:
        pydantic.ValidationError: Se o payload não corresponder a nenhum tipo.
    """
    return RAW_EVENT_ADAPTER.validate_python(data)
