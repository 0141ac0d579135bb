"""Payloads de webhook tipados por tipo de evento.

Cada variante carrega apenas os campos válidos para o seu tipo. A
serialização para o formato de fio acontece só na borda (`to_wire`).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import StrEnum
from typing import Any


class EventKind(StrEnum):
    """Valor do campo `event` no envelope do webhook."""

    MESSAGE = "message"
    REACTION = "message.reaction"
    REVOKE = "message.revoked"
    EDIT = "message.edited"
    POLL_VOTE = "message.poll_vote"
    RECEIPT = "message.ack"
    GROUP_PARTICIPANTS = "group.participants"
    DELETE_FOR_ME = "message.deleted_for_me"


class MessageType(StrEnum):
    """Classificação de conteúdo de um evento `message`."""

    TEXT = "text_message"
    LINK = "link_message"
    EMOJI = "emoji_message"
    IMAGE = "image_message"
    VIDEO = "video_message"
    AUDIO = "audio_message"
    DOCUMENT = "document_message"
    STICKER = "sticker_message"
    VIDEO_NOTE = "video_note_message"
    POLL = "poll_message"
    LIVE_LOCATION = "live_location_message"
    LOCATION = "location_message"
    CONTACT = "contact_message"


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, StrEnum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    return value


class _Serializable:
    """to_dict genérico: omite campos None, converte datas e aninhados."""

    __slots__ = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            f.name: _serialize(getattr(self, f.name))
            for f in fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not None
        }


# ──────────────────────────────────────────────────────────────
# Blocos reutilizados pelos payloads
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LocalMedia:
    path: str


@dataclass(frozen=True, slots=True)
class RemoteMedia:
    url: str


MediaLocation = LocalMedia | RemoteMedia


@dataclass(frozen=True, slots=True)
class MediaAttachment:
    """Mídia anexada: caminho local OU URL remota, nunca ambos."""

    kind: str
    mimetype: str = ""
    extension: str = ""
    caption: str = ""
    file_name: str = ""
    location: MediaLocation | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind}
        for name in ("mimetype", "extension", "caption", "file_name"):
            value = getattr(self, name)
            if value:
                data[name] = value
        if isinstance(self.location, LocalMedia):
            data["path"] = self.location.path
        elif isinstance(self.location, RemoteMedia):
            data["url"] = self.location.url
        return data


@dataclass(frozen=True, slots=True)
class LinkPreview(_Serializable):
    url: str
    title: str | None = None
    description: str | None = None
    image: str | None = None


@dataclass(frozen=True, slots=True)
class PollSummary(_Serializable):
    question: str
    options: tuple[str, ...] = ()
    selectable_options_count: int | None = None


@dataclass(frozen=True, slots=True)
class OriginalMessage(_Serializable):
    """Mensagem original recuperada do chat storage (delete-for-me)."""

    content: str | None = None
    sender: str | None = None
    timestamp: datetime | None = None
    from_me: bool | None = None
    media_type: str | None = None
    file_name: str | None = None


# ──────────────────────────────────────────────────────────────
# Variantes de payload (uma por EventKind)
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True, kw_only=True)
class _BasePayload(_Serializable):
    id: str
    timestamp: datetime
    chat_id: str
    sender_id: str
    sender_number: str
    from_me: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class MessagePayload(_BasePayload):
    message_type: MessageType | None = None
    is_group: bool = False
    text: str | None = None
    sender_push_name: str | None = None
    receiver_number: str | None = None
    receiver_push_name: str | None = None
    group_name: str | None = None
    mentions: tuple[str, ...] | None = None
    link_preview: LinkPreview | None = None
    media: MediaAttachment | None = None
    location: dict[str, Any] | None = None
    live_location: dict[str, Any] | None = None
    contact: dict[str, Any] | None = None
    poll: PollSummary | None = None
    forwarded: bool | None = None
    view_once: bool | None = None
    message_secret: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ReactionPayload(_BasePayload):
    reacted_message_id: str
    emoji: str
    removed: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class RevokePayload(_BasePayload):
    revoked_message_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class EditPayload(_BasePayload):
    edited_message_id: str
    text: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PollVotePayload(_BasePayload):
    poll_message_id: str
    status: str
    selected_options: tuple[str, ...] | None = None
    selected_option_hashes: tuple[str, ...] = ()
    decryption_method: str | None = None
    aad_candidate: str | None = None
    reason: str | None = None
    poll: PollSummary | None = None
    encrypted_payload: str = ""
    encrypted_iv: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class ReceiptPayload(_BasePayload):
    message_ids: tuple[str, ...] = ()
    receipt_type: str = "delivered"
    description: str = ""
    message_type: str = "receipt_message"
    from_lid: str | None = None
    poll: PollSummary | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class GroupParticipantsPayload(_Serializable):
    id: str
    timestamp: datetime
    chat_id: str
    action: str
    participants: tuple[str, ...] = ()
    sender_id: str | None = None
    sender_number: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DeleteForMePayload(_BasePayload):
    sender_name: str | None = None
    original: OriginalMessage | None = None


WebhookPayload = (
    MessagePayload
    | ReactionPayload
    | RevokePayload
    | EditPayload
    | PollVotePayload
    | ReceiptPayload
    | GroupParticipantsPayload
    | DeleteForMePayload
)


@dataclass(frozen=True, slots=True)
class WebhookEvent:
    """Envelope entregue aos destinos. Transitório, nunca persistido."""

    kind: EventKind
    device_id: str
    timestamp: datetime
    payload: WebhookPayload

    def to_wire(self) -> dict[str, Any]:
        """Formato JSON `{event, device_id, timestamp, payload}`."""
        return {
            "event": self.kind.value,
            "device_id": self.device_id,
            "timestamp": self.timestamp.isoformat(),
            "payload": self.payload.to_dict(),
        }
