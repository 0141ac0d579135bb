"""Classificação de eventos de mensagem (um único tipo por evento).

Precedência:
    controle de protocolo (REVOKE / MESSAGE_EDIT) > reação > voto de enquete
    > criação de enquete > mídia / localização / contato > texto

Texto é `link_message` quando contém URL, `emoji_message` quando é
composto apenas de símbolos Unicode, senão `text_message`.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.events import PROTOCOL_MESSAGE_EDIT, PROTOCOL_REVOKE
from app.domain.payloads import EventKind, MessageType

if TYPE_CHECKING:
    from app.domain.events import MediaContent, MessageContent

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"(http|https)://[^\s/$.?#].[^\s]*")

# Joiners, seletores de variação, keycap e tags (bandeiras de subdivisão)
_EMOJI_COMPONENTS = frozenset({"\u200d", "\ufe0e", "\ufe0f", "\u20e3"})
_TAG_RANGE = range(0xE0020, 0xE0080)


@dataclass(frozen=True, slots=True)
class MediaSlot:
    """Campo de mídia do conteúdo e como ele é rotulado no payload."""

    field: str
    kind: str
    message_type: MessageType


# Ordem de precedência entre blocos de mídia
MEDIA_SLOTS: tuple[MediaSlot, ...] = (
    MediaSlot("audio", "audio", MessageType.AUDIO),
    MediaSlot("document", "document", MessageType.DOCUMENT),
    MediaSlot("image", "image", MessageType.IMAGE),
    MediaSlot("sticker", "sticker", MessageType.STICKER),
    MediaSlot("ptv", "videoNote", MessageType.VIDEO_NOTE),
    MediaSlot("video", "video", MessageType.VIDEO),
)

_ANIMATED_STICKER = MediaSlot("video", "sticker", MessageType.STICKER)


@dataclass(frozen=True, slots=True)
class Classification:
    """Tipo do evento de saída e, para `message`, o rótulo de conteúdo."""

    kind: EventKind
    message_type: MessageType | None = None
    media: MediaSlot | None = None


def classify_text(text: str) -> MessageType:
    if URL_PATTERN.search(text):
        return MessageType.LINK
    if is_emoji_only(text):
        return MessageType.EMOJI
    return MessageType.TEXT


def is_emoji_only(text: str) -> bool:
    """True se houver ao menos um símbolo e nada além de símbolos/componentes."""
    has_symbol = False
    for char in text:
        if unicodedata.category(char).startswith("S"):
            has_symbol = True
        elif char in _EMOJI_COMPONENTS or ord(char) in _TAG_RANGE:
            continue
        else:
            return False
    return has_symbol


def first_url(text: str) -> str | None:
    match = URL_PATTERN.search(text)
    return match.group(0) if match else None


def media_slot_for(content: MessageContent) -> tuple[MediaSlot, MediaContent] | None:
    """Primeiro bloco de mídia presente, respeitando a precedência."""
    for slot in MEDIA_SLOTS:
        media = getattr(content, slot.field)
        if media is None:
            continue
        if slot.field == "video" and media.gif_playback:
            return _ANIMATED_STICKER, media
        return slot, media
    return None


def classify_message(content: MessageContent) -> Classification | None:
    """Classifica o conteúdo; None quando o evento deve ser ignorado."""
    if content.protocol is not None:
        if content.protocol.type == PROTOCOL_REVOKE:
            return Classification(EventKind.REVOKE)
        if content.protocol.type == PROTOCOL_MESSAGE_EDIT:
            return Classification(EventKind.EDIT)
        logger.debug(
            "message_skipped",
            extra={"reason": "unsupported_protocol_type", "protocol_type": content.protocol.type},
        )
        return None

    if content.reaction is not None:
        return Classification(EventKind.REACTION)
    if content.poll_update is not None:
        return Classification(EventKind.POLL_VOTE)
    if content.poll_creation is not None:
        return Classification(EventKind.MESSAGE, MessageType.POLL)

    found = media_slot_for(content)
    if found is not None:
        slot, _ = found
        return Classification(EventKind.MESSAGE, slot.message_type, slot)
    if content.location is not None:
        return Classification(EventKind.MESSAGE, MessageType.LOCATION)
    if content.live_location is not None:
        return Classification(EventKind.MESSAGE, MessageType.LIVE_LOCATION)
    if content.contact is not None:
        return Classification(EventKind.MESSAGE, MessageType.CONTACT)

    text = content.text
    if text:
        return Classification(EventKind.MESSAGE, classify_text(text))

    logger.debug("message_skipped", extra={"reason": "empty_message"})
    return None
