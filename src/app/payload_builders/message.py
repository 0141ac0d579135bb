"""Builder do evento `message` (texto, link, emoji, mídia, enquete, ...)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.payloads import (
    LinkPreview,
    LocalMedia,
    MediaAttachment,
    MessagePayload,
    MessageType,
    PollSummary,
    RemoteMedia,
)
from app.infra.whatsapp.media_downloader import media_extension
from app.payload_builders.base import (
    BuilderDeps,
    Identity,
    localize,
    resolve_chat_id,
    resolve_identity,
    safe_lookup,
    substitute_mentions,
)
from app.services.classifier import first_url, media_slot_for

if TYPE_CHECKING:
    from app.domain.events import MessageContent, MessageEvent
    from app.services.classifier import Classification

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Parties:
    chat_id: str
    sender: Identity
    sender_push_name: str | None = None
    receiver_number: str | None = None
    receiver_push_name: str | None = None


class MessagePayloadBuilder:
    """Monta MessagePayload a partir de um evento já classificado."""

    def __init__(self, deps: BuilderDeps) -> None:
        self._deps = deps

    async def build(self, event: MessageEvent, classification: Classification) -> MessagePayload:
        info = event.info
        content = event.message
        parties = await self._parties(event)

        text = content.text or None
        mentions: tuple[str, ...] | None = None
        context_info = content.context_info
        if context_info is not None and context_info.mentioned_jids:
            substituted, numbers = await substitute_mentions(
                self._deps.identity, text or "", context_info.mentioned_jids
            )
            text = substituted or None
            mentions = numbers

        message_type = classification.message_type
        return MessagePayload(
            id=info.id,
            timestamp=localize(info.timestamp, self._deps.timezone),
            chat_id=parties.chat_id,
            sender_id=parties.sender.jid,
            sender_number=parties.sender.number,
            from_me=info.is_from_me,
            message_type=message_type,
            is_group=info.is_group,
            text=text,
            sender_push_name=parties.sender_push_name,
            receiver_number=parties.receiver_number,
            receiver_push_name=parties.receiver_push_name,
            group_name=await self._group_name(event),
            mentions=mentions,
            link_preview=await self._link_preview(content, text) if message_type == MessageType.LINK else None,
            media=await self._media(event) if classification.media is not None else None,
            location=_dump(content.location) if message_type == MessageType.LOCATION else None,
            live_location=_dump(content.live_location) if message_type == MessageType.LIVE_LOCATION else None,
            contact=_dump(content.contact) if message_type == MessageType.CONTACT else None,
            poll=_poll_summary(content) if message_type == MessageType.POLL else None,
            forwarded=True if context_info is not None and context_info.is_forwarded else None,
            view_once=True if event.is_view_once else None,
            message_secret=content.message_secret.hex() if content.message_secret else None,
        )

    async def _parties(self, event: MessageEvent) -> _Parties:
        """Remetente e destinatário conforme a direção da mensagem."""
        info = event.info
        identity = self._deps.identity
        me = await safe_lookup(self._deps.client.get_self(), "self")

        if info.is_from_me:
            sender = await resolve_identity(identity, me.jid if me and me.jid else info.sender)
            receiver_number = None
            receiver_push_name = None
            if not info.is_group:
                receiver = await resolve_identity(identity, info.chat)
                receiver_number = receiver.number
                contact = await safe_lookup(self._deps.client.get_contact(receiver.jid), "contact")
                if contact is not None and contact.found:
                    receiver_push_name = contact.push_name or None
            sender_push_name = me.push_name if me and me.push_name else None
        else:
            sender = await resolve_identity(identity, info.sender)
            sender_push_name = info.push_name or None
            receiver_number = (await resolve_identity(identity, me.jid)).number if me and me.jid else None
            receiver_push_name = me.push_name if me and me.push_name else None

        return _Parties(
            chat_id=await resolve_chat_id(identity, info.chat, is_group=info.is_group),
            sender=sender,
            sender_push_name=sender_push_name,
            receiver_number=receiver_number,
            receiver_push_name=receiver_push_name,
        )

    async def _group_name(self, event: MessageEvent) -> str | None:
        if not event.info.is_group:
            return None
        group = await safe_lookup(self._deps.client.get_group_info(event.info.chat), "group_info")
        if group is None or not group.name:
            return None
        return group.name

    async def _link_preview(self, content: MessageContent, text: str | None) -> LinkPreview | None:
        url = first_url(text or "")
        extended = content.extended_text
        if extended is not None and (extended.title or extended.description):
            return LinkPreview(
                url=extended.matched_text or url or "",
                title=extended.title or None,
                description=extended.description or None,
            )
        if url is None or self._deps.link_preview is None:
            return None
        return await self._deps.link_preview.fetch(url)

    async def _media(self, event: MessageEvent) -> MediaAttachment | None:
        found = media_slot_for(event.message)
        if found is None:
            return None
        slot, media = found

        location: LocalMedia | RemoteMedia | None = None
        downloader = self._deps.media_downloader
        if downloader is not None:
            result = await downloader.download(message_id=event.info.id, kind=slot.kind, media=media)
            if result.path:
                location = LocalMedia(path=result.path)
        elif media.url:
            location = RemoteMedia(url=media.url)

        return MediaAttachment(
            kind=slot.kind,
            mimetype=media.mimetype,
            extension=media_extension(slot.kind, media),
            caption=media.caption,
            file_name=media.file_name,
            location=location,
        )


def _dump(model: Any) -> dict[str, Any] | None:
    return model.model_dump() if model is not None else None


def _poll_summary(content: MessageContent) -> PollSummary | None:
    poll = content.poll_creation
    if poll is None:
        return None
    return PollSummary(
        question=poll.name,
        options=tuple(poll.options),
        selectable_options_count=poll.selectable_options_count,
    )
