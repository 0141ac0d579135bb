"""Builders de reação, revogação (REVOKE) e edição (MESSAGE_EDIT)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.payloads import EditPayload, ReactionPayload, RevokePayload
from app.payload_builders.base import (
    BuilderDeps,
    localize,
    resolve_chat_id,
    resolve_identity,
)

if TYPE_CHECKING:
    from app.domain.events import MessageEvent
    from app.services.classifier import Classification


class _ControlBuilder:
    def __init__(self, deps: BuilderDeps) -> None:
        self._deps = deps

    async def _common(self, event: MessageEvent) -> dict[str, object]:
        info = event.info
        sender = await resolve_identity(self._deps.identity, info.sender)
        chat_id = await resolve_chat_id(self._deps.identity, info.chat, is_group=info.is_group)
        return {
            "id": info.id,
            "timestamp": localize(info.timestamp, self._deps.timezone),
            "chat_id": chat_id,
            "sender_id": sender.jid,
            "sender_number": sender.number,
            "from_me": info.is_from_me,
        }


class ReactionPayloadBuilder(_ControlBuilder):
    """Reação vazia significa reação removida."""

    async def build(self, event: MessageEvent, classification: Classification) -> ReactionPayload:
        reaction = event.message.reaction
        if reaction is None:
            raise ValueError("message has no reaction")
        return ReactionPayload(
            **await self._common(event),
            reacted_message_id=reaction.key.id,
            emoji=reaction.text,
            removed=not reaction.text,
        )


class RevokePayloadBuilder(_ControlBuilder):
    async def build(self, event: MessageEvent, classification: Classification) -> RevokePayload:
        protocol = event.message.protocol
        if protocol is None:
            raise ValueError("message has no protocol block")
        return RevokePayload(**await self._common(event), revoked_message_id=protocol.key.id)


class EditPayloadBuilder(_ControlBuilder):
    async def build(self, event: MessageEvent, classification: Classification) -> EditPayload:
        protocol = event.message.protocol
        if protocol is None:
            raise ValueError("message has no protocol block")
        edited = protocol.edited_message
        return EditPayload(
            **await self._common(event),
            edited_message_id=protocol.key.id,
            text=(edited.text or None) if edited is not None else None,
        )
