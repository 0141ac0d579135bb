"""Builder do evento `message.deleted_for_me`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.jid import non_ad
from app.domain.payloads import DeleteForMePayload, OriginalMessage
from app.payload_builders.base import BuilderDeps, localize, resolve_identity, safe_lookup

if TYPE_CHECKING:
    from app.domain.events import DeleteForMeEvent
    from app.protocols.models import StoredMessage


def _original(stored: StoredMessage) -> OriginalMessage:
    return OriginalMessage(
        content=stored.content or None,
        sender=stored.sender or None,
        timestamp=stored.timestamp,
        from_me=stored.is_from_me,
        media_type=stored.media_type or None,
        file_name=(stored.filename or None) if stored.media_type else None,
    )


class DeleteForMePayloadBuilder:
    """Nome do remetente via contato; mensagem original via chat storage."""

    def __init__(self, deps: BuilderDeps) -> None:
        self._deps = deps

    async def build(self, event: DeleteForMeEvent) -> DeleteForMePayload:
        sender = await resolve_identity(self._deps.identity, event.sender)

        sender_name = None
        contact = await safe_lookup(self._deps.client.get_contact(non_ad(event.sender)), "contact")
        if contact is not None and contact.found:
            sender_name = contact.display_name or None

        original = None
        if self._deps.chat_storage is not None:
            stored = await safe_lookup(
                self._deps.chat_storage.get_message_by_id(event.message_id), "stored_message"
            )
            if stored is not None:
                original = _original(stored)

        return DeleteForMePayload(
            id=event.message_id,
            timestamp=localize(event.timestamp, self._deps.timezone),
            chat_id=non_ad(event.chat),
            sender_id=sender.jid,
            sender_number=sender.number,
            from_me=event.is_from_me,
            sender_name=sender_name,
            original=original,
        )
