"""Builder do evento `group.participants` (uma entrega por ação)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.jid import non_ad
from app.domain.payloads import GroupParticipantsPayload
from app.payload_builders.base import BuilderDeps, localize, resolve_identity

if TYPE_CHECKING:
    from app.domain.events import GroupInfoEvent

GROUP_ACTIONS = ("join", "leave", "promote", "demote")


class GroupParticipantsPayloadBuilder:
    def __init__(self, deps: BuilderDeps) -> None:
        self._deps = deps

    async def build(self, event: GroupInfoEvent) -> list[GroupParticipantsPayload]:
        """Um payload por ação não vazia, na ordem join/leave/promote/demote."""
        identity = self._deps.identity
        chat_id = non_ad(event.jid)
        timestamp = localize(event.timestamp, self._deps.timezone)
        sender = await resolve_identity(identity, event.sender) if event.sender else None

        payloads: list[GroupParticipantsPayload] = []
        for action in GROUP_ACTIONS:
            jids: list[str] = getattr(event, action)
            if not jids:
                continue
            participants = tuple([(await resolve_identity(identity, jid)).jid for jid in jids])
            payloads.append(
                GroupParticipantsPayload(
                    id=f"{chat_id}:{action}:{int(timestamp.timestamp())}",
                    timestamp=timestamp,
                    chat_id=chat_id,
                    action=action,
                    participants=participants,
                    sender_id=sender.jid if sender else None,
                    sender_number=sender.number if sender else None,
                )
            )
        return payloads
