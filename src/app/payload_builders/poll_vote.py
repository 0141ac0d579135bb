"""Builder do evento `message.poll_vote`.

Voto não decifrável ainda é entregue: `status="undecryptable"`, motivo e
`selected_options` ausente no lugar das opções.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.payloads import PollSummary, PollVotePayload
from app.payload_builders.base import (
    BuilderDeps,
    localize,
    resolve_chat_id,
    resolve_identity,
)

if TYPE_CHECKING:
    from app.domain.events import MessageEvent
    from app.services.classifier import Classification


class PollVotePayloadBuilder:
    def __init__(self, deps: BuilderDeps) -> None:
        self._deps = deps

    async def build(self, event: MessageEvent, classification: Classification) -> PollVotePayload:
        info = event.info
        poll_update = event.message.poll_update
        if poll_update is None:
            raise ValueError("message has no poll update")

        result = await self._deps.poll_votes.decrypt(event)
        voter = await resolve_identity(self._deps.identity, info.sender)
        poll = None
        if result.poll is not None:
            poll = PollSummary(question=result.poll.question, options=result.poll.options)

        return PollVotePayload(
            id=info.id,
            timestamp=localize(info.timestamp, self._deps.timezone),
            chat_id=await resolve_chat_id(self._deps.identity, info.chat, is_group=info.is_group),
            sender_id=voter.jid,
            sender_number=voter.number,
            from_me=info.is_from_me,
            poll_message_id=poll_update.poll_creation_message_key.id,
            status=result.status,
            selected_options=result.selected_options,
            selected_option_hashes=tuple(item.hex() for item in result.option_hashes),
            decryption_method=result.method,
            aad_candidate=result.aad_candidate,
            reason=result.reason,
            poll=poll,
            encrypted_payload=poll_update.vote.enc_payload.hex(),
            encrypted_iv=poll_update.vote.enc_iv.hex(),
        )
