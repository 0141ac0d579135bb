"""Registro de builders por tipo de evento originado em `message`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.payloads import EventKind
from app.payload_builders.control import (
    EditPayloadBuilder,
    ReactionPayloadBuilder,
    RevokePayloadBuilder,
)
from app.payload_builders.message import MessagePayloadBuilder
from app.payload_builders.poll_vote import PollVotePayloadBuilder

if TYPE_CHECKING:
    from app.payload_builders.base import BuilderDeps, MessageEventBuilder


def create_message_builders(deps: BuilderDeps) -> dict[EventKind, MessageEventBuilder]:
    """Mapeia cada EventKind de mensagem para o seu builder.

    Args:
        deps: Colaboradores compartilhados

    Returns:
        Dicionário imutável na prática (montado uma vez no bootstrap)
    """
    return {
        EventKind.MESSAGE: MessagePayloadBuilder(deps),
        EventKind.REACTION: ReactionPayloadBuilder(deps),
        EventKind.REVOKE: RevokePayloadBuilder(deps),
        EventKind.EDIT: EditPayloadBuilder(deps),
        EventKind.POLL_VOTE: PollVotePayloadBuilder(deps),
    }
