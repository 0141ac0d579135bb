"""Builders de payload: evento bruto classificado → payload tipado.

Cada tipo de evento tem seu builder, garantindo SRP e isolamento de falhas:
enriquecimentos que falham viram campos omitidos, nunca exceção.
"""

from app.payload_builders.base import BuilderDeps, MessageEventBuilder
from app.payload_builders.delete import DeleteForMePayloadBuilder
from app.payload_builders.factory import create_message_builders
from app.payload_builders.group import GroupParticipantsPayloadBuilder
from app.payload_builders.receipt import ReceiptPayloadBuilder

__all__ = [
    "BuilderDeps",
    "DeleteForMePayloadBuilder",
    "GroupParticipantsPayloadBuilder",
    "MessageEventBuilder",
    "ReceiptPayloadBuilder",
    "create_message_builders",
]
