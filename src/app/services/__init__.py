"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.classifier import Classification, classify_message, classify_text
from app.services.event_router import EventRouter
from app.services.identity import IdentityNormalizer
from app.services.poll_votes import PollVoteDecryptor, PollVoteResult
from app.services.receipt_debouncer import ReceiptDebouncer

__all__ = [
    "Classification",
    "EventRouter",
    "IdentityNormalizer",
    "PollVoteDecryptor",
    "PollVoteResult",
    "ReceiptDebouncer",
    "classify_message",
    "classify_text",
]
