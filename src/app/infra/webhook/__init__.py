"""Entrega de webhooks (fan-out, assinatura e agregação de resultados)."""

from app.infra.webhook.dispatcher import SIGNATURE_HEADER, WebhookDispatcher, encode_event
from app.infra.webhook.models import DeliveryOutcome, DispatchReport

__all__ = [
    "SIGNATURE_HEADER",
    "DeliveryOutcome",
    "DispatchReport",
    "WebhookDispatcher",
    "encode_event",
]
