"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    BridgeError,
    InfrastructureError,
    WebhookDeliveryError,
)

__all__ = [
    "BridgeError",
    "InfrastructureError",
    "WebhookDeliveryError",
]
