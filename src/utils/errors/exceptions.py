"""Exceções de domínio para falhas recuperáveis de infraestrutura."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.infra.webhook.models import DeliveryOutcome


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class BridgeError(InfrastructureError):
    """Falha de comunicação com o bridge do protocolo WhatsApp."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class WebhookDeliveryError(InfrastructureError):
    """Todos os destinos de webhook falharam para um mesmo evento.

    Carrega o resultado individual de cada destino para diagnóstico.
    """

    def __init__(self, event_name: str, outcomes: Sequence[DeliveryOutcome]) -> None:
        self.event_name = event_name
        self.outcomes = tuple(outcomes)
        details = "; ".join(f"{o.endpoint}: {o.detail}" for o in self.outcomes)
        super().__init__(f"all webhook URLs failed for {event_name}: {details}")
