"""Execução de um evento dentro da sua task (contexto de log + erros)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import bind_event_context, reset_event_context
from utils.errors import InfrastructureError, WebhookDeliveryError

if TYPE_CHECKING:
    from app.domain.events import RawEvent
    from app.services.event_router import EventRouter

logger = logging.getLogger(__name__)


async def process_event_safe(
    *,
    router: EventRouter,
    device_id: str,
    event: RawEvent,
    correlation_id: str,
) -> None:
    """Processa um evento; falhas de entrega são logadas e não propagam.

    Erros inesperados sobem para o callback da task (log com error_type).
    """
    tokens = bind_event_context(correlation_id=correlation_id, device_id=device_id)
    try:
        reports = await router.handle(device_id, event)
        logger.debug(
            "event_processed",
            extra={"event_type": event.type, "deliveries": len(reports)},
        )
    except WebhookDeliveryError as exc:
        logger.error(
            "event_delivery_failed",
            extra={"event_name": exc.event_name, "failed": len(exc.outcomes)},
        )
    except InfrastructureError as exc:
        logger.error(
            "event_processing_failed",
            extra={"event_type": event.type, "error_type": type(exc).__name__},
        )
    finally:
        reset_event_context(tokens)
