"""Observabilidade — contexto de rastreamento injetado nos logs.

Uso:
    from app.observability import bind_event_context, get_correlation_id
"""

from app.observability.context import (
    bind_event_context,
    generate_correlation_id,
    get_correlation_id,
    get_device_id,
    reset_event_context,
)

__all__ = [
    "bind_event_context",
    "generate_correlation_id",
    "get_correlation_id",
    "get_device_id",
    "reset_event_context",
]
