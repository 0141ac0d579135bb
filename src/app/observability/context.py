"""Contexto de rastreamento por evento (correlation_id + device_id).

Cada evento bruto é processado em sua própria task; as ContextVars são
copiadas na criação da task, então o contexto não vaza entre eventos.

Uso:
    from app.observability import bind_event_context, reset_event_context

    tokens = bind_event_context(correlation_id=event_id, device_id=device_id)
    try:
        ...
    finally:
        reset_event_context(tokens)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_device_id: ContextVar[str] = ContextVar("device_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def get_device_id() -> str:
    """Retorna o device_id do contexto atual (vazio se não definido)."""
    return _device_id.get()


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


def bind_event_context(
    correlation_id: str | None = None,
    device_id: str = "",
) -> tuple[Token[str], Token[str]]:
    """Define correlation_id e device_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.
        device_id: Dispositivo de origem do evento.

    Returns:
        Tokens para reset posterior via reset_event_context().
    """
    return (
        _correlation_id.set(correlation_id or generate_correlation_id()),
        _device_id.set(device_id),
    )


def reset_event_context(tokens: tuple[Token[str], Token[str]]) -> None:
    """Restaura correlation_id e device_id aos valores anteriores."""
    correlation_token, device_token = tokens
    _correlation_id.reset(correlation_token)
    _device_id.reset(device_token)
