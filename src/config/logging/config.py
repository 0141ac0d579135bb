"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização do serviço (app/bootstrap/)
    configure_logging(level="INFO", service_name="zap_relay")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("webhook_forwarded", extra={"succeeded": 2})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import EventContextFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "zap_relay"

# Bibliotecas ruidosas em DEBUG
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    device_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização do serviço.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Retorna o correlation_id do contexto atual.
        device_id_getter: Retorna o device_id do contexto atual.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(
        EventContextFilter(service_name, correlation_id_getter, device_id_getter)
    )

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado.

    O filter injeta automaticamente service, correlation_id e device_id.
    """
    return logging.getLogger(name)


def log_degraded(
    logger: logging.Logger,
    component: str,
    reason: str,
    **context: object,
) -> None:
    """Log observável de degradação graciosa (sem PII).

    Usado quando um enriquecimento falha e o evento segue com campo omitido
    ou placeholder (ex.: voto não decifrável, preview indisponível).

    Exemplo:
        log_degraded(logger, "poll_vote", reason="poll_secret_missing")
    """
    extra: dict[str, object] = {
        "degraded": True,
        "component": component,
        "reason": reason,
        **context,
    }
    logger.info("Degraded result for %s", component, extra=extra)
