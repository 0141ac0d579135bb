"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="zap_relay")

    logger = get_logger(__name__)
    logger.info("webhook_forwarded", extra={"succeeded": 2})

Campos obrigatórios em todo log:
- correlation_id
- device_id
- service
- level
- logger
- message
- asctime
"""

from config.logging.config import configure_logging, get_logger, log_degraded
from config.logging.filters import EventContextFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "EventContextFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_degraded",
]
