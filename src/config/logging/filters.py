"""Filters de logging para injeção de contexto.

Campos injetados:
- correlation_id: ID de rastreamento do evento em processamento
- device_id: dispositivo WhatsApp de origem do evento
- service: Nome do serviço (ex: zap_relay)

Nunca adicionar payloads brutos, números de telefone ou texto de mensagens.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def _empty() -> str:
    return ""


class EventContextFilter(logging.Filter):
    """Injeta correlation_id, device_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
        device_id_getter: Função que retorna o device_id atual.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        device_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or _empty
        self._get_device_id = device_id_getter or _empty

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; valores passados via `extra` são preservados.

        Returns:
            True sempre (não filtra, apenas enriquece).
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        device_id = getattr(record, "device_id", None)
        record.device_id = device_id if device_id else self._get_device_id()
        record.service = self._service_name
        return True
