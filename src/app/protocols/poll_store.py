"""Protocolo de domínio para o store de enquetes."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.polls import PollRecord


class PollStoreProtocol(ABC):
    """Contrato do store de enquetes (métodos síncronos + aput).

    - put(message_id, record): substitui o registro e persiste o conjunto
    - get(message_id): retorna o registro ou None
    - aput(message_id, record): put em worker thread, para uso em código async
    """

    @abstractmethod
    def put(self, message_id: str, record: PollRecord) -> None:
        """Substitui o registro sob a chave e persiste (best-effort)."""

    @abstractmethod
    def get(self, message_id: str) -> PollRecord | None:
        """Retorna o registro da enquete, se existir."""

    async def aput(self, message_id: str, record: PollRecord) -> None:
        """put fora do event loop (a persistência faz IO de arquivo)."""
        await asyncio.to_thread(self.put, message_id, record)
