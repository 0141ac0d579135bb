"""Controle de tasks assíncronas para processamento de eventos do bridge."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)


class EventTaskRunner:
    """Agenda uma task por evento com limite de concorrência.

    Uma instância por aplicação (criada no lifespan); o shutdown drena as
    tasks pendentes antes de fechar os clientes HTTP.
    """

    def __init__(self, max_concurrency: int = 100) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._active_tasks: set[asyncio.Task[Any]] = set()

    @property
    def active_count(self) -> int:
        return len(self._active_tasks)

    def schedule(self, *, correlation_id: str, coroutine: Awaitable[None]) -> int:
        """Agenda task assíncrona com limite de concorrência."""
        task = asyncio.create_task(self._run_with_limit(coroutine))
        self._active_tasks.add(task)
        task.add_done_callback(self._on_task_done)
        logger.debug(
            "event_processing_scheduled",
            extra={"correlation_id": correlation_id, "active_tasks": len(self._active_tasks)},
        )
        return len(self._active_tasks)

    async def _run_with_limit(self, coroutine: Awaitable[None]) -> None:
        async with self._semaphore:
            await coroutine

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._active_tasks.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "event_processing_task_failed",
                    extra={
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active_tasks),
                    },
                )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks pendentes durante shutdown do processo."""
        if not self._active_tasks:
            return

        pending_now = list(self._active_tasks)
        logger.info(
            "event_processing_shutdown_wait",
            extra={"pending_tasks": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "event_processing_shutdown_cancelled",
            extra={"cancelled_tasks": len(pending)},
        )
