"""Entrypoint da aplicação zap-relay.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.events.tasks import EventTaskRunner
from app.bootstrap import build_container, initialize_app, validate_runtime_settings
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable

    from app.bootstrap import RelayContainer

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

SHUTDOWN_DRAIN_SECONDS = 30.0


def _lifespan_factory(
    container_factory: Callable[[], RelayContainer],
) -> Callable[[FastAPI], AsyncGenerator[None, None]]:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Gerencia ciclo de vida da aplicação.

        Startup:
        - Valida configurações
        - Monta o container (store, bridge, dispatcher)

        Shutdown:
        - Drena tasks de eventos pendentes
        - Fecha clientes HTTP
        """
        logger.info("app_starting")
        validate_runtime_settings()
        container = container_factory()
        app.state.container = container
        app.state.task_runner = EventTaskRunner(container.max_concurrent_events)

        yield

        logger.info("app_shutting_down")
        await app.state.task_runner.drain(timeout_seconds=SHUTDOWN_DRAIN_SECONDS)
        await container.aclose()

    return lifespan


def create_app(container_factory: Callable[[], RelayContainer] | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        container_factory: Fábrica do container (testes injetam fakes)

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="zap-relay",
        description="Normalização de eventos WhatsApp e entrega via webhook",
        version="1.0.0",
        lifespan=_lifespan_factory(container_factory or build_container),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured")

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting zap-relay in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
