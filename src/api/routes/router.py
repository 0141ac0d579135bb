"""Agregador de rotas — registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.events.router import router as events_router
from api.routes.health.router import router as health_router
from api.routes.polls.router import router as polls_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Ingestão de eventos do bridge
    api_router.include_router(events_router, tags=["events"])

    # Poll store
    api_router.include_router(polls_router, tags=["polls"])

    return api_router
