"""Endpoints de health check."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

router = APIRouter()

SERVICE_NAME = "zap-relay"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: container montado e destinos configurados."""
    container = getattr(request.app.state, "container", None)
    pipeline = _check_pipeline(container)
    webhooks = _check_webhooks(container)
    ready = pipeline.status == "ok"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "pipeline": pipeline.as_dict(),
            "webhooks": webhooks.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_pipeline(container: Any | None) -> DependencyCheck:
    if container is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    # Leitura sob o read lock do store
    container.poll_store.get("__readiness__")
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


def _check_webhooks(container: Any | None) -> DependencyCheck:
    if container is None:
        return DependencyCheck(status="failed", error="not_configured")
    if not container.dispatcher.urls:
        return DependencyCheck(status="degraded", error="no_destinations")
    return DependencyCheck(status="ok")
