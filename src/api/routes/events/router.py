"""Endpoint de ingestão de eventos brutos do bridge.

Endpoints:
- POST /events/{device_id}: recebe um evento, agenda o processamento

Resposta rápida (202) e processamento em task própria; corpo inválido
retorna 422 sem agendar nada.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api.routes.events.processing import process_event_safe
from app.domain.events import parse_raw_event
from app.observability import generate_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter()

CORRELATION_HEADER = "X-Correlation-ID"


@router.post("/events/{device_id}", status_code=status.HTTP_202_ACCEPTED)
async def receive_event(device_id: str, request: Request) -> JSONResponse:
    """Valida o evento bruto e agenda o processamento."""
    correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()

    try:
        body = json.loads(await request.body())
        event = parse_raw_event(body)
    except json.JSONDecodeError:
        logger.warning("event_rejected", extra={"reason": "invalid_json", "correlation_id": correlation_id})
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": "invalid JSON body"},
        )
    except ValidationError as exc:
        logger.warning(
            "event_rejected",
            extra={"reason": "invalid_event", "correlation_id": correlation_id, "error_count": exc.error_count()},
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": json.loads(exc.json(include_url=False, include_input=False))},
        )

    container = request.app.state.container
    request.app.state.task_runner.schedule(
        correlation_id=correlation_id,
        coroutine=process_event_safe(
            router=container.router,
            device_id=device_id,
            event=event,
            correlation_id=correlation_id,
        ),
    )
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content={"status": "accepted", "correlation_id": correlation_id},
    )
