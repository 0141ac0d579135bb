"""Registro de enquetes enviadas (secret para decifrar votos futuros).

Endpoints:
- PUT /polls/{message_id}: grava/substitui o registro no poll store
- GET /polls/{message_id}: consulta pergunta e opções (sem o secret)
"""

from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field, field_validator

from app.domain.polls import PollRecord

logger = logging.getLogger(__name__)

router = APIRouter()


class PollRegistration(BaseModel):
    """Corpo do PUT: enc_key em base64."""

    question: str = Field(..., min_length=1)
    options: list[str] = Field(..., min_length=1)
    enc_key: str = Field(..., min_length=1)

    @field_validator("options")
    @classmethod
    def validate_unique_options(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("options devem ser únicas")
        return value

    @field_validator("enc_key")
    @classmethod
    def validate_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except (ValueError, binascii.Error) as exc:
            raise ValueError("enc_key deve estar em base64") from exc
        return value


class PollView(BaseModel):
    message_id: str
    question: str
    options: list[str]


@router.put("/polls/{message_id}", response_model=PollView)
async def register_poll(message_id: str, body: PollRegistration, request: Request) -> PollView:
    """Grava o registro (substitui inteiro se já existir)."""
    record = PollRecord(
        message_id=message_id,
        question=body.question,
        options=tuple(body.options),
        enc_key=base64.b64decode(body.enc_key),
    )
    await request.app.state.container.poll_store.aput(message_id, record)
    logger.info("poll_registered", extra={"poll_id": message_id, "options": len(record.options)})
    return PollView(message_id=message_id, question=record.question, options=list(record.options))


@router.get("/polls/{message_id}", response_model=PollView)
async def get_poll(message_id: str, request: Request) -> PollView:
    record = request.app.state.container.poll_store.get(message_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="poll not found")
    return PollView(message_id=message_id, question=record.question, options=list(record.options))
