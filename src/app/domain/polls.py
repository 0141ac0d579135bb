"""Metadados de enquete enviada (pergunta, opções e segredo)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PollRecord:
    """Registro imutável de uma enquete criada por este dispositivo.

    Attributes:
        message_id: ID da mensagem de criação da enquete (chave única)
        question: Texto da pergunta
        options: Opções na ordem original (sem duplicatas)
        enc_key: Segredo da mensagem (message secret) usado nos votos
    """

    message_id: str
    question: str
    options: tuple[str, ...]
    enc_key: bytes
