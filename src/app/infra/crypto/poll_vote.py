"""Descriptografia local de votos de enquete (caminho de fallback).

Algoritmo:
    1. chave = HKDF-SHA256(secret da enquete, salt=None,
       info="WhatsApp Poll Encryption", 32 bytes)
    2. AES-256-GCM com o IV do voto, testando candidatos de AAD em ordem
    3. plaintext = concatenação de SHA-256 das opções escolhidas

Os candidatos de AAD não são documentados pelo protocolo; a ordem abaixo é
a que observamos funcionar e deve ser mantida.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from .constants import OPTION_HASH_SIZE, POLL_VOTE_HKDF_INFO, POLL_VOTE_KEY_SIZE
from .errors import PollDecryptionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VoteContext:
    """Identificadores disponíveis para montar o AAD."""

    poll_message_id: str
    voter_jid: str
    vote_message_id: str


@dataclass(frozen=True, slots=True)
class AadCandidate:
    name: str
    build: Callable[[VoteContext], bytes | None]


AAD_CANDIDATES: tuple[AadCandidate, ...] = (
    AadCandidate("poll_message_id", lambda ctx: ctx.poll_message_id.encode()),
    AadCandidate("voter_jid", lambda ctx: ctx.voter_jid.encode()),
    AadCandidate("vote_message_id", lambda ctx: ctx.vote_message_id.encode()),
    AadCandidate(
        "poll_message_id+voter_jid",
        lambda ctx: (ctx.poll_message_id + ctx.voter_jid).encode(),
    ),
    AadCandidate("empty", lambda ctx: None),
)


def derive_vote_key(secret: bytes) -> bytes:
    """Deriva a chave AES-256 do secret da enquete."""
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=POLL_VOTE_KEY_SIZE,
        salt=None,
        info=POLL_VOTE_HKDF_INFO,
    )
    return hkdf.derive(secret)


def decrypt_vote_payload(
    secret: bytes,
    ciphertext: bytes,
    iv: bytes,
    context: VoteContext,
    candidates: Sequence[AadCandidate] = AAD_CANDIDATES,
) -> tuple[bytes, str]:
    """Tenta cada candidato de AAD; o primeiro que autentica vence.

    Returns:
        (plaintext, nome do candidato usado)

    Raises:
        PollDecryptionError: Se nenhum candidato autenticar (ou entrada inválida)
    """
    if not secret:
        raise PollDecryptionError("poll secret is empty")
    if not iv:
        raise PollDecryptionError("vote iv is empty")

    aesgcm = AESGCM(derive_vote_key(secret))
    attempted: list[str] = []
    for candidate in candidates:
        attempted.append(candidate.name)
        try:
            plaintext = aesgcm.decrypt(iv, ciphertext, candidate.build(context))
        except InvalidTag:
            logger.debug(
                "poll_vote_aad_candidate_failed",
                extra={"aad_candidate": candidate.name, "poll_id": context.poll_message_id},
            )
            continue
        except ValueError as exc:
            # IV de tamanho inválido etc.: nenhum outro candidato vai passar
            raise PollDecryptionError(
                f"invalid vote ciphertext: {exc}", attempted=tuple(attempted)
            ) from exc
        return plaintext, candidate.name

    raise PollDecryptionError(
        "no AAD candidate authenticated the vote", attempted=tuple(attempted)
    )


def split_option_hashes(plaintext: bytes) -> list[bytes]:
    """Divide em blocos de 32 bytes; bloco final parcial é descartado."""
    count = len(plaintext) // OPTION_HASH_SIZE
    return [
        plaintext[index * OPTION_HASH_SIZE:(index + 1) * OPTION_HASH_SIZE]
        for index in range(count)
    ]


def option_hash(option: str) -> bytes:
    return hashlib.sha256(option.encode("utf-8")).digest()


def match_options(hashes_: Iterable[bytes], options: Iterable[str]) -> list[str]:
    """Mapeia hashes para opções; hashes sem correspondência são ignorados."""
    by_hash = {option_hash(option): option for option in options}
    return [by_hash[item] for item in hashes_ if item in by_hash]
