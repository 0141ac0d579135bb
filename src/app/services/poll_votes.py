"""Decifragem de votos de enquete com fallback local.

Fluxo:
    1. Biblioteca do cliente (`decrypt_poll_vote`): lista não vazia é usada
    2. Fallback: secret da enquete (poll store, depois chat storage)
       + HKDF/AES-GCM com candidatos de AAD
    3. Hashes de 32 bytes mapeados para o texto das opções

Qualquer falha vira resultado `undecryptable` com motivo; nada propaga.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.polls import PollRecord
from app.infra.crypto.errors import PollDecryptionError
from app.infra.crypto.poll_vote import (
    VoteContext,
    decrypt_vote_payload,
    match_options,
    split_option_hashes,
)
from config.logging import log_degraded

if TYPE_CHECKING:
    from app.domain.events import MessageEvent
    from app.protocols.chat_storage import ChatStorageProtocol
    from app.protocols.poll_store import PollStoreProtocol
    from app.protocols.protocol_client import ProtocolClientProtocol

logger = logging.getLogger(__name__)

STATUS_DECRYPTED = "decrypted"
STATUS_UNDECRYPTABLE = "undecryptable"
METHOD_LIBRARY = "library"
METHOD_FALLBACK = "fallback"

REASON_NOT_A_VOTE = "not_a_poll_vote"
REASON_SECRET_MISSING = "poll_secret_missing"
REASON_AUTH_FAILED = "authentication_failed"
REASON_OPTIONS_UNKNOWN = "poll_options_unknown"


@dataclass(frozen=True, slots=True)
class PollVoteResult:
    """Resultado da decifragem de um voto (sempre um valor, nunca exceção).

    Attributes:
        status: decrypted | undecryptable
        poll_message_id: ID da mensagem de criação da enquete
        method: library | fallback (None quando não decifrado)
        aad_candidate: Nome do candidato de AAD que autenticou (fallback)
        option_hashes: Hashes SHA-256 das opções escolhidas
        selected_options: Texto das opções (None quando não decifrado)
        reason: Motivo de degradação, quando houver
        poll: Registro da enquete, quando conhecido
    """

    status: str
    poll_message_id: str
    method: str | None = None
    aad_candidate: str | None = None
    option_hashes: tuple[bytes, ...] = ()
    selected_options: tuple[str, ...] | None = None
    reason: str | None = None
    poll: PollRecord | None = None

    @property
    def decrypted(self) -> bool:
        return self.status == STATUS_DECRYPTED


class PollVoteDecryptor:
    """Decifra votos de enquete (biblioteca primeiro, fallback local depois)."""

    def __init__(
        self,
        *,
        client: ProtocolClientProtocol,
        poll_store: PollStoreProtocol,
        chat_storage: ChatStorageProtocol | None = None,
    ) -> None:
        self._client = client
        self._poll_store = poll_store
        self._chat_storage = chat_storage

    async def decrypt(self, event: MessageEvent) -> PollVoteResult:
        poll_update = event.message.poll_update
        if poll_update is None:
            return PollVoteResult(status=STATUS_UNDECRYPTABLE, poll_message_id="", reason=REASON_NOT_A_VOTE)

        poll_id = poll_update.poll_creation_message_key.id
        record = await self.find_poll(poll_id)

        hashes = await self._decrypt_with_library(event)
        if hashes:
            return _decrypted(poll_id, METHOD_LIBRARY, None, hashes, record)

        if record is None or not record.enc_key:
            log_degraded(logger, "poll_vote", reason=REASON_SECRET_MISSING, poll_id=poll_id)
            return PollVoteResult(
                status=STATUS_UNDECRYPTABLE,
                poll_message_id=poll_id,
                reason=REASON_SECRET_MISSING,
                poll=record,
            )

        context = VoteContext(
            poll_message_id=poll_id,
            voter_jid=event.info.sender,
            vote_message_id=event.info.id,
        )
        try:
            plaintext, candidate = decrypt_vote_payload(
                record.enc_key,
                poll_update.vote.enc_payload,
                poll_update.vote.enc_iv,
                context,
            )
        except PollDecryptionError as exc:
            log_degraded(
                logger,
                "poll_vote",
                reason=REASON_AUTH_FAILED,
                poll_id=poll_id,
                attempted=len(exc.attempted),
            )
            return PollVoteResult(
                status=STATUS_UNDECRYPTABLE,
                poll_message_id=poll_id,
                method=METHOD_FALLBACK,
                reason=REASON_AUTH_FAILED,
                poll=record,
            )

        logger.info("poll_vote_fallback_decrypted", extra={"poll_id": poll_id, "aad_candidate": candidate})
        return _decrypted(poll_id, METHOD_FALLBACK, candidate, split_option_hashes(plaintext), record)

    async def find_poll(self, poll_id: str) -> PollRecord | None:
        """Registro da enquete: poll store primeiro, chat storage depois."""
        if not poll_id:
            return None
        record = self._poll_store.get(poll_id)
        if record is not None:
            return record
        if self._chat_storage is None:
            return None

        try:
            stored = await self._chat_storage.get_message_by_id(poll_id)
        except Exception as exc:
            logger.warning(
                "poll_chat_storage_lookup_failed",
                extra={"poll_id": poll_id, "error_type": type(exc).__name__},
            )
            return None
        if stored is None:
            return None

        try:
            secret = bytes.fromhex(stored.poll_message_secret)
        except ValueError:
            logger.warning("poll_secret_invalid_hex", extra={"poll_id": poll_id})
            secret = b""
        return PollRecord(
            message_id=poll_id,
            question=stored.poll_title,
            options=tuple(stored.poll_options),
            enc_key=secret,
        )

    async def _decrypt_with_library(self, event: MessageEvent) -> list[bytes]:
        try:
            return list(await self._client.decrypt_poll_vote(event))
        except Exception as exc:
            logger.warning(
                "poll_vote_library_decrypt_failed",
                extra={"error_type": type(exc).__name__},
            )
            return []


def _decrypted(
    poll_id: str,
    method: str,
    candidate: str | None,
    hashes: list[bytes],
    record: PollRecord | None,
) -> PollVoteResult:
    if record is None or not record.options:
        log_degraded(logger, "poll_vote", reason=REASON_OPTIONS_UNKNOWN, poll_id=poll_id)
        selected: tuple[str, ...] = ()
        reason: str | None = REASON_OPTIONS_UNKNOWN
    else:
        selected = tuple(match_options(hashes, record.options))
        reason = None
    return PollVoteResult(
        status=STATUS_DECRYPTED,
        poll_message_id=poll_id,
        method=method,
        aad_candidate=candidate,
        option_hashes=tuple(hashes),
        selected_options=selected,
        reason=reason,
        poll=record,
    )
