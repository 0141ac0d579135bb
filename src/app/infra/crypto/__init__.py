"""Módulo de criptografia.

- poll_vote: descriptografia local de votos de enquete (HKDF + AES-GCM)
- signature: assinatura HMAC-SHA256 dos webhooks de saída

Localizado em app/infra/ para manter boundaries corretas: app/ não importa
de api/ (exceto via bootstrap).
"""

from .constants import POLL_VOTE_HKDF_INFO
from .errors import PollDecryptionError
from .poll_vote import (
    AAD_CANDIDATES,
    AadCandidate,
    VoteContext,
    decrypt_vote_payload,
    derive_vote_key,
    match_options,
    option_hash,
    split_option_hashes,
)
from .signature import sign_payload, validate_signature

__all__ = [
    "AAD_CANDIDATES",
    "POLL_VOTE_HKDF_INFO",
    "AadCandidate",
    "PollDecryptionError",
    "VoteContext",
    "decrypt_vote_payload",
    "derive_vote_key",
    "match_options",
    "option_hash",
    "sign_payload",
    "split_option_hashes",
    "validate_signature",
]
