"""Assinatura HMAC-SHA256 para webhooks de saída."""

from __future__ import annotations

import hashlib
import hmac

from .constants import SIGNATURE_PREFIX


def sign_payload(payload: bytes, secret: bytes) -> str:
    """Gera valor do header X-Hub-Signature-256 (`sha256=<hex>`)."""
    return SIGNATURE_PREFIX + hmac.new(secret, payload, hashlib.sha256).hexdigest()


def validate_signature(payload: bytes, signature: str, secret: bytes) -> bool:
    """Valida assinatura HMAC-SHA256 no formato `sha256=<hex>`.

    Args:
        payload: Corpo bruto da requisição
        signature: Header X-Hub-Signature-256
        secret: Secret compartilhado em bytes

    Returns:
        True se assinatura válida
    """
    if not signature.startswith(SIGNATURE_PREFIX):
        return False

    expected = signature[len(SIGNATURE_PREFIX):]
    computed = hmac.new(secret, payload, hashlib.sha256).hexdigest()
    return hmac.compare_digest(computed, expected)
