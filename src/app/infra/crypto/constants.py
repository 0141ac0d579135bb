"""Constantes criptográficas para votos de enquete do WhatsApp."""

POLL_VOTE_HKDF_INFO = b"WhatsApp Poll Encryption"
POLL_VOTE_KEY_SIZE = 32  # AES-256
OPTION_HASH_SIZE = 32  # SHA-256 por opção
SIGNATURE_PREFIX = "sha256="
