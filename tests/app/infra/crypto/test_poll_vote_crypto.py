"""Testes da decifragem local de votos (HKDF + AES-GCM + candidatos de AAD)."""

from __future__ import annotations

import hashlib

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from app.infra.crypto import (
    AAD_CANDIDATES,
    PollDecryptionError,
    VoteContext,
    decrypt_vote_payload,
    derive_vote_key,
    match_options,
    option_hash,
    split_option_hashes,
)

SECRET = bytes(range(32))
IV = b"\x07" * 12
CONTEXT = VoteContext(
    poll_message_id="3EB0POLL",
    voter_jid="5511988887777@s.whatsapp.net",
    vote_message_id="3EB0VOTE",
)


def _encrypt(options: list[str], aad: bytes | None, secret: bytes = SECRET) -> bytes:
    plaintext = b"".join(hashlib.sha256(option.encode()).digest() for option in options)
    return AESGCM(derive_vote_key(secret)).encrypt(IV, plaintext, aad)


class TestDeriveVoteKey:
    def test_key_is_deterministic_and_32_bytes(self) -> None:
        key = derive_vote_key(SECRET)
        assert len(key) == 32
        assert key == derive_vote_key(SECRET)
        assert key != SECRET

    def test_different_secrets_give_different_keys(self) -> None:
        assert derive_vote_key(SECRET) != derive_vote_key(b"\x00" * 32)


class TestDecryptVotePayload:
    def test_candidate_order(self) -> None:
        assert [candidate.name for candidate in AAD_CANDIDATES] == [
            "poll_message_id",
            "voter_jid",
            "vote_message_id",
            "poll_message_id+voter_jid",
            "empty",
        ]

    def test_poll_id_aad_decrypts_selected_option(self) -> None:
        ciphertext = _encrypt(["Blue"], b"3EB0POLL")

        plaintext, candidate = decrypt_vote_payload(SECRET, ciphertext, IV, CONTEXT)

        assert candidate == "poll_message_id"
        assert match_options(split_option_hashes(plaintext), ["Red", "Blue"]) == ["Blue"]

    @pytest.mark.parametrize(
        ("aad", "expected"),
        [
            (b"5511988887777@s.whatsapp.net", "voter_jid"),
            (b"3EB0VOTE", "vote_message_id"),
            (b"3EB0POLL5511988887777@s.whatsapp.net", "poll_message_id+voter_jid"),
            (None, "empty"),
        ],
    )
    def test_later_candidates_are_tried(self, aad: bytes | None, expected: str) -> None:
        ciphertext = _encrypt(["Red", "Blue"], aad)
        plaintext, candidate = decrypt_vote_payload(SECRET, ciphertext, IV, CONTEXT)
        assert candidate == expected
        assert len(split_option_hashes(plaintext)) == 2

    def test_bit_flip_fails_every_candidate(self) -> None:
        ciphertext = bytearray(_encrypt(["Blue"], b"3EB0POLL"))
        ciphertext[0] ^= 0x01

        with pytest.raises(PollDecryptionError) as exc_info:
            decrypt_vote_payload(SECRET, bytes(ciphertext), IV, CONTEXT)

        assert exc_info.value.attempted == tuple(c.name for c in AAD_CANDIDATES)

    def test_wrong_secret_fails(self) -> None:
        ciphertext = _encrypt(["Blue"], b"3EB0POLL")
        with pytest.raises(PollDecryptionError):
            decrypt_vote_payload(b"\x01" * 32, ciphertext, IV, CONTEXT)

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(PollDecryptionError, match="secret"):
            decrypt_vote_payload(b"", b"x" * 48, IV, CONTEXT)

    def test_empty_iv_rejected(self) -> None:
        with pytest.raises(PollDecryptionError, match="iv"):
            decrypt_vote_payload(SECRET, b"x" * 48, b"", CONTEXT)

    def test_invalid_iv_size_stops_at_first_candidate(self) -> None:
        with pytest.raises(PollDecryptionError) as exc_info:
            decrypt_vote_payload(SECRET, b"x" * 48, b"\x00" * 4, CONTEXT)
        assert exc_info.value.attempted == ("poll_message_id",)


class TestOptionHashes:
    def test_split_drops_partial_trailing_block(self) -> None:
        blocks = split_option_hashes(b"a" * 32 + b"b" * 32 + b"c" * 6)
        assert blocks == [b"a" * 32, b"b" * 32]

    def test_split_empty(self) -> None:
        assert split_option_hashes(b"") == []

    def test_match_ignores_unknown_hashes_and_keeps_vote_order(self) -> None:
        hashes = [option_hash("Blue"), b"\x00" * 32, option_hash("Red")]
        assert match_options(hashes, ["Red", "Green", "Blue"]) == ["Blue", "Red"]

    def test_option_hash_is_sha256_of_utf8(self) -> None:
        assert option_hash("Açaí") == hashlib.sha256("Açaí".encode()).digest()
