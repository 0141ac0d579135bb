"""Identificadores WhatsApp (JID) no formato `user[.agent][:device]@server`."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_USER_SERVER = "s.whatsapp.net"
HIDDEN_USER_SERVER = "lid"
GROUP_SERVER = "g.us"


@dataclass(frozen=True, slots=True)
class Jid:
    """JID decomposto.

    `device` é o índice do sub-dispositivo (0 = primário). `non_ad` descarta
    agent/device e é a forma usada como chave de chat.
    """

    user: str
    server: str
    device: int = 0

    @classmethod
    def parse(cls, raw: str) -> Jid:
        """Converte string em Jid.

        Raises:
            ValueError: Se a string não tiver servidor.
        """
        value = (raw or "").strip()
        if "@" not in value:
            if not value:
                raise ValueError("empty JID")
            # Servidores sem usuário (ex.: "s.whatsapp.net")
            return cls(user="", server=value)
        left, _, server = value.partition("@")
        user, _, device = left.partition(":")
        user, _, _agent = user.partition(".")
        try:
            device_index = int(device) if device else 0
        except ValueError as exc:
            raise ValueError(f"invalid device index in JID: {device}") from exc
        return cls(user=user, server=server, device=device_index)

    @property
    def non_ad(self) -> str:
        """Forma sem agent/device (`user@server`)."""
        return f"{self.user}@{self.server}" if self.user else self.server

    @property
    def is_alias(self) -> bool:
        """True para identificadores LID (privacidade)."""
        return self.server == HIDDEN_USER_SERVER

    @property
    def is_group(self) -> bool:
        return self.server == GROUP_SERVER

    def __str__(self) -> str:
        if self.device:
            return f"{self.user}:{self.device}@{self.server}"
        return self.non_ad


def try_parse_jid(raw: str | None) -> Jid | None:
    """Versão tolerante de Jid.parse (None para entrada inválida)."""
    if not raw:
        return None
    try:
        return Jid.parse(raw)
    except ValueError:
        return None


def non_ad(raw: str) -> str:
    """Forma sem device de uma string JID; entrada inválida volta como veio."""
    jid = try_parse_jid(raw)
    return jid.non_ad if jid else raw


def jid_user(raw: str) -> str:
    """Parte de usuário (número ou LID) de uma string JID."""
    jid = try_parse_jid(raw)
    return jid.user if jid and jid.user else raw
