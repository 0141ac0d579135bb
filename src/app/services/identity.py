"""Normalização de identidade: LID (alias) → JID de telefone.

Entrada em formato de telefone passa direto, sem consulta. Entrada LID gera
uma consulta ao cliente; falha ou ausência de mapeamento devolve a entrada.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.jid import jid_user, try_parse_jid

if TYPE_CHECKING:
    from app.protocols.protocol_client import ProtocolClientProtocol

logger = logging.getLogger(__name__)


class IdentityNormalizer:
    """Resolve identificadores LID para a forma de telefone. Nunca levanta."""

    def __init__(self, client: ProtocolClientProtocol) -> None:
        self._client = client

    async def normalize(self, jid: str) -> str:
        parsed = try_parse_jid(jid)
        if parsed is None or not parsed.is_alias:
            return jid

        try:
            resolved = await self._client.get_pn_for_lid(parsed.non_ad)
        except Exception as exc:
            logger.warning(
                "lid_resolution_failed",
                extra={"error_type": type(exc).__name__},
            )
            return jid

        if not resolved:
            logger.debug("lid_without_mapping")
            return jid
        return resolved

    async def normalize_user(self, jid: str) -> str:
        """Apenas a parte de usuário (número) do JID normalizado."""
        return jid_user(await self.normalize(jid))
