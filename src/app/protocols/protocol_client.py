"""Contrato do cliente do protocolo WhatsApp consumido pelo pipeline.

Todas as operações podem suspender (rede). Falhas são sinalizadas por
exceção; os consumidores decidem como degradar.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.events import MediaContent, MessageEvent

    from .models import ContactInfo, GroupInfo, SelfInfo


class ProtocolClientProtocol(Protocol):
    """Operações síncronas (request/response) oferecidas pelo cliente."""

    async def decrypt_poll_vote(self, event: MessageEvent) -> list[bytes]:
        """Decifra voto com o contexto completo do evento (hashes de 32 bytes)."""
        ...

    async def get_pn_for_lid(self, lid: str) -> str | None:
        """Resolve LID para JID de telefone (None quando sem mapeamento)."""
        ...

    async def get_contact(self, jid: str) -> ContactInfo | None: ...

    async def get_group_info(self, jid: str) -> GroupInfo | None: ...

    async def download_media(self, message_id: str, media_type: str, media: MediaContent) -> bytes:
        """Baixa e decifra o conteúdo de uma mídia."""
        ...

    async def get_self(self) -> SelfInfo | None: ...
