"""Peças comuns aos builders de payload.

Enriquecimentos (contato, grupo, self, LID) nunca interrompem a construção:
falha de consulta vira campo omitido.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING, Protocol, TypeVar

from app.domain.jid import jid_user, non_ad, try_parse_jid

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable

    from app.domain.events import MessageEvent
    from app.domain.payloads import WebhookPayload
    from app.infra.whatsapp.link_preview import LinkPreviewFetcher
    from app.infra.whatsapp.media_downloader import WhatsAppMediaDownloader
    from app.protocols.chat_storage import ChatStorageProtocol
    from app.protocols.poll_store import PollStoreProtocol
    from app.protocols.protocol_client import ProtocolClientProtocol
    from app.services.classifier import Classification
    from app.services.identity import IdentityNormalizer
    from app.services.poll_votes import PollVoteDecryptor

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MENTION_PATTERN = re.compile(r"@(\d+)")


@dataclass(frozen=True, slots=True)
class BuilderDeps:
    """Colaboradores usados pelos builders (montados no bootstrap).

    `media_downloader` None = política de URL remota (sem auto download).
    `link_preview` None = preview por busca desativado.
    """

    identity: IdentityNormalizer
    client: ProtocolClientProtocol
    poll_store: PollStoreProtocol
    poll_votes: PollVoteDecryptor
    chat_storage: ChatStorageProtocol | None = None
    media_downloader: WhatsAppMediaDownloader | None = None
    link_preview: LinkPreviewFetcher | None = None
    timezone: tzinfo = UTC


class MessageEventBuilder(Protocol):
    """Builder de um tipo de evento originado em `message`."""

    async def build(self, event: MessageEvent, classification: Classification) -> WebhookPayload: ...


@dataclass(frozen=True, slots=True)
class Identity:
    """Identificador normalizado: JID sem device e número (parte de usuário)."""

    jid: str
    number: str


def localize(value: datetime, tz: tzinfo) -> datetime:
    """Converte para o fuso de saída; datetime ingênuo é tratado como UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(tz)


async def resolve_identity(identity: IdentityNormalizer, raw: str) -> Identity:
    normalized = await identity.normalize(raw)
    return Identity(jid=non_ad(normalized), number=jid_user(normalized))


async def resolve_chat_id(identity: IdentityNormalizer, chat: str, *, is_group: bool) -> str:
    """Grupos mantêm o JID do grupo; chats 1:1 seguem a normalização de LID."""
    if is_group:
        return non_ad(chat)
    return (await resolve_identity(identity, chat)).jid


async def safe_lookup(awaitable: Awaitable[T], lookup: str) -> T | None:
    """Executa consulta de enriquecimento; erro vira None (logado sem PII)."""
    try:
        return await awaitable
    except Exception as exc:
        logger.warning(
            "enrichment_lookup_failed",
            extra={"lookup": lookup, "error_type": type(exc).__name__},
        )
        return None


async def substitute_mentions(
    identity: IdentityNormalizer,
    text: str,
    mentioned_jids: Iterable[str],
) -> tuple[str, tuple[str, ...]]:
    """Troca `@<lid>` por `@<telefone>` no texto e devolve os números citados."""
    numbers: list[str] = []
    replacements: dict[str, str] = {}
    for raw in mentioned_jids:
        parsed = try_parse_jid(raw)
        resolved = await resolve_identity(identity, raw)
        numbers.append(resolved.number)
        if parsed is not None and parsed.is_alias and parsed.user != resolved.number:
            replacements[parsed.user] = resolved.number

    if replacements and text:
        text = _MENTION_PATTERN.sub(
            lambda match: "@" + replacements.get(match.group(1), match.group(1)),
            text,
        )
    return text, tuple(numbers)
