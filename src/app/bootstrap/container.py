"""Container de dependências (instâncias criadas uma vez por processo).

Sem singletons de módulo: stores, caches e clientes vivem no container,
que é entregue às rotas via `app.state` e fechado no shutdown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from app.infra.bridge import BridgeClient, BridgeClientConfig
from app.infra.stores import JsonFilePollStore
from app.infra.webhook import WebhookDispatcher
from app.infra.whatsapp.link_preview import MAX_REDIRECTS, LinkPreviewFetcher
from app.infra.whatsapp.media_downloader import WhatsAppMediaDownloader
from app.payload_builders import (
    BuilderDeps,
    DeleteForMePayloadBuilder,
    GroupParticipantsPayloadBuilder,
    ReceiptPayloadBuilder,
    create_message_builders,
)
from app.services import EventRouter, IdentityNormalizer, PollVoteDecryptor, ReceiptDebouncer
from config.settings import (
    BridgeSettings,
    WebhookSettings,
    WhatsAppSettings,
    get_bridge_settings,
    get_webhook_settings,
    get_whatsapp_settings,
)

logger = logging.getLogger(__name__)


@dataclass
class RelayContainer:
    """Componentes montados para o pipeline de eventos."""

    router: EventRouter
    poll_store: JsonFilePollStore
    bridge: BridgeClient
    dispatcher: WebhookDispatcher
    webhook_http: httpx.AsyncClient
    preview_http: httpx.AsyncClient | None
    max_concurrent_events: int

    async def aclose(self) -> None:
        """Fecha clientes HTTP (o store não mantém recurso aberto)."""
        await self.bridge.aclose()
        await self.webhook_http.aclose()
        if self.preview_http is not None:
            await self.preview_http.aclose()
        logger.info("container_closed")


def build_container(
    *,
    webhook: WebhookSettings | None = None,
    whatsapp: WhatsAppSettings | None = None,
    bridge: BridgeSettings | None = None,
    bridge_client: BridgeClient | None = None,
    webhook_http: httpx.AsyncClient | None = None,
) -> RelayContainer:
    """Monta o grafo de dependências a partir das settings.

    Args:
        webhook/whatsapp/bridge: Settings explícitas (default: ambiente)
        bridge_client: Cliente do bridge pronto (testes)
        webhook_http: Cliente HTTP dos webhooks (testes)
    """
    webhook = webhook or get_webhook_settings()
    whatsapp = whatsapp or get_whatsapp_settings()
    bridge = bridge or get_bridge_settings()

    client = bridge_client or BridgeClient(
        BridgeClientConfig(
            base_url=bridge.base_url,
            token=bridge.token,
            timeout_seconds=bridge.timeout_seconds,
        )
    )
    poll_store = JsonFilePollStore(whatsapp.poll_store_path)
    identity = IdentityNormalizer(client)

    preview_http = None
    link_preview = None
    if whatsapp.link_preview_enabled:
        preview_http = httpx.AsyncClient(max_redirects=MAX_REDIRECTS)
        link_preview = LinkPreviewFetcher(
            preview_http, timeout_seconds=whatsapp.link_preview_timeout_seconds
        )

    media_downloader = None
    if whatsapp.auto_download_media:
        media_downloader = WhatsAppMediaDownloader(
            client=client,
            media_path=whatsapp.media_path,
            max_size_bytes=whatsapp.media_max_size_bytes,
        )

    deps = BuilderDeps(
        identity=identity,
        client=client,
        poll_store=poll_store,
        poll_votes=PollVoteDecryptor(client=client, poll_store=poll_store, chat_storage=client),
        chat_storage=client,
        media_downloader=media_downloader,
        link_preview=link_preview,
        timezone=webhook.tzinfo,
    )

    http = webhook_http or httpx.AsyncClient(
        verify=webhook.verify_ssl, timeout=webhook.timeout_seconds
    )
    dispatcher = WebhookDispatcher(
        urls=webhook.urls,
        http_client=http,
        timeout_seconds=webhook.timeout_seconds,
        secret=webhook.secret,
    )

    router = EventRouter(
        message_builders=create_message_builders(deps),
        receipt_builder=ReceiptPayloadBuilder(deps),
        group_builder=GroupParticipantsPayloadBuilder(deps),
        delete_builder=DeleteForMePayloadBuilder(deps),
        debouncer=ReceiptDebouncer(),
        dispatcher=dispatcher,
        poll_store=poll_store,
    )

    logger.info(
        "container_built",
        extra={
            "webhook_destinations": len(webhook.urls),
            "auto_download_media": whatsapp.auto_download_media,
            "link_preview_enabled": whatsapp.link_preview_enabled,
        },
    )
    return RelayContainer(
        router=router,
        poll_store=poll_store,
        bridge=client,
        dispatcher=dispatcher,
        webhook_http=http,
        preview_http=preview_http,
        max_concurrent_events=bridge.max_concurrent_events,
    )
