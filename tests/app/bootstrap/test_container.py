"""Testes do composition root (build_container e validação de startup)."""

from __future__ import annotations

import json

import httpx
import pytest

import app.bootstrap as bootstrap
from app.bootstrap import build_container, validate_runtime_settings
from app.domain.events import MessageContent, MessageEvent, MessageInfo
from app.infra.bridge import BridgeClient, BridgeClientConfig
from config.settings import BaseSettings, BridgeSettings, WebhookSettings, WhatsAppSettings

BRIDGE_URL = "http://bridge.local"
HOOK_URL = "https://hooks.test/in"


def _bridge_not_found() -> BridgeClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "not found"})

    http = httpx.AsyncClient(base_url=BRIDGE_URL, transport=httpx.MockTransport(handler))
    return BridgeClient(BridgeClientConfig(base_url=BRIDGE_URL), http_client=http)


def _whatsapp(tmp_path, *, link_preview: bool = False) -> WhatsAppSettings:
    return WhatsAppSettings(
        auto_download_media=False,
        media_path=str(tmp_path / "media"),
        poll_store_path=str(tmp_path / "poll_store.json"),
        link_preview_enabled=link_preview,
    )


@pytest.mark.asyncio
async def test_text_event_reaches_webhook(tmp_path) -> None:
    received: list[dict] = []

    def hook(request: httpx.Request) -> httpx.Response:
        received.append(json.loads(request.content))
        return httpx.Response(200)

    container = build_container(
        webhook=WebhookSettings(urls=(HOOK_URL,)),
        whatsapp=_whatsapp(tmp_path),
        bridge=BridgeSettings(base_url=BRIDGE_URL, max_concurrent_events=8),
        bridge_client=_bridge_not_found(),
        webhook_http=httpx.AsyncClient(transport=httpx.MockTransport(hook)),
    )
    event = MessageEvent(
        info=MessageInfo(
            id="3EB0A1",
            chat="5511988887777@s.whatsapp.net",
            sender="5511988887777@s.whatsapp.net",
            push_name="Maria",
        ),
        message=MessageContent(conversation="bom dia"),
    )

    reports = await container.router.handle("primary", event)
    await container.aclose()

    assert container.max_concurrent_events == 8
    assert container.preview_http is None
    assert len(reports) == 1
    assert reports[0].succeeded
    (wire,) = received
    assert wire["event"] == "message"
    assert wire["device_id"] == "primary"
    assert wire["payload"]["text"] == "bom dia"
    assert wire["payload"]["sender_push_name"] == "Maria"


@pytest.mark.asyncio
async def test_link_preview_client_is_closed(tmp_path) -> None:
    container = build_container(
        webhook=WebhookSettings(),
        whatsapp=_whatsapp(tmp_path, link_preview=True),
        bridge=BridgeSettings(base_url=BRIDGE_URL),
        bridge_client=_bridge_not_found(),
        webhook_http=httpx.AsyncClient(),
    )

    assert container.preview_http is not None
    await container.aclose()
    assert container.preview_http.is_closed
    assert container.webhook_http.is_closed


@pytest.mark.asyncio
async def test_default_webhook_client_uses_configured_timeout(tmp_path) -> None:
    container = build_container(
        webhook=WebhookSettings(urls=(HOOK_URL,), timeout_seconds=12.0),
        whatsapp=_whatsapp(tmp_path),
        bridge=BridgeSettings(base_url=BRIDGE_URL),
        bridge_client=_bridge_not_found(),
    )

    timeout = container.webhook_http.timeout
    await container.aclose()

    assert timeout.read == 12.0
    assert timeout.connect == 12.0


def test_invalid_settings_fail_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(bootstrap, "get_base_settings", lambda: BaseSettings(environment="production"))
    monkeypatch.setattr(
        bootstrap, "get_webhook_settings", lambda: WebhookSettings(urls=("ftp://hooks.test",))
    )

    with pytest.raises(RuntimeError, match="WEBHOOK_URLS"):
        validate_runtime_settings()


def test_invalid_settings_only_warn_in_development(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(bootstrap, "get_base_settings", lambda: BaseSettings(environment="development"))
    monkeypatch.setattr(
        bootstrap, "get_webhook_settings", lambda: WebhookSettings(urls=("ftp://hooks.test",))
    )

    with caplog.at_level("WARNING"):
        validate_runtime_settings()

    assert "settings_validation_failed" in caplog.text
