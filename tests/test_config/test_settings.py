"""Testes das settings (carga do ambiente e validação)."""

from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from config.settings import (
    BaseSettings,
    BridgeSettings,
    WebhookSettings,
    WhatsAppSettings,
    parse_url_list,
)
from config.settings.base.core import _load_base_from_env, _parse_environment
from config.settings.bridge import _load_from_env as load_bridge_settings
from config.settings.webhook import _load_from_env as load_webhook_settings
from config.settings.whatsapp import _load_from_env as load_whatsapp_settings


class TestBaseSettings:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("prod", "production"),
            ("PRODUCTION", "production"),
            ("stage", "staging"),
            ("anything", "development"),
        ],
    )
    def test_parse_environment(self, raw: str, expected: str) -> None:
        assert _parse_environment(raw) == expected

    def test_strict_validation_outside_development(self) -> None:
        """Staging e produção validam de forma estrita."""
        assert BaseSettings(environment="production").strict_validation is True
        assert BaseSettings(environment="staging").strict_validation is True
        assert BaseSettings().strict_validation is False

    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("SERVICE_NAME", "relay-a")
        settings = _load_base_from_env()
        assert settings.is_production
        assert settings.log_level == "DEBUG"
        assert settings.service_name == "relay-a"

    def test_empty_service_name_is_invalid(self) -> None:
        assert BaseSettings(service_name="").validate() == ["SERVICE_NAME não pode ser vazio"]


class TestWebhookSettings:
    def test_parse_url_list_drops_blanks(self) -> None:
        assert parse_url_list(" https://a.test/in , ,https://b.test ") == (
            "https://a.test/in",
            "https://b.test",
        )

    def test_defaults_have_no_destinations(self) -> None:
        settings = WebhookSettings()
        assert settings.urls == ()
        assert settings.validate() == []

    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WEBHOOK_URLS", "https://a.test/in,https://b.test/in")
        monkeypatch.setenv("WEBHOOK_SECRET", "s3cret")
        monkeypatch.setenv("WEBHOOK_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("WEBHOOK_TIMEZONE", "America/Sao_Paulo")
        monkeypatch.setenv("WEBHOOK_VERIFY_SSL", "false")

        settings = load_webhook_settings()

        assert settings.urls == ("https://a.test/in", "https://b.test/in")
        assert settings.secret == "s3cret"
        assert settings.timeout_seconds == 2.5
        assert settings.tzinfo == ZoneInfo("America/Sao_Paulo")
        assert settings.verify_ssl is False

    def test_validate_reports_each_problem(self) -> None:
        settings = WebhookSettings(
            urls=("ftp://files.test", "https://ok.test"),
            timeout_seconds=0,
            timezone="Mars/Olympus",
        )
        errors = settings.validate()
        assert len(errors) == 3
        assert any("ftp://files.test" in error for error in errors)

    def test_invalid_timezone_falls_back_to_utc(self) -> None:
        assert WebhookSettings(timezone="Mars/Olympus").tzinfo == ZoneInfo("UTC")


class TestWhatsAppSettings:
    def test_load_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WHATSAPP_AUTO_DOWNLOAD_MEDIA", "0")
        monkeypatch.setenv("WHATSAPP_POLL_STORE_PATH", "/data/polls.json")
        monkeypatch.setenv("WHATSAPP_LINK_PREVIEW_ENABLED", "no")
        settings = load_whatsapp_settings()
        assert settings.auto_download_media is False
        assert settings.poll_store_path == "/data/polls.json"
        assert settings.link_preview_enabled is False

    def test_media_path_required_with_auto_download(self) -> None:
        errors = WhatsAppSettings(auto_download_media=True, media_path="").validate()
        assert errors == ["WHATSAPP_MEDIA_PATH obrigatório com auto download ativo"]

    def test_media_path_optional_without_auto_download(self) -> None:
        assert WhatsAppSettings(auto_download_media=False, media_path="").validate() == []

    def test_invalid_limits(self) -> None:
        errors = WhatsAppSettings(
            poll_store_path="",
            link_preview_timeout_seconds=0,
            media_max_size_bytes=0,
        ).validate()
        assert len(errors) == 3


class TestBridgeSettings:
    def test_base_url_trailing_slash_removed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BRIDGE_BASE_URL", "http://bridge.local:3000/")
        monkeypatch.setenv("EVENT_MAX_CONCURRENCY", "7")
        settings = load_bridge_settings()
        assert settings.base_url == "http://bridge.local:3000"
        assert settings.max_concurrent_events == 7

    def test_validate(self) -> None:
        errors = BridgeSettings(base_url="bridge", timeout_seconds=0, max_concurrent_events=0).validate()
        assert len(errors) == 3
