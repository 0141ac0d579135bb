"""Settings de entrega de webhooks.

Destinos, assinatura HMAC e limites de tempo do fan-out.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(frozen=True)
class WebhookSettings:
    """Configurações do dispatcher de webhooks.

    Attributes:
        urls: Destinos na ordem configurada (tupla imutável)
        secret: Secret para assinatura HMAC-SHA256 (vazio = sem assinatura)
        timeout_seconds: Deadline individual de cada entrega
        timezone: Fuso usado para renderizar timestamps RFC3339
        verify_ssl: Valida certificados TLS dos destinos
    """

    urls: tuple[str, ...] = ()
    secret: str = ""
    timeout_seconds: float = 10.0
    timezone: str = "UTC"
    verify_ssl: bool = True

    @property
    def tzinfo(self) -> ZoneInfo:
        """Fuso configurado (UTC quando inválido)."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return ZoneInfo("UTC")

    def validate(self) -> list[str]:
        """Valida configurações de webhook.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        for url in self.urls:
            if not url.startswith(("http://", "https://")):
                errors.append(f"WEBHOOK_URLS contém URL inválida: {url}")

        if self.timeout_seconds <= 0:
            errors.append("WEBHOOK_TIMEOUT_SECONDS deve ser > 0")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"WEBHOOK_TIMEZONE inválido: {self.timezone}")

        return errors


def parse_url_list(raw: str) -> tuple[str, ...]:
    """Converte lista separada por vírgula em tupla sem vazios."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _load_from_env() -> WebhookSettings:
    """Carrega WebhookSettings a partir de variáveis de ambiente."""
    return WebhookSettings(
        urls=parse_url_list(os.getenv("WEBHOOK_URLS", "")),
        secret=os.getenv("WEBHOOK_SECRET", ""),
        timeout_seconds=float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "10")),
        timezone=os.getenv("WEBHOOK_TIMEZONE", "UTC"),
        verify_ssl=os.getenv("WEBHOOK_VERIFY_SSL", "true").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Retorna instância cacheada de WebhookSettings."""
    return _load_from_env()
