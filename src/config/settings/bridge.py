"""Settings do bridge do protocolo WhatsApp.

O bridge é o processo que mantém a sessão multi-device, empurra eventos
brutos para este serviço e responde lookups (LID, contato, grupo, mídia).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class BridgeSettings:
    """Configurações de acesso ao bridge.

    Attributes:
        base_url: URL base da API do bridge
        token: Bearer token enviado ao bridge (opcional)
        timeout_seconds: Timeout de cada lookup
        max_concurrent_events: Limite de eventos processados em paralelo
    """

    base_url: str = "http://localhost:3000"
    token: str = ""
    timeout_seconds: float = 10.0
    max_concurrent_events: int = 100

    def validate(self) -> list[str]:
        """Valida configurações do bridge."""
        errors: list[str] = []

        if not self.base_url.startswith(("http://", "https://")):
            errors.append(f"BRIDGE_BASE_URL inválida: {self.base_url}")

        if self.timeout_seconds <= 0:
            errors.append("BRIDGE_TIMEOUT_SECONDS deve ser > 0")

        if self.max_concurrent_events <= 0:
            errors.append("EVENT_MAX_CONCURRENCY deve ser > 0")

        return errors


def _load_from_env() -> BridgeSettings:
    """Carrega BridgeSettings de variáveis de ambiente."""
    return BridgeSettings(
        base_url=os.getenv("BRIDGE_BASE_URL", "http://localhost:3000").rstrip("/"),
        token=os.getenv("BRIDGE_TOKEN", ""),
        timeout_seconds=float(os.getenv("BRIDGE_TIMEOUT_SECONDS", "10")),
        max_concurrent_events=int(os.getenv("EVENT_MAX_CONCURRENCY", "100")),
    )


@lru_cache(maxsize=1)
def get_bridge_settings() -> BridgeSettings:
    """Retorna instância cacheada de BridgeSettings."""
    return _load_from_env()
