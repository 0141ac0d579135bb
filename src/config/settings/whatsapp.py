"""Settings específicas de WhatsApp.

Política de mídia, persistência de enquetes e preview de links.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_STORAGE_PATH = "storages"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        auto_download_media: Baixa mídia para disco (True) ou envia URL remota (False)
        media_path: Diretório onde a mídia baixada é gravada
        poll_store_path: Arquivo JSON do store de enquetes
        link_preview_enabled: Busca título/descrição do primeiro link do texto
        link_preview_timeout_seconds: Timeout da busca de preview
        media_max_size_bytes: Limite de tamanho de mídia baixada
    """

    auto_download_media: bool = True
    media_path: str = f"{DEFAULT_STORAGE_PATH}/media"
    poll_store_path: str = f"{DEFAULT_STORAGE_PATH}/poll_store.json"
    link_preview_enabled: bool = True
    link_preview_timeout_seconds: float = 15.0
    media_max_size_bytes: int = 64 * 1024 * 1024  # 64MB

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.auto_download_media and not self.media_path:
            errors.append("WHATSAPP_MEDIA_PATH obrigatório com auto download ativo")

        if not self.poll_store_path:
            errors.append("WHATSAPP_POLL_STORE_PATH não pode ser vazio")

        if self.link_preview_timeout_seconds <= 0:
            errors.append("WHATSAPP_LINK_PREVIEW_TIMEOUT_SECONDS deve ser > 0")

        if self.media_max_size_bytes <= 0:
            errors.append("WHATSAPP_MEDIA_MAX_SIZE_BYTES deve ser > 0")

        return errors


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        auto_download_media=_env_flag("WHATSAPP_AUTO_DOWNLOAD_MEDIA", "true"),
        media_path=os.getenv("WHATSAPP_MEDIA_PATH", f"{DEFAULT_STORAGE_PATH}/media"),
        poll_store_path=os.getenv(
            "WHATSAPP_POLL_STORE_PATH", f"{DEFAULT_STORAGE_PATH}/poll_store.json"
        ),
        link_preview_enabled=_env_flag("WHATSAPP_LINK_PREVIEW_ENABLED", "true"),
        link_preview_timeout_seconds=float(
            os.getenv("WHATSAPP_LINK_PREVIEW_TIMEOUT_SECONDS", "15")
        ),
        media_max_size_bytes=int(
            os.getenv("WHATSAPP_MEDIA_MAX_SIZE_BYTES", str(64 * 1024 * 1024))
        ),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
