"""Agregador de settings do zap_relay.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.bridge import (
    BridgeSettings,
    get_bridge_settings,
)
from config.settings.webhook import (
    WebhookSettings,
    get_webhook_settings,
    parse_url_list,
)
from config.settings.whatsapp import (
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    "BaseSettings",
    "BridgeSettings",
    "Environment",
    "WebhookSettings",
    "WhatsAppSettings",
    "get_base_settings",
    "get_bridge_settings",
    "get_webhook_settings",
    "get_whatsapp_settings",
    "parse_url_list",
]
