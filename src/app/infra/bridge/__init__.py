"""Cliente do bridge do protocolo WhatsApp (consultas síncronas via HTTP)."""

from app.infra.bridge.client import BridgeClient, BridgeClientConfig

__all__ = [
    "BridgeClient",
    "BridgeClientConfig",
]
