"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - poll_store: Store de enquetes em arquivo JSON (lock leitores/escritor)
"""

from __future__ import annotations

from app.infra.stores.poll_store import JsonFilePollStore

__all__ = [
    "JsonFilePollStore",
]
