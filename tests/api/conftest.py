"""Fixtures das rotas HTTP (container fake injetado no lifespan)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from app.infra.stores import JsonFilePollStore


@pytest.fixture
def fake_container(tmp_path) -> SimpleNamespace:
    router = AsyncMock()
    router.handle.return_value = []
    return SimpleNamespace(
        router=router,
        poll_store=JsonFilePollStore(tmp_path / "poll_store.json"),
        dispatcher=SimpleNamespace(urls=("https://hooks.test/in",)),
        max_concurrent_events=4,
        aclose=AsyncMock(),
    )


@pytest.fixture
def api_client(fake_container):
    app = create_app(container_factory=lambda: fake_container)
    with TestClient(app) as client:
        yield client
