"""Cliente HTTP do bridge do protocolo WhatsApp.

O bridge mantém a sessão multi-device e expõe consultas síncronas
(LID → telefone, contatos, grupos, decifragem de voto, download de mídia,
mensagens armazenadas). 404 significa "não encontrado" e vira None.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from app.protocols.models import ContactInfo, GroupInfo, SelfInfo, StoredMessage
from utils.errors import BridgeError

if TYPE_CHECKING:
    from app.domain.events import MediaContent, MessageEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BridgeClientConfig:
    """Configuração do cliente do bridge."""

    base_url: str
    token: str = ""
    timeout_seconds: float = 10.0


def _segment(value: str) -> str:
    return quote(value, safe="@:.")


class BridgeClient:
    """Implementa ProtocolClientProtocol e ChatStorageProtocol via HTTP.

    Args:
        config: URL base, token e timeout
        http_client: Cliente opcional (injeção em testes); se omitido, é
            criado e fechado por este objeto
    """

    def __init__(
        self,
        config: BridgeClientConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ── ProtocolClientProtocol ────────────────────────────────

    async def decrypt_poll_vote(self, event: MessageEvent) -> list[bytes]:
        data = await self._request_json(
            "POST", "/polls/decrypt", json=event.model_dump(mode="json")
        )
        if not isinstance(data, dict):
            return []
        try:
            return [bytes.fromhex(item) for item in data.get("selected_options") or []]
        except (TypeError, ValueError) as exc:
            raise BridgeError("invalid poll vote response from bridge") from exc

    async def get_pn_for_lid(self, lid: str) -> str | None:
        data = await self._request_json("GET", f"/lids/{_segment(lid)}", not_found_ok=True)
        if not isinstance(data, dict):
            return None
        return data.get("pn") or None

    async def get_contact(self, jid: str) -> ContactInfo | None:
        data = await self._request_json("GET", f"/contacts/{_segment(jid)}", not_found_ok=True)
        return ContactInfo.model_validate(data) if isinstance(data, dict) else None

    async def get_group_info(self, jid: str) -> GroupInfo | None:
        data = await self._request_json("GET", f"/groups/{_segment(jid)}", not_found_ok=True)
        return GroupInfo.model_validate(data) if isinstance(data, dict) else None

    async def download_media(self, message_id: str, media_type: str, media: MediaContent) -> bytes:
        response = await self._request(
            "POST",
            "/media/download",
            json={
                "message_id": message_id,
                "media_type": media_type,
                "media": media.model_dump(mode="json"),
            },
        )
        return response.content if response is not None else b""

    async def get_self(self) -> SelfInfo | None:
        data = await self._request_json("GET", "/self", not_found_ok=True)
        return SelfInfo.model_validate(data) if isinstance(data, dict) else None

    # ── ChatStorageProtocol ───────────────────────────────────

    async def get_message_by_id(self, message_id: str) -> StoredMessage | None:
        data = await self._request_json(
            "GET", f"/messages/{_segment(message_id)}", not_found_ok=True
        )
        return StoredMessage.model_validate(data) if isinstance(data, dict) else None

    # ── HTTP ──────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        if not self._config.token:
            return {}
        return {"Authorization": f"Bearer {self._config.token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        not_found_ok: bool = False,
    ) -> httpx.Response | None:
        try:
            response = await self._http.request(method, path, json=json, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning(
                "bridge_request_failed",
                extra={"path": path.split("/")[1], "error_type": type(exc).__name__},
            )
            raise BridgeError(f"bridge request failed: {type(exc).__name__}") from exc

        if response.status_code == httpx.codes.NOT_FOUND and not_found_ok:
            return None
        if not response.is_success:
            logger.warning(
                "bridge_request_failed",
                extra={"path": path.split("/")[1], "status_code": response.status_code},
            )
            raise BridgeError("bridge returned error status", status_code=response.status_code)
        return response

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        not_found_ok: bool = False,
    ) -> Any:
        response = await self._request(method, path, json=json, not_found_ok=not_found_ok)
        if response is None:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BridgeError("invalid JSON from bridge", status_code=response.status_code) from exc
