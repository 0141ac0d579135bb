"""Fan-out de eventos normalizados para os webhooks configurados.

Cada destino recebe um POST concorrente com deadline próprio. Sem retry:
falha de entrega é reportada e o evento é descartado.

Regras de agregação:
    - 0 URLs: no-op com sucesso
    - todas falharam: WebhookDeliveryError com o detalhe de cada destino
    - falha parcial: WARNING e sucesso
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

import httpx

from app.infra.crypto.signature import sign_payload
from app.infra.webhook.models import DeliveryOutcome, DispatchReport
from utils.errors import WebhookDeliveryError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.payloads import WebhookEvent

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"
USER_AGENT = "zap-relay-webhook/1.0"


def encode_event(event: WebhookEvent) -> bytes:
    """Serializa o envelope uma única vez (mesmo corpo para todos os destinos)."""
    return json.dumps(event.to_wire(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _endpoint_label(url: str) -> str:
    # Sem query string nem userinfo: podem carregar tokens
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return "<invalid-url>"
    return f"{parsed.scheme}://{parsed.netloc.decode('ascii')}{parsed.path}"


class WebhookDispatcher:
    """Entrega um WebhookEvent a todas as URLs configuradas.

    Args:
        urls: Destinos (imutáveis durante a vida do processo)
        http_client: Cliente compartilhado (pool de conexões)
        timeout_seconds: Deadline por destino
        secret: Quando definido, assina o corpo (HMAC-SHA256)
    """

    def __init__(
        self,
        *,
        urls: Sequence[str],
        http_client: httpx.AsyncClient,
        timeout_seconds: float = 10.0,
        secret: str = "",
    ) -> None:
        self._urls = tuple(urls)
        self._http = http_client
        self._timeout = timeout_seconds
        self._secret = secret.encode("utf-8") if secret else b""

    @property
    def urls(self) -> tuple[str, ...]:
        return self._urls

    async def dispatch(self, event: WebhookEvent) -> DispatchReport:
        """Envia para todos os destinos.

        Raises:
            WebhookDeliveryError: Se todos os destinos falharem.
        """
        event_name = event.kind.value
        if not self._urls:
            logger.debug("webhook_no_destinations", extra={"event_name": event_name})
            return DispatchReport(event_name=event_name)

        body = encode_event(event)
        headers = self._build_headers(body)
        outcomes = await asyncio.gather(
            *(self._deliver(url, body, headers) for url in self._urls)
        )
        report = DispatchReport(event_name=event_name, outcomes=tuple(outcomes))

        if not report.succeeded:
            logger.error(
                "webhook_delivery_failed",
                extra={"event_name": event_name, "failed": len(report.failed)},
            )
            raise WebhookDeliveryError(event_name, report.outcomes)

        if report.partial:
            logger.warning(
                "webhook_partial_delivery",
                extra={
                    "event_name": event_name,
                    "succeeded": len(report.succeeded),
                    "failed": len(report.failed),
                    "failures": [f"{o.endpoint}: {o.detail}" for o in report.failed],
                },
            )
        else:
            logger.info(
                "webhook_forwarded",
                extra={"event_name": event_name, "succeeded": len(report.succeeded)},
            )
        return report

    def _build_headers(self, body: bytes) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if self._secret:
            headers[SIGNATURE_HEADER] = sign_payload(body, self._secret)
        return headers

    async def _deliver(self, url: str, body: bytes, headers: dict[str, str]) -> DeliveryOutcome:
        label = _endpoint_label(url)
        try:
            response = await asyncio.wait_for(
                self._http.post(url, content=body, headers=headers, timeout=self._timeout),
                timeout=self._timeout,
            )
        except TimeoutError:
            return DeliveryOutcome(endpoint=label, succeeded=False, detail="timeout")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return DeliveryOutcome(
                endpoint=label,
                succeeded=False,
                detail=f"transport_error: {type(exc).__name__}",
            )

        if not response.is_success:
            return DeliveryOutcome(
                endpoint=label,
                succeeded=False,
                detail=f"http_status: {response.status_code}",
                status_code=response.status_code,
            )
        return DeliveryOutcome(endpoint=label, succeeded=True, status_code=response.status_code)
