"""Roteamento de eventos brutos: classificação → builder → dispatcher.

Cada evento gera no máximo um tipo de saída, exceto `group_info`, que gera
uma entrega por ação não vazia (falha de uma ação não bloqueia as outras).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.events import DeleteForMeEvent, GroupInfoEvent, MessageEvent, ReceiptEvent
from app.domain.payloads import EventKind, MessageType, WebhookEvent
from app.domain.polls import PollRecord
from app.services.classifier import classify_message
from utils.errors import WebhookDeliveryError

if TYPE_CHECKING:
    from app.domain.events import RawEvent
    from app.domain.payloads import WebhookPayload
    from app.infra.webhook.dispatcher import WebhookDispatcher
    from app.infra.webhook.models import DispatchReport
    from app.payload_builders import (
        DeleteForMePayloadBuilder,
        GroupParticipantsPayloadBuilder,
        MessageEventBuilder,
        ReceiptPayloadBuilder,
    )
    from app.protocols.poll_store import PollStoreProtocol
    from app.services.receipt_debouncer import ReceiptDebouncer

logger = logging.getLogger(__name__)


class EventRouter:
    """Despacha cada evento bruto para o builder do seu tipo.

    Raises (handle):
        WebhookDeliveryError: Todos os destinos falharam (exceto group_info,
            em que a falha por ação é logada e as demais seguem).
    """

    def __init__(
        self,
        *,
        message_builders: dict[EventKind, MessageEventBuilder],
        receipt_builder: ReceiptPayloadBuilder,
        group_builder: GroupParticipantsPayloadBuilder,
        delete_builder: DeleteForMePayloadBuilder,
        debouncer: ReceiptDebouncer,
        dispatcher: WebhookDispatcher,
        poll_store: PollStoreProtocol,
    ) -> None:
        self._message_builders = message_builders
        self._receipt_builder = receipt_builder
        self._group_builder = group_builder
        self._delete_builder = delete_builder
        self._debouncer = debouncer
        self._dispatcher = dispatcher
        self._poll_store = poll_store

    async def handle(self, device_id: str, event: RawEvent) -> list[DispatchReport]:
        if isinstance(event, MessageEvent):
            return await self._handle_message(device_id, event)
        if isinstance(event, ReceiptEvent):
            return await self._handle_receipt(device_id, event)
        if isinstance(event, GroupInfoEvent):
            return await self._handle_group(device_id, event)
        if isinstance(event, DeleteForMeEvent):
            payload = await self._delete_builder.build(event)
            return [await self._send(EventKind.DELETE_FOR_ME, device_id, payload)]
        logger.warning("event_type_unsupported", extra={"event_type": type(event).__name__})
        return []

    async def _handle_message(self, device_id: str, event: MessageEvent) -> list[DispatchReport]:
        classification = classify_message(event.message)
        if classification is None:
            return []

        if classification.message_type == MessageType.POLL and event.info.is_from_me:
            await self._remember_own_poll(event)

        builder = self._message_builders.get(classification.kind)
        if builder is None:
            logger.warning("payload_builder_missing", extra={"event_kind": classification.kind.value})
            return []
        payload = await builder.build(event, classification)
        return [await self._send(classification.kind, device_id, payload)]

    async def _handle_receipt(self, device_id: str, receipt: ReceiptEvent) -> list[DispatchReport]:
        if not self._debouncer.should_forward(receipt):
            return []
        payload = await self._receipt_builder.build(receipt)
        return [await self._send(EventKind.RECEIPT, device_id, payload)]

    async def _handle_group(self, device_id: str, event: GroupInfoEvent) -> list[DispatchReport]:
        reports: list[DispatchReport] = []
        for payload in await self._group_builder.build(event):
            try:
                reports.append(await self._send(EventKind.GROUP_PARTICIPANTS, device_id, payload))
            except WebhookDeliveryError as exc:
                logger.error(
                    "group_action_delivery_failed",
                    extra={"action": payload.action, "failed": len(exc.outcomes)},
                )
        return reports

    async def _remember_own_poll(self, event: MessageEvent) -> None:
        """Enquete enviada por este dispositivo: guarda o secret para votos futuros."""
        poll = event.message.poll_creation
        secret = event.message.message_secret
        if poll is None or not secret or self._poll_store.get(event.info.id) is not None:
            return
        await self._poll_store.aput(
            event.info.id,
            PollRecord(
                message_id=event.info.id,
                question=poll.name,
                options=tuple(poll.options),
                enc_key=secret,
            ),
        )
        logger.info("poll_recorded_from_event", extra={"poll_id": event.info.id})

    async def _send(self, kind: EventKind, device_id: str, payload: WebhookPayload) -> DispatchReport:
        event = WebhookEvent(
            kind=kind,
            device_id=device_id,
            timestamp=payload.timestamp,
            payload=payload,
        )
        return await self._dispatcher.dispatch(event)
