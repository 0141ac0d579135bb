"""Builder do evento `message.ack` (recibos de entrega/leitura)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.jid import non_ad, try_parse_jid
from app.domain.payloads import PollSummary, ReceiptPayload
from app.payload_builders.base import BuilderDeps, localize, resolve_identity

if TYPE_CHECKING:
    from app.domain.events import ReceiptEvent

DELIVERED = "delivered"
RECEIPT_MESSAGE = "receipt_message"
POLL_MESSAGE = "poll_message"

RECEIPT_DESCRIPTIONS: dict[str, str] = {
    DELIVERED: "Significa que a mensagem foi entregue ao dispositivo (mas o usuário pode não ter percebido).",
    "sender": "Enviada pelos seus outros dispositivos quando uma mensagem que você enviou é entregue a eles.",
    "retry": "A mensagem foi entregue ao dispositivo, mas a descriptografia falhou.",
    "read": "O usuário abriu o chat e viu a mensagem.",
    "read-self": (
        "O usuário atual leu uma mensagem de um dispositivo diferente e desativou "
        "as confirmações de leitura nas configurações de privacidade."
    ),
    "played": (
        "Mídia reproduzida. Se o usuário atual abriu a mídia, ela deve ser removida de "
        "todos os dispositivos; se um destinatário abriu, é só um aviso ao remetente."
    ),
    "played-self": (
        "O usuário atual abriu uma mídia de visualização única em outro dispositivo e "
        "tem as confirmações de leitura desativadas."
    ),
}
UNKNOWN_DESCRIPTION = "unknown receipt type"


def receipt_type_label(raw_type: str) -> str:
    """Tipo vazio do protocolo significa entregue."""
    return raw_type or DELIVERED


class ReceiptPayloadBuilder:
    def __init__(self, deps: BuilderDeps) -> None:
        self._deps = deps

    async def build(self, receipt: ReceiptEvent) -> ReceiptPayload:
        message_ids = tuple(receipt.message_ids)
        sender = await resolve_identity(self._deps.identity, receipt.sender)
        parsed_sender = try_parse_jid(receipt.sender)
        from_lid = non_ad(receipt.sender) if parsed_sender is not None and parsed_sender.is_alias else None

        poll = None
        record = self._deps.poll_store.get(message_ids[0]) if message_ids else None
        if record is not None:
            poll = PollSummary(question=record.question, options=record.options)

        receipt_type = receipt_type_label(receipt.receipt_type)
        return ReceiptPayload(
            id=message_ids[0] if message_ids else "",
            timestamp=localize(receipt.timestamp, self._deps.timezone),
            chat_id=non_ad(receipt.chat),
            sender_id=sender.jid,
            sender_number=sender.number,
            from_me=receipt.is_from_me,
            message_ids=message_ids,
            receipt_type=receipt_type,
            description=RECEIPT_DESCRIPTIONS.get(receipt_type, UNKNOWN_DESCRIPTION),
            message_type=POLL_MESSAGE if poll is not None else RECEIPT_MESSAGE,
            from_lid=from_lid,
            poll=poll,
        )
