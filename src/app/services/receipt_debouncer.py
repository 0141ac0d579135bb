"""Debounce de recibos de leitura enviados pelo próprio dispositivo.

Ao abrir um chat, o cliente gera um recibo "read" por lote de mensagens;
só o primeiro por chat dentro da janela é encaminhado.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from app.domain.jid import non_ad, try_parse_jid

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.events import ReceiptEvent

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 15.0
READ_RECEIPT_TYPE = "read"


class ReceiptDebouncer:
    """Decide se um recibo deve virar webhook.

    O mapa chat → último instante encaminhado vive só em memória e não é
    podado. Verificação e atualização acontecem na mesma seção crítica.
    """

    def __init__(
        self,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cooldown = cooldown_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._last_forwarded: dict[str, float] = {}

    def should_forward(self, receipt: ReceiptEvent) -> bool:
        """Aplica o pré-filtro de device e o debounce de leitura própria."""
        sender = try_parse_jid(receipt.sender)
        if sender is not None and sender.device != 0:
            logger.debug("receipt_skipped_secondary_device")
            return False

        if receipt.receipt_type != READ_RECEIPT_TYPE or not receipt.is_from_me:
            return True

        chat_id = non_ad(receipt.chat)
        with self._lock:
            now = self._clock()
            last = self._last_forwarded.get(chat_id)
            if last is not None and now - last < self._cooldown:
                logger.debug("receipt_debounced")
                return False
            self._last_forwarded[chat_id] = now
        return True
