"""Protocolos e contratos do core da aplicação."""

from .chat_storage import ChatStorageProtocol
from .models import ContactInfo, GroupInfo, SelfInfo, StoredMessage
from .poll_store import PollStoreProtocol
from .protocol_client import ProtocolClientProtocol

__all__ = [
    "ChatStorageProtocol",
    "ContactInfo",
    "GroupInfo",
    "PollStoreProtocol",
    "ProtocolClientProtocol",
    "SelfInfo",
    "StoredMessage",
]
