"""Fixtures compartilhadas pelos testes da camada app."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from app.domain.events import MessageContent, MessageEvent, MessageInfo
from app.infra.stores import JsonFilePollStore
from app.payload_builders import BuilderDeps
from app.protocols.models import SelfInfo
from app.services import IdentityNormalizer, PollVoteDecryptor

SELF_JID = "5511999990000:12@s.whatsapp.net"
CONTACT_JID = "5511988887777@s.whatsapp.net"
CONTACT_LID = "123456789@lid"

FIXED_TS = datetime(2026, 10, 18, 15, 30, tzinfo=UTC)


@pytest.fixture
def lid_map() -> dict[str, str]:
    """Mapeamento LID → telefone que o cliente fake conhece."""
    return {CONTACT_LID: CONTACT_JID}


@pytest.fixture
def protocol_client(lid_map: dict[str, str]) -> AsyncMock:
    """Cliente do protocolo com respostas neutras (sem contato/grupo/voto)."""
    client = AsyncMock()
    client.get_pn_for_lid.side_effect = lid_map.get
    client.get_self.return_value = SelfInfo(jid=SELF_JID, push_name="Loja Centro")
    client.get_contact.return_value = None
    client.get_group_info.return_value = None
    client.decrypt_poll_vote.return_value = []
    client.get_message_by_id.return_value = None
    client.download_media.return_value = b""
    return client


@pytest.fixture
def poll_store(tmp_path) -> JsonFilePollStore:
    return JsonFilePollStore(tmp_path / "poll_store.json")


@pytest.fixture
def builder_deps(protocol_client: AsyncMock, poll_store: JsonFilePollStore) -> BuilderDeps:
    return BuilderDeps(
        identity=IdentityNormalizer(protocol_client),
        client=protocol_client,
        poll_store=poll_store,
        poll_votes=PollVoteDecryptor(
            client=protocol_client,
            poll_store=poll_store,
            chat_storage=protocol_client,
        ),
        chat_storage=protocol_client,
    )


def make_message_event(
    content: MessageContent | None = None,
    *,
    message_id: str = "3EB0A1B2C3",
    chat: str = CONTACT_JID,
    sender: str = CONTACT_JID,
    is_from_me: bool = False,
    is_group: bool = False,
    push_name: str = "Maria",
    is_view_once: bool = False,
) -> MessageEvent:
    return MessageEvent(
        info=MessageInfo(
            id=message_id,
            chat=chat,
            sender=sender,
            is_from_me=is_from_me,
            is_group=is_group,
            push_name=push_name,
            timestamp=FIXED_TS,
        ),
        message=content or MessageContent(conversation="olá"),
        is_view_once=is_view_once,
    )


@pytest.fixture
def message_event_factory():
    """Fábrica de MessageEvent com defaults de chat 1:1 recebido."""
    return make_message_event
