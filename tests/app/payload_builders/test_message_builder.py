"""Testes do MessagePayloadBuilder."""

from __future__ import annotations

import dataclasses
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import pytest

from app.domain.events import (
    ContactCard,
    ContextInfo,
    ExtendedText,
    Location,
    MediaContent,
    MessageContent,
    PollCreation,
)
from app.domain.payloads import LinkPreview, MessageType
from app.infra.whatsapp import MediaDownloadResult
from app.payload_builders.message import MessagePayloadBuilder
from app.protocols.models import ContactInfo, GroupInfo
from app.services import classify_message
from utils.errors import BridgeError

CONTACT_JID = "5511988887777@s.whatsapp.net"
CONTACT_LID = "123456789@lid"
GROUP_JID = "120363025246125486@g.us"


async def _build(deps, event):
    return await MessagePayloadBuilder(deps).build(event, classify_message(event.message))


class TestParties:
    @pytest.mark.asyncio
    async def test_incoming_from_lid_is_normalized(self, builder_deps, message_event_factory) -> None:
        event = message_event_factory(chat=CONTACT_LID, sender=CONTACT_LID)

        payload = await _build(builder_deps, event)

        assert payload.chat_id == CONTACT_JID
        assert payload.sender_id == CONTACT_JID
        assert payload.sender_number == "5511988887777"
        assert payload.sender_push_name == "Maria"
        assert payload.receiver_number == "5511999990000"
        assert payload.receiver_push_name == "Loja Centro"
        assert payload.from_me is False

    @pytest.mark.asyncio
    async def test_from_me_uses_self_and_contact(
        self, builder_deps, protocol_client, message_event_factory
    ) -> None:
        protocol_client.get_contact.return_value = ContactInfo(found=True, push_name="Maria")
        event = message_event_factory(
            sender="5511999990000:12@s.whatsapp.net", is_from_me=True, push_name=""
        )

        payload = await _build(builder_deps, event)

        assert payload.sender_id == "5511999990000@s.whatsapp.net"
        assert payload.sender_push_name == "Loja Centro"
        assert payload.receiver_number == "5511988887777"
        assert payload.receiver_push_name == "Maria"
        protocol_client.get_contact.assert_awaited_once_with(CONTACT_JID)

    @pytest.mark.asyncio
    async def test_group_message(self, builder_deps, protocol_client, message_event_factory) -> None:
        protocol_client.get_group_info.return_value = GroupInfo(jid=GROUP_JID, name="Equipe")
        event = message_event_factory(chat=GROUP_JID, is_group=True)

        payload = await _build(builder_deps, event)

        assert payload.chat_id == GROUP_JID
        assert payload.is_group is True
        assert payload.group_name == "Equipe"

    @pytest.mark.asyncio
    async def test_failed_lookups_are_omitted(
        self, builder_deps, protocol_client, message_event_factory
    ) -> None:
        protocol_client.get_self.side_effect = BridgeError("down")
        protocol_client.get_group_info.side_effect = BridgeError("down")
        event = message_event_factory(chat=GROUP_JID, is_group=True)

        payload = await _build(builder_deps, event)

        assert payload.receiver_number is None
        assert payload.group_name is None
        assert payload.text == "olá"

    @pytest.mark.asyncio
    async def test_timestamp_in_configured_timezone(self, builder_deps, message_event_factory) -> None:
        deps = dataclasses.replace(builder_deps, timezone=ZoneInfo("America/Sao_Paulo"))
        payload = await _build(deps, message_event_factory())
        assert payload.to_dict()["timestamp"] == "2026-10-18T12:30:00-03:00"


class TestText:
    @pytest.mark.asyncio
    async def test_lid_mentions_are_replaced(self, builder_deps, message_event_factory) -> None:
        content = MessageContent(
            extended_text=ExtendedText(
                text="oi @123456789, tudo bem?",
                context_info=ContextInfo(mentioned_jids=[CONTACT_LID]),
            )
        )

        payload = await _build(builder_deps, message_event_factory(content))

        assert payload.text == "oi @5511988887777, tudo bem?"
        assert payload.mentions == ("5511988887777",)

    @pytest.mark.asyncio
    async def test_forwarded_and_view_once_flags(self, builder_deps, message_event_factory) -> None:
        content = MessageContent(
            extended_text=ExtendedText(text="encaminhada", context_info=ContextInfo(is_forwarded=True))
        )
        payload = await _build(builder_deps, message_event_factory(content, is_view_once=True))
        assert payload.forwarded is True
        assert payload.view_once is True

    @pytest.mark.asyncio
    async def test_plain_text_has_no_flags(self, builder_deps, message_event_factory) -> None:
        data = (await _build(builder_deps, message_event_factory())).to_dict()
        assert "forwarded" not in data
        assert "view_once" not in data
        assert data["message_type"] == "text_message"


class TestLinkPreview:
    @pytest.mark.asyncio
    async def test_preview_from_message_metadata(self, builder_deps, message_event_factory) -> None:
        fetcher = AsyncMock()
        deps = dataclasses.replace(builder_deps, link_preview=fetcher)
        content = MessageContent(
            extended_text=ExtendedText(
                text="olha https://loja.test/promo",
                matched_text="https://loja.test/promo",
                title="Promoção",
                description="Só hoje",
            )
        )

        payload = await _build(deps, message_event_factory(content))

        assert payload.message_type == MessageType.LINK
        assert payload.link_preview == LinkPreview(
            url="https://loja.test/promo", title="Promoção", description="Só hoje"
        )
        fetcher.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_preview_fetched_when_message_has_none(
        self, builder_deps, message_event_factory
    ) -> None:
        fetcher = AsyncMock()
        fetcher.fetch.return_value = LinkPreview(url="https://loja.test/promo", title="Loja")
        deps = dataclasses.replace(builder_deps, link_preview=fetcher)
        content = MessageContent(conversation="olha https://loja.test/promo agora")

        payload = await _build(deps, message_event_factory(content))

        assert payload.link_preview.title == "Loja"
        fetcher.fetch.assert_awaited_once_with("https://loja.test/promo")

    @pytest.mark.asyncio
    async def test_no_preview_when_fetch_disabled(self, builder_deps, message_event_factory) -> None:
        content = MessageContent(conversation="https://loja.test")
        payload = await _build(builder_deps, message_event_factory(content))
        assert payload.link_preview is None


class TestMedia:
    @pytest.mark.asyncio
    async def test_remote_url_without_downloader(self, builder_deps, message_event_factory) -> None:
        content = MessageContent(
            image=MediaContent(url="https://mmg.test/img", mimetype="image/jpeg", caption="foto")
        )

        data = (await _build(builder_deps, message_event_factory(content))).to_dict()

        assert data["message_type"] == "image_message"
        assert data["media"] == {
            "type": "image",
            "mimetype": "image/jpeg",
            "extension": ".jpg",
            "caption": "foto",
            "url": "https://mmg.test/img",
        }

    @pytest.mark.asyncio
    async def test_local_path_with_downloader(self, builder_deps, message_event_factory) -> None:
        downloader = AsyncMock()
        downloader.download.return_value = MediaDownloadResult(path="storages/media/audio-3EB0A1.opus")
        deps = dataclasses.replace(builder_deps, media_downloader=downloader)
        content = MessageContent(audio=MediaContent(url="https://mmg.test/a", mimetype="audio/ogg; codecs=opus"))

        data = (await _build(deps, message_event_factory(content))).to_dict()

        assert data["media"]["path"] == "storages/media/audio-3EB0A1.opus"
        assert "url" not in data["media"]
        downloader.download.assert_awaited_once()
        assert downloader.download.await_args.kwargs["kind"] == "audio"

    @pytest.mark.asyncio
    async def test_failed_download_has_no_location(self, builder_deps, message_event_factory) -> None:
        downloader = AsyncMock()
        downloader.download.return_value = MediaDownloadResult(path=None, error="download_failed")
        deps = dataclasses.replace(builder_deps, media_downloader=downloader)
        content = MessageContent(document=MediaContent(file_name="nota.pdf", mimetype="application/pdf"))

        data = (await _build(deps, message_event_factory(content))).to_dict()

        assert data["media"]["file_name"] == "nota.pdf"
        assert "path" not in data["media"]
        assert "url" not in data["media"]


class TestStructuredContent:
    @pytest.mark.asyncio
    async def test_location(self, builder_deps, message_event_factory) -> None:
        content = MessageContent(location=Location(degrees_latitude=-23.55, degrees_longitude=-46.63, name="Sé"))
        payload = await _build(builder_deps, message_event_factory(content))
        assert payload.location["degrees_latitude"] == -23.55
        assert payload.location["name"] == "Sé"

    @pytest.mark.asyncio
    async def test_contact(self, builder_deps, message_event_factory) -> None:
        content = MessageContent(contact=ContactCard(display_name="Ana", vcard="BEGIN:VCARD"))
        payload = await _build(builder_deps, message_event_factory(content))
        assert payload.contact == {"display_name": "Ana", "vcard": "BEGIN:VCARD"}

    @pytest.mark.asyncio
    async def test_poll_creation(self, builder_deps, message_event_factory) -> None:
        secret = bytes(range(32))
        content = MessageContent(
            poll_creation=PollCreation(name="Cor?", options=["Red", "Blue"], selectable_options_count=1),
            message_secret=secret,
        )

        data = (await _build(builder_deps, message_event_factory(content))).to_dict()

        assert data["message_type"] == "poll_message"
        assert data["poll"] == {"question": "Cor?", "options": ["Red", "Blue"], "selectable_options_count": 1}
        assert data["message_secret"] == secret.hex()
