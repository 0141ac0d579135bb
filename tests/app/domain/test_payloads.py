"""Testes de serialização dos payloads de webhook."""

from __future__ import annotations

from datetime import UTC, datetime

from app.domain.payloads import (
    DeleteForMePayload,
    EventKind,
    GroupParticipantsPayload,
    LocalMedia,
    MediaAttachment,
    MessagePayload,
    MessageType,
    OriginalMessage,
    RemoteMedia,
    WebhookEvent,
)

TS = datetime(2026, 10, 18, 15, 30, tzinfo=UTC)


def _message(**overrides: object) -> MessagePayload:
    base: dict[str, object] = {
        "id": "3EB0A1",
        "timestamp": TS,
        "chat_id": "5511988887777@s.whatsapp.net",
        "sender_id": "5511988887777@s.whatsapp.net",
        "sender_number": "5511988887777",
        "message_type": MessageType.TEXT,
        "text": "oi",
    }
    base.update(overrides)
    return MessagePayload(**base)


class TestMessagePayload:
    def test_to_dict_omits_absent_fields(self) -> None:
        data = _message().to_dict()
        assert data["message_type"] == "text_message"
        assert data["timestamp"] == "2026-10-18T15:30:00+00:00"
        assert data["from_me"] is False
        assert "media" not in data
        assert "link_preview" not in data
        assert "forwarded" not in data

    def test_local_media_serializes_path_only(self) -> None:
        media = MediaAttachment(
            kind="image",
            mimetype="image/jpeg",
            extension=".jpg",
            location=LocalMedia(path="storages/media/image-3EB0A1.jpg"),
        )
        data = _message(message_type=MessageType.IMAGE, media=media).to_dict()
        assert data["media"] == {
            "type": "image",
            "mimetype": "image/jpeg",
            "extension": ".jpg",
            "path": "storages/media/image-3EB0A1.jpg",
        }

    def test_remote_media_serializes_url_only(self) -> None:
        media = MediaAttachment(kind="audio", location=RemoteMedia(url="https://mmg.test/a"))
        data = media.to_dict()
        assert data["url"] == "https://mmg.test/a"
        assert "path" not in data

    def test_mentions_become_list(self) -> None:
        data = _message(mentions=("5511988887777",)).to_dict()
        assert data["mentions"] == ["5511988887777"]


class TestOtherPayloads:
    def test_group_payload_without_sender(self) -> None:
        payload = GroupParticipantsPayload(
            id="1203@g.us:join:1792337400",
            timestamp=TS,
            chat_id="1203@g.us",
            action="join",
            participants=("a@s.whatsapp.net", "b@s.whatsapp.net"),
        )
        data = payload.to_dict()
        assert data["participants"] == ["a@s.whatsapp.net", "b@s.whatsapp.net"]
        assert "sender_id" not in data

    def test_delete_for_me_nests_original(self) -> None:
        payload = DeleteForMePayload(
            id="ABC",
            timestamp=TS,
            chat_id="a@s.whatsapp.net",
            sender_id="a@s.whatsapp.net",
            sender_number="a",
            original=OriginalMessage(content="texto apagado", timestamp=TS),
        )
        assert payload.to_dict()["original"] == {
            "content": "texto apagado",
            "timestamp": "2026-10-18T15:30:00+00:00",
        }


class TestWebhookEvent:
    def test_to_wire_envelope(self) -> None:
        payload = _message()
        event = WebhookEvent(
            kind=EventKind.MESSAGE,
            device_id="primary",
            timestamp=payload.timestamp,
            payload=payload,
        )
        wire = event.to_wire()
        assert set(wire) == {"event", "device_id", "timestamp", "payload"}
        assert wire["event"] == "message"
        assert wire["device_id"] == "primary"
        assert wire["payload"]["id"] == "3EB0A1"
