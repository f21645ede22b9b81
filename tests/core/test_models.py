"""Tests for core data models."""

from __future__ import annotations

import pytest

from clario_bot.core.models import (
    ADAPTIVE_CARD_CONTENT_TYPE,
    Activity,
    CardAttachment,
    MembershipChangedEvent,
    MessageEvent,
    PlainText,
    build_outbound_activity,
)

from conftest import make_reference


def _activity(**overrides) -> dict:
    payload = {
        "type": "message",
        "id": "act-9",
        "text": "hello",
        "channelId": "emulator",
        "serviceUrl": "http://localhost:50000",
        "from": {"id": "user-1", "name": "Ada"},
        "recipient": {"id": "bot-1", "name": "Clario"},
        "conversation": {"id": "conv-1"},
        "locale": "en-US",
    }
    payload.update(overrides)
    return payload


def test_message_activity_maps_to_message_event() -> None:
    event = Activity.model_validate(_activity()).to_event()

    assert isinstance(event, MessageEvent)
    assert event.text == "hello"
    assert event.sender.id == "user-1"
    assert event.recipient.id == "bot-1"
    assert event.reference.activity_id == "act-9"
    assert event.reference.service_url == "http://localhost:50000"


def test_conversation_update_keeps_member_order() -> None:
    payload = _activity(
        type="conversationUpdate",
        text=None,
        membersAdded=[{"id": "user-2"}, {"id": "bot-1"}, {"id": "user-3"}],
    )

    event = Activity.model_validate(payload).to_event()

    assert isinstance(event, MembershipChangedEvent)
    assert event.added_members == ("user-2", "bot-1", "user-3")
    assert event.recipient_id == "bot-1"


@pytest.mark.parametrize("activity_type", ["typing", "messageReaction", "invoke", "endOfConversation"])
def test_other_activity_types_are_ignored(activity_type: str) -> None:
    assert Activity.model_validate(_activity(type=activity_type)).to_event() is None


def test_message_without_addressing_is_rejected() -> None:
    payload = _activity()
    del payload["conversation"]

    with pytest.raises(ValueError):
        Activity.model_validate(payload).to_event()


def test_missing_text_becomes_empty_string() -> None:
    event = Activity.model_validate(_activity(text=None)).to_event()

    assert isinstance(event, MessageEvent)
    assert event.text == ""


def test_expects_replies() -> None:
    assert Activity.model_validate(_activity(deliveryMode="expectReplies")).expects_replies()
    assert not Activity.model_validate(_activity()).expects_replies()


def test_build_outbound_text_activity() -> None:
    activity = build_outbound_activity(make_reference(), PlainText("Hello."))

    assert activity == {
        "type": "message",
        "from": {"id": "bot-1", "name": "Clario"},
        "recipient": {"id": "user-1", "name": "Ada"},
        "conversation": {"id": "conv-1"},
        "channelId": "emulator",
        "serviceUrl": "https://channel.example.com/",
        "replyToId": "act-1",
        "text": "Hello.",
    }


def test_build_outbound_card_activity() -> None:
    card = CardAttachment(content_type=ADAPTIVE_CARD_CONTENT_TYPE, payload={"type": "AdaptiveCard"})

    activity = build_outbound_activity(make_reference(activity_id=None), card)

    assert "replyToId" not in activity
    assert "text" not in activity
    assert activity["attachments"] == [
        {"contentType": ADAPTIVE_CARD_CONTENT_TYPE, "content": {"type": "AdaptiveCard"}}
    ]
