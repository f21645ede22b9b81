"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so real keys are used when present.
"""
from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Ensure required env vars exist for config import in app (fallbacks only)
os.environ.setdefault("OPENAI_API_KEY", "test")
os.environ.setdefault("CLASSIFIER_BACKEND", "openai")
os.environ.setdefault("BOT_API_TOKEN", "test-bot-token")
os.environ.setdefault("HEALTHCHECK_API_TOKEN", "test-health-token")
os.environ.setdefault("CLARIO_BOT_LOG_DIR", tempfile.mkdtemp(prefix="clario-bot-logs-"))

# pylint: disable=wrong-import-position
from clario_bot.adapters.templates import FileTemplateStore  # noqa: E402
from clario_bot.core.config import DEFAULT_CARDS_DIR  # noqa: E402
from clario_bot.core.intents import IntentResult  # noqa: E402
from clario_bot.core.models import (  # noqa: E402
    ConversationReference,
    MembershipChangedEvent,
    MessageEvent,
    Participant,
)
from clario_bot.services import ServiceContainer, build_default_services, runtime  # noqa: E402

BOT = Participant(id="bot-1", name="Clario")
USER = Participant(id="user-1", name="Ada")


class StubClassifier:
    """Intent recognizer returning canned results or raising a canned error."""

    def __init__(
        self,
        results: Sequence[IntentResult] = (),
        error: Optional[BaseException] = None,
    ) -> None:
        self.results = list(results)
        self.error = error
        self.calls: list[str] = []

    async def recognize(self, text: str, turn_context: Any) -> list[IntentResult]:
        del turn_context
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return list(self.results)


class RecordingConnector:
    """Connector that records delivered activities instead of posting them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, dict[str, Any]]] = []

    async def send_activity(
        self, service_url: str, conversation_id: str, activity: dict[str, Any]
    ) -> None:
        self.sent.append((service_url, conversation_id, activity))


def make_reference(activity_id: Optional[str] = "act-1") -> ConversationReference:
    return ConversationReference(
        conversation_id="conv-1",
        user=USER,
        bot=BOT,
        service_url="https://channel.example.com/",
        channel_id="emulator",
        activity_id=activity_id,
    )


def make_message(text: str = "hello") -> MessageEvent:
    return MessageEvent(text=text, sender=USER, recipient=BOT, reference=make_reference())


def make_membership(*member_ids: str, recipient_id: str = BOT.id) -> MembershipChangedEvent:
    return MembershipChangedEvent(
        added_members=tuple(member_ids),
        recipient_id=recipient_id,
        reference=make_reference(),
    )


@pytest.fixture
def classifier() -> StubClassifier:
    return StubClassifier()


@pytest.fixture
def template_store() -> FileTemplateStore:
    return FileTemplateStore(DEFAULT_CARDS_DIR)


@pytest.fixture
def connector() -> RecordingConnector:
    return RecordingConnector()


@pytest.fixture
def services(
    classifier: StubClassifier,
    template_store: FileTemplateStore,
    connector: RecordingConnector,
) -> Iterator[ServiceContainer]:
    """In-memory service container registered as the active runtime container."""
    container = build_default_services(
        classifier_port=classifier,
        template_store_port=template_store,
        connector_port=connector,
    )
    runtime.set_services(container)
    yield container
    runtime.clear_services()
