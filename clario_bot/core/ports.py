"""Protocol definitions for infrastructure adapters."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Any, Protocol

from clario_bot.core.intents import IntentResult
from clario_bot.core.models import ConversationReference, ResponseAction


class TurnContextPort(Protocol):
    """Port exposing the current turn's addressing and the send primitive."""

    @property
    def reference(self) -> ConversationReference:
        """Return the conversation reference replies are addressed with."""
        ...

    async def send(self, action: ResponseAction) -> None:
        """Send one outbound message within the current turn."""
        ...


class IntentClassifierPort(Protocol):
    """Port exposing an external intent recognizer."""

    async def recognize(self, text: str, turn_context: TurnContextPort) -> list[IntentResult]:
        """Return intent guesses for ``text`` ordered by descending confidence.

        Raises ``ClassificationUnavailable`` when the recognizer cannot be reached.
        """
        ...


class TemplateStorePort(Protocol):
    """Port exposing read-only access to named card templates."""

    def load(self, name: str) -> Any:
        """Return the parsed JSON document stored under ``name``.

        Raises ``TemplateUnavailable`` when the template cannot be read or parsed.
        """
        ...

    def names(self) -> list[str]:
        """Return the available template names."""
        ...


class ConnectorPort(Protocol):
    """Port exposing delivery of outbound activities to a channel."""

    async def send_activity(
        self, service_url: str, conversation_id: str, activity: dict[str, Any]
    ) -> None:
        """Deliver ``activity`` into ``conversation_id`` on the channel at ``service_url``."""
        ...


__all__ = ["TurnContextPort", "IntentClassifierPort", "TemplateStorePort", "ConnectorPort"]
