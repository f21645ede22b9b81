"""Turn context implementations: in-memory buffering and connector delivery."""

from __future__ import annotations

from typing import Any

from clario_bot.core.models import ConversationReference, ResponseAction, build_outbound_activity
from clario_bot.core.ports import ConnectorPort, TurnContextPort


class BufferedTurnContext(TurnContextPort):
    """Collect reply activities in send order instead of delivering them."""

    def __init__(self, reference: ConversationReference) -> None:
        self._reference = reference
        self.activities: list[dict[str, Any]] = []

    @property
    def reference(self) -> ConversationReference:
        return self._reference

    async def send(self, action: ResponseAction) -> None:
        self.activities.append(build_outbound_activity(self._reference, action))


class ConnectorTurnContext(TurnContextPort):
    """Deliver each reply through the channel connector as it is sent."""

    def __init__(self, reference: ConversationReference, connector: ConnectorPort) -> None:
        self._reference = reference
        self._connector = connector

    @property
    def reference(self) -> ConversationReference:
        return self._reference

    async def send(self, action: ResponseAction) -> None:
        activity = build_outbound_activity(self._reference, action)
        await self._connector.send_activity(
            self._reference.service_url, self._reference.conversation_id, activity
        )


__all__ = ["BufferedTurnContext", "ConnectorTurnContext"]
