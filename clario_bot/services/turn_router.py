"""Turn router: classify inbound messages and dispatch canned replies."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from clario_bot.core.intents import IntentResult
from clario_bot.core.logging import get_logger
from clario_bot.core.models import ConversationEvent, MembershipChangedEvent, MessageEvent
from clario_bot.core.ports import IntentClassifierPort, TurnContextPort

from .conversation_lifecycle import welcome_added_members
from .response_catalog import ResponseCatalog
from .route_table import DEFAULT_RULE, ROUTE_TABLE, RouteRule, lookup_rule

logger = get_logger(__name__)


def select_top_intent(results: Sequence[IntentResult]) -> Optional[IntentResult]:
    """Return the highest-confidence result, or ``None`` when there are none.

    Ties go to the result the recognizer listed first.
    """
    if not results:
        return None
    return max(results, key=lambda result: result.confidence)


class TurnRouter:
    """Decide and send the replies for one conversational event."""

    def __init__(
        self,
        classifier: IntentClassifierPort,
        catalog: ResponseCatalog,
        route_table: Mapping[str, RouteRule] | None = None,
        default_rule: RouteRule | None = None,
    ) -> None:
        self._classifier = classifier
        self._catalog = catalog
        self._routes: Mapping[str, RouteRule] = dict(
            ROUTE_TABLE if route_table is None else route_table
        )
        self._default_rule = DEFAULT_RULE if default_rule is None else default_rule

    async def on_turn(self, event: ConversationEvent, turn_context: TurnContextPort) -> None:
        """Process ``event``; events other than messages and joins are ignored."""
        if isinstance(event, MessageEvent):
            await self._on_message(event, turn_context)
        elif isinstance(event, MembershipChangedEvent):
            await welcome_added_members(event, turn_context)
        else:
            logger.debug("ignoring event of type %s", type(event).__name__)

    def rule_for(self, intent_name: Optional[str]) -> RouteRule:
        """Return the rule an intent routes to, falling back to the default."""
        return lookup_rule(intent_name, self._routes, self._default_rule)

    def routes(self) -> Mapping[str, RouteRule]:
        """Return a shallow copy of the route table."""
        return dict(self._routes)

    @property
    def default_rule(self) -> RouteRule:
        return self._default_rule

    async def _on_message(self, event: MessageEvent, turn_context: TurnContextPort) -> None:
        # ClassificationUnavailable propagates to the turn boundary untouched.
        results = await self._classifier.recognize(event.text, turn_context)
        top = select_top_intent(results)
        intent_name = top.intent_name if top else None
        rule = self.rule_for(intent_name)
        logger.info(
            "routing intent %s (confidence=%s) to %s rule",
            intent_name or "<none>",
            f"{top.confidence:.2f}" if top else "-",
            "default" if rule is self._default_rule else rule.kind,
        )
        actions = self._catalog.resolve(rule)
        for action in actions:
            await turn_context.send(action)


__all__ = ["TurnRouter", "select_top_intent"]
