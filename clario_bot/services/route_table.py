"""Static mapping from intent names to reply rules.

Each rule is one variant of a small tagged union: ``TextRule`` sends one or
more literal messages in order, ``CardRule`` sends a single card loaded from
a named template. ``DEFAULT_RULE`` answers every intent the table does not
list, so an unmapped intent is an ordinary outcome rather than an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Union

from clario_bot.core.intents import IntentName


@dataclass(frozen=True, slots=True)
class TextRule:
    """Reply with the given messages, in order."""

    messages: tuple[str, ...]

    @property
    def kind(self) -> str:
        return "text"


@dataclass(frozen=True, slots=True)
class CardRule:
    """Reply with the card stored under ``template``."""

    template: str

    @property
    def kind(self) -> str:
        return "card"


RouteRule = Union[TextRule, CardRule]

WELCOME_CARD_TEMPLATE = "welcomeCard"
LOG_IN_CARD_TEMPLATE = "inputLogInCard"

NOT_UNDERSTOOD_MESSAGE = "I didn't understand what you just said to me."
HELP_OFFER_MESSAGE = "Let me try to provide some help."
CAPABILITIES_MESSAGE = (
    "I understand greetings, being asked for help, being asked for login you in "
    "Clario Admin, or being asked to cancel what I am doing."
)

DEFAULT_RULE: RouteRule = TextRule((NOT_UNDERSTOOD_MESSAGE,))

# None and Calendar_Edit are intentionally absent; they take the default rule.
ROUTE_TABLE: Mapping[str, RouteRule] = MappingProxyType(
    {
        IntentName.GREETING.value: TextRule(("Hello.",)),
        IntentName.GENERAL_INFO.value: CardRule(WELCOME_CARD_TEMPLATE),
        IntentName.HELP.value: TextRule((HELP_OFFER_MESSAGE, CAPABILITIES_MESSAGE)),
        IntentName.CANCEL.value: TextRule(("I have nothing to cancel.",)),
        IntentName.ON_DEVICE_LOG_IN.value: CardRule(LOG_IN_CARD_TEMPLATE),
        IntentName.CALENDAR_FIND.value: TextRule(("Searching for events in your calendar",)),
        IntentName.CALENDAR_ADD.value: TextRule(("Add event in your calendar",)),
    }
)


def lookup_rule(
    intent_name: str | None,
    route_table: Mapping[str, RouteRule] = ROUTE_TABLE,
    default_rule: RouteRule = DEFAULT_RULE,
) -> RouteRule:
    """Return the rule for ``intent_name`` by exact match, else ``default_rule``."""
    if not intent_name:
        return default_rule
    return route_table.get(intent_name, default_rule)


__all__ = [
    "CardRule",
    "DEFAULT_RULE",
    "ROUTE_TABLE",
    "RouteRule",
    "TextRule",
    "lookup_rule",
    "NOT_UNDERSTOOD_MESSAGE",
    "HELP_OFFER_MESSAGE",
    "CAPABILITIES_MESSAGE",
    "WELCOME_CARD_TEMPLATE",
    "LOG_IN_CARD_TEMPLATE",
]
