"""Turn route rules into concrete reply actions."""

from __future__ import annotations

from clario_bot.core.logging import get_logger
from clario_bot.core.models import (
    ADAPTIVE_CARD_CONTENT_TYPE,
    CardAttachment,
    PlainText,
    ResponseAction,
)
from clario_bot.core.ports import TemplateStorePort

from .route_table import CardRule, RouteRule, TextRule

logger = get_logger(__name__)


class ResponseCatalog:
    """Resolve route rules against the card template store."""

    def __init__(self, template_store: TemplateStorePort) -> None:
        self._templates = template_store

    def resolve(self, rule: RouteRule) -> list[ResponseAction]:
        """Return the reply actions for ``rule`` in send order.

        Card templates are re-read on every call. ``TemplateUnavailable`` from
        the store propagates unchanged.
        """
        if isinstance(rule, TextRule):
            return [PlainText(message) for message in rule.messages]
        if isinstance(rule, CardRule):
            return [self.card(rule.template)]
        raise TypeError(f"unsupported route rule: {type(rule).__name__}")

    def card(self, template: str) -> CardAttachment:
        """Load ``template`` and wrap it as an adaptive card attachment."""
        payload = self._templates.load(template)
        logger.debug("loaded card template %s", template)
        return CardAttachment(content_type=ADAPTIVE_CARD_CONTENT_TYPE, payload=payload)


__all__ = ["ResponseCatalog"]
