"""Turn boundary: run the router and convert failures into one apology."""

from __future__ import annotations

from clario_bot.core.logging import conversation_id_context, get_logger
from clario_bot.core.models import ConversationEvent, PlainText
from clario_bot.core.ports import TurnContextPort

from .turn_router import TurnRouter

logger = get_logger(__name__)

TURN_ERROR_MESSAGE = "Sorry, it looks like something went wrong."


async def run_turn(
    router: TurnRouter, event: ConversationEvent, turn_context: TurnContextPort
) -> None:
    """Route ``event`` and apologize once if anything in the turn fails."""
    with conversation_id_context(event.reference.conversation_id):
        try:
            await router.on_turn(event, turn_context)
        except Exception:  # pylint: disable=broad-except
            logger.error("exception caught while processing turn", exc_info=True)
            try:
                await turn_context.send(PlainText(TURN_ERROR_MESSAGE))
            except Exception:
                logger.error("failed to send turn error message", exc_info=True)
                raise


__all__ = ["TURN_ERROR_MESSAGE", "run_turn"]
