"""Welcome sequence for participants joining a conversation."""

from __future__ import annotations

from clario_bot.core.logging import get_logger
from clario_bot.core.models import MembershipChangedEvent, PlainText
from clario_bot.core.ports import TurnContextPort
from clario_bot.utils.identifiers import get_log_safe_participant_id

logger = get_logger(__name__)

WELCOME_MESSAGES: tuple[str, ...] = (
    "Hello, Nice to talk with you!",
    "Ask for info or help if you have problems.",
)


async def welcome_added_members(
    event: MembershipChangedEvent, turn_context: TurnContextPort
) -> None:
    """Greet every added member except the bot receiving the event.

    Members are handled in the order the channel listed them and each one's
    messages are sent in full before the next member starts.
    """
    for member_id in event.added_members:
        if member_id == event.recipient_id:
            continue
        logger.info("welcoming member %s", get_log_safe_participant_id(member_id))
        for message in WELCOME_MESSAGES:
            await turn_context.send(PlainText(message))


__all__ = ["WELCOME_MESSAGES", "welcome_added_members"]
