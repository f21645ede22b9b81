"""Core data transfer objects shared across layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"

MESSAGE_ACTIVITY = "message"
CONVERSATION_UPDATE_ACTIVITY = "conversationUpdate"
EXPECT_REPLIES_DELIVERY_MODE = "expectReplies"


# ---------------------------------------------------------------------------
# Inbound wire payload
# ---------------------------------------------------------------------------


class ChannelAccount(BaseModel):
    """A participant (user or bot) on a channel."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None


class ConversationAccount(BaseModel):
    """The conversation an activity belongs to."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None


class Activity(BaseModel):
    """Inbound Bot Framework activity, limited to the fields routing needs."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str
    id: Optional[str] = None
    text: Optional[str] = None
    channel_id: Optional[str] = Field(default=None, alias="channelId")
    service_url: Optional[str] = Field(default=None, alias="serviceUrl")
    from_: Optional[ChannelAccount] = Field(default=None, alias="from")
    recipient: Optional[ChannelAccount] = None
    conversation: Optional[ConversationAccount] = None
    members_added: list[ChannelAccount] = Field(default_factory=list, alias="membersAdded")
    delivery_mode: Optional[str] = Field(default=None, alias="deliveryMode")

    def expects_replies(self) -> bool:
        """True when the channel wants replies in the HTTP response body."""
        return self.delivery_mode == EXPECT_REPLIES_DELIVERY_MODE

    def conversation_reference(self) -> "ConversationReference":
        """Return the addressing data needed to reply within this conversation."""
        if self.from_ is None or self.recipient is None or self.conversation is None:
            raise ValueError("activity is missing from, recipient, or conversation")
        return ConversationReference(
            conversation_id=self.conversation.id,
            user=Participant(id=self.from_.id, name=self.from_.name),
            bot=Participant(id=self.recipient.id, name=self.recipient.name),
            service_url=self.service_url or "",
            channel_id=self.channel_id or "",
            activity_id=self.id,
        )

    def to_event(self) -> Optional["ConversationEvent"]:
        """Map the activity to a routable event, or ``None`` when ignored."""
        if self.type == MESSAGE_ACTIVITY:
            reference = self.conversation_reference()
            return MessageEvent(
                text=self.text or "",
                sender=reference.user,
                recipient=reference.bot,
                reference=reference,
            )
        if self.type == CONVERSATION_UPDATE_ACTIVITY:
            reference = self.conversation_reference()
            return MembershipChangedEvent(
                added_members=tuple(member.id for member in self.members_added),
                recipient_id=reference.bot.id,
                reference=reference,
            )
        return None


# ---------------------------------------------------------------------------
# Conversation events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Participant:
    """Identity of a conversation member."""

    id: str
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ConversationReference:
    """Where replies for a turn should go."""

    conversation_id: str
    user: Participant
    bot: Participant
    service_url: str = ""
    channel_id: str = ""
    activity_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """A user typed something."""

    text: str
    sender: Participant
    recipient: Participant
    reference: ConversationReference


@dataclass(frozen=True, slots=True)
class MembershipChangedEvent:
    """Participants joined the conversation."""

    added_members: tuple[str, ...]
    recipient_id: str
    reference: ConversationReference


ConversationEvent = Union[MessageEvent, MembershipChangedEvent]


# ---------------------------------------------------------------------------
# Outbound responses
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PlainText:
    """A plain text reply."""

    text: str


@dataclass(frozen=True, slots=True)
class CardAttachment:
    """A rich card reply carrying a parsed JSON document."""

    content_type: str
    payload: Any


ResponseAction = Union[PlainText, CardAttachment]


def build_outbound_activity(
    reference: ConversationReference, action: ResponseAction
) -> dict[str, Any]:
    """Build a reply activity addressed from the bot back to the original sender."""
    activity: dict[str, Any] = {
        "type": MESSAGE_ACTIVITY,
        "from": _account(reference.bot),
        "recipient": _account(reference.user),
        "conversation": {"id": reference.conversation_id},
    }
    if reference.channel_id:
        activity["channelId"] = reference.channel_id
    if reference.service_url:
        activity["serviceUrl"] = reference.service_url
    if reference.activity_id:
        activity["replyToId"] = reference.activity_id

    if isinstance(action, PlainText):
        activity["text"] = action.text
    elif isinstance(action, CardAttachment):
        activity["attachments"] = [
            {"contentType": action.content_type, "content": action.payload}
        ]
    else:
        raise TypeError(f"unsupported response action: {type(action).__name__}")
    return activity


def _account(participant: Participant) -> dict[str, str]:
    account = {"id": participant.id}
    if participant.name:
        account["name"] = participant.name
    return account


__all__ = [
    "ADAPTIVE_CARD_CONTENT_TYPE",
    "Activity",
    "CardAttachment",
    "ChannelAccount",
    "ConversationAccount",
    "ConversationEvent",
    "ConversationReference",
    "MembershipChangedEvent",
    "MessageEvent",
    "Participant",
    "PlainText",
    "ResponseAction",
    "build_outbound_activity",
]
