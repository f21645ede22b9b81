"""Infrastructure adapter exports."""

from clario_bot.core.exceptions import (  # noqa: F401
    ClassificationUnavailable,
    ConnectorSendError,
    TemplateUnavailable,
)

from .connector import BotConnectorClient
from .luis_classifier import LuisIntentClassifier
from .openai_classifier import OpenAIIntentClassifier
from .templates import FileTemplateStore
from .turn_context import BufferedTurnContext, ConnectorTurnContext

__all__ = [
    "BotConnectorClient",
    "BufferedTurnContext",
    "ConnectorTurnContext",
    "FileTemplateStore",
    "LuisIntentClassifier",
    "OpenAIIntentClassifier",
    "ClassificationUnavailable",
    "ConnectorSendError",
    "TemplateUnavailable",
]
