"""Core exception types shared across layers."""


class ClarioBotError(Exception):
    """Base class for errors raised while processing a turn."""


class ClassificationUnavailable(ClarioBotError):
    """Raised when the external intent recognizer cannot produce a result."""


class TemplateUnavailable(ClarioBotError):
    """Raised when a card template cannot be read or parsed."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"card template '{name}' unavailable: {reason}")
        self.name = name
        self.reason = reason


class ConnectorSendError(ClarioBotError):
    """Raised when an outbound activity cannot be delivered to the channel."""


__all__ = [
    "ClarioBotError",
    "ClassificationUnavailable",
    "TemplateUnavailable",
    "ConnectorSendError",
]
