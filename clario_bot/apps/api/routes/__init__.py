"""Router namespace exports for FastAPI include hooks."""

from . import health, messages

__all__ = ["health", "messages"]
