"""Top-level FastAPI entrypoint (``uvicorn main:app``)."""

from clario_bot.api_factory import create_app

app = create_app()

__all__ = ["app"]
