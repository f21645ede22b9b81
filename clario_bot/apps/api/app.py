"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from clario_bot import CLARIO_BOT_VERSION
from clario_bot.apps.api.middleware import CorrelationIdMiddleware
from clario_bot.core.logging import get_logger
from clario_bot.services import ServiceContainer
from clario_bot.services import runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register the service container at startup and log shutdown."""
    logger.info("Initializing clario bot %s...", CLARIO_BOT_VERSION)
    # Keep the registry populated even for non-HTTP contexts (e.g., CLI tests)
    services = getattr(app.state, "services", None)
    if isinstance(services, ServiceContainer):
        runtime.set_services(services)
    logger.info("clario bot ready.")
    try:
        yield
    finally:
        logger.info("clario bot shutting down.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(title="Clario Bot", version=CLARIO_BOT_VERSION, lifespan=lifespan)
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import health, messages  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(messages.router)
    return app


__all__ = ["create_app", "lifespan"]
