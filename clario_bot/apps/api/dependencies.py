"""Shared FastAPI dependencies for token validation and service access."""

import hmac
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status

from clario_bot.core.config import config
from clario_bot.services import ServiceContainer, runtime
from clario_bot.services.turn_router import TurnRouter


async def _validate_token(
    *,
    expected: Optional[str],
    authorization: Optional[str] = None,
) -> None:
    """Shared helper to validate a bearer token header."""
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token not configured",
            headers={"WWW-Authenticate": "Bearer"},
        )

    provided = None
    if authorization and authorization.lower().startswith("bearer "):
        provided = authorization.split(" ", 1)[1].strip()

    if not provided:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not hmac.compare_digest(provided, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def require_bot_token(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
) -> None:
    """Guard for the channel-facing messages endpoint."""
    if not config.ENABLE_BOT_AUTH:
        return
    await _validate_token(expected=config.BOT_API_TOKEN, authorization=authorization)


async def require_healthcheck_token(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
) -> None:
    """Token guard specifically for the health check endpoint."""
    if not config.ENABLE_BOT_AUTH:
        return
    await _validate_token(expected=config.HEALTHCHECK_API_TOKEN, authorization=authorization)


def get_service_container() -> ServiceContainer:
    """Resolve the globally configured service container."""
    try:
        return runtime.get_services()
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        ) from exc


def get_turn_router(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> TurnRouter:
    """Return the turn router bound to the active container."""
    if container.turn_router is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Turn router is unavailable",
        )
    return container.turn_router


__all__ = [
    "get_service_container",
    "get_turn_router",
    "require_bot_token",
    "require_healthcheck_token",
]
