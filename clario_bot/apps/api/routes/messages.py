"""Channel-facing messages endpoint (Bot Framework activity protocol)."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from clario_bot.adapters.turn_context import BufferedTurnContext, ConnectorTurnContext
from clario_bot.core.logging import get_logger
from clario_bot.core.models import Activity
from clario_bot.core.ports import ConnectorPort
from clario_bot.services import ServiceContainer
from clario_bot.services.turn_pipeline import run_turn
from clario_bot.services.turn_router import TurnRouter

from ..dependencies import get_service_container, get_turn_router, require_bot_token

router = APIRouter()
logger = get_logger(__name__)


def _require_connector(services: ServiceContainer) -> ConnectorPort:
    connector = services.connector
    if connector is None:
        raise RuntimeError("ConnectorPort has not been configured.")
    return connector


@router.post("/api/messages")
async def handle_activity(
    activity: Activity,
    _: Annotated[None, Depends(require_bot_token)],
    services: Annotated[ServiceContainer, Depends(get_service_container)],
    turn_router: Annotated[TurnRouter, Depends(get_turn_router)],
) -> Response:
    """Run one turn for ``activity`` and deliver or return its replies."""
    try:
        event = activity.to_event()
    except ValueError as exc:
        logger.warning("rejecting activity: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )
    if event is None:
        logger.info("ignoring activity of type %s", activity.type)
        return Response(status_code=status.HTTP_200_OK)

    if activity.expects_replies():
        buffered = BufferedTurnContext(event.reference)
        await run_turn(turn_router, event, buffered)
        return JSONResponse({"activities": buffered.activities})

    turn_context = ConnectorTurnContext(event.reference, _require_connector(services))
    await run_turn(turn_router, event, turn_context)
    return Response(status_code=status.HTTP_200_OK)


__all__ = ["router"]
