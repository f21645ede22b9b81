"""Health and readiness routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import require_healthcheck_token

router = APIRouter()


@router.get("/")
def read_root() -> dict[str, str]:
    """Info endpoint pointing channels at the messages route."""
    return {"message": "Clario bot is running. Point your channel at /api/messages."}


@router.get("/alive")
async def alive_check(_: None = Depends(require_healthcheck_token)) -> JSONResponse:
    """Authenticated health check endpoint for infrastructure probes."""
    return JSONResponse({"status": "ok", "message": "Clario bot is alive and healthy."})


__all__ = ["router"]
