"""Bot Framework connector client for delivering reply activities."""

from __future__ import annotations

import time
from typing import Any, Optional
from urllib.parse import quote

import httpx

from clario_bot.core.exceptions import ConnectorSendError
from clario_bot.core.logging import get_logger
from clario_bot.core.ports import ConnectorPort

logger = get_logger(__name__)

TOKEN_URL = "https://login.microsoftonline.com/botframework.com/oauth2/v2.0/token"
TOKEN_SCOPE = "https://api.botframework.com/.default"
TOKEN_REFRESH_MARGIN_SECONDS = 60


class BotConnectorClient(ConnectorPort):
    """Post activities to ``{serviceUrl}/v3/conversations/...``.

    When app credentials are configured, a client-credentials token is
    fetched and cached until shortly before it expires. Without credentials
    (local emulator) requests are sent unauthenticated.
    """

    def __init__(
        self,
        *,
        app_id: Optional[str] = None,
        app_password: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._app_id = app_id
        self._app_password = app_password
        self._transport = transport
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    async def send_activity(
        self, service_url: str, conversation_id: str, activity: dict[str, Any]
    ) -> None:
        if not service_url:
            raise ConnectorSendError("activity has no serviceUrl to reply to")
        url = reply_url(service_url, conversation_id, activity.get("replyToId"))
        headers = {"Content-Type": "application/json"}
        token = await self._get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(url, headers=headers, json=activity)
        except httpx.HTTPError as exc:
            logger.error("failed to reach channel connector: %s", exc)
            raise ConnectorSendError("channel connector unreachable") from exc
        if response.status_code >= 400:
            logger.error("failed to send activity: %s %s", response.status_code, response.text)
            raise ConnectorSendError(f"channel connector returned {response.status_code}")
        logger.info("sent activity to conversation %s", conversation_id)

    async def _get_token(self) -> Optional[str]:
        if not self._app_id:
            return None
        if self._token and time.time() < self._token_expires_at:
            return self._token
        data = {
            "grant_type": "client_credentials",
            "client_id": self._app_id,
            "client_secret": self._app_password or "",
            "scope": TOKEN_SCOPE,
        }
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(TOKEN_URL, data=data)
            response.raise_for_status()
            body = response.json()
            token = str(body["access_token"])
            expires_in = int(body.get("expires_in", 3600))
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
            logger.error("failed to obtain connector token: %s", exc)
            raise ConnectorSendError("unable to authenticate with the channel") from exc
        self._token = token
        self._token_expires_at = time.time() + max(0, expires_in - TOKEN_REFRESH_MARGIN_SECONDS)
        return token


def reply_url(service_url: str, conversation_id: str, reply_to_id: Optional[str]) -> str:
    """Return the connector URL for a new activity or a reply to ``reply_to_id``."""
    url = (
        f"{service_url.rstrip('/')}/v3/conversations/{quote(conversation_id, safe='')}/activities"
    )
    if reply_to_id:
        url = f"{url}/{quote(reply_to_id, safe='')}"
    return url


__all__ = ["BotConnectorClient", "reply_url"]
