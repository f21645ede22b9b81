"""Tests for the Bot Framework connector client using a mock transport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from clario_bot.adapters.connector import TOKEN_URL, BotConnectorClient, reply_url
from clario_bot.core.exceptions import ConnectorSendError

ACTIVITY = {"type": "message", "text": "Hello.", "replyToId": "act-1"}


def test_reply_url() -> None:
    assert (
        reply_url("https://smba.example.com/amer/", "conv-1", "act-1")
        == "https://smba.example.com/amer/v3/conversations/conv-1/activities/act-1"
    )
    assert (
        reply_url("http://localhost:50000", "conv-1", None)
        == "http://localhost:50000/v3/conversations/conv-1/activities"
    )
    assert (
        reply_url("https://smba.example.com", "19:abc@thread.v2;messageid=1?x#y", "r/1")
        == "https://smba.example.com/v3/conversations/"
        "19%3Aabc%40thread.v2%3Bmessageid%3D1%3Fx%23y/activities/r%2F1"
    )


def test_send_without_credentials_posts_unauthenticated() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "reply-1"})

    client = BotConnectorClient(transport=httpx.MockTransport(handler))
    asyncio.run(client.send_activity("http://localhost:50000/", "conv-1", ACTIVITY))

    [request] = seen
    assert str(request.url) == "http://localhost:50000/v3/conversations/conv-1/activities/act-1"
    assert "authorization" not in request.headers
    assert json.loads(request.content) == ACTIVITY


def test_token_is_fetched_once_and_reused() -> None:
    token_requests: list[httpx.Request] = []
    activity_requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            token_requests.append(request)
            return httpx.Response(200, json={"access_token": "tok-1", "expires_in": 3600})
        activity_requests.append(request)
        return httpx.Response(201, json={"id": "reply"})

    client = BotConnectorClient(
        app_id="app-id", app_password="secret", transport=httpx.MockTransport(handler)
    )

    async def _send_twice() -> None:
        await client.send_activity("https://channel.example.com", "conv-1", ACTIVITY)
        await client.send_activity("https://channel.example.com", "conv-1", ACTIVITY)

    asyncio.run(_send_twice())

    assert len(token_requests) == 1
    assert b"grant_type=client_credentials" in token_requests[0].content
    assert [r.headers["authorization"] for r in activity_requests] == ["Bearer tok-1"] * 2


def test_error_status_raises_send_error() -> None:
    client = BotConnectorClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(403, text="forbidden"))
    )

    with pytest.raises(ConnectorSendError):
        asyncio.run(client.send_activity("https://channel.example.com", "conv-1", ACTIVITY))


def test_token_failure_raises_send_error() -> None:
    client = BotConnectorClient(
        app_id="app-id",
        app_password="wrong",
        transport=httpx.MockTransport(lambda request: httpx.Response(401, json={})),
    )

    with pytest.raises(ConnectorSendError):
        asyncio.run(client.send_activity("https://channel.example.com", "conv-1", ACTIVITY))


def test_missing_service_url_raises() -> None:
    with pytest.raises(ConnectorSendError):
        asyncio.run(BotConnectorClient().send_activity("", "conv-1", ACTIVITY))


def test_reserved_characters_in_ids_are_percent_encoded() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "reply-1"})

    client = BotConnectorClient(transport=httpx.MockTransport(handler))
    asyncio.run(
        client.send_activity(
            "https://smba.example.com",
            "19:abc@thread.v2;messageid=1?x#y",
            {"type": "message", "replyToId": "r/1"},
        )
    )

    [request] = seen
    assert request.url.raw_path.endswith(b"/activities/r%2F1")
    assert request.url.query == b""
    assert request.url.fragment == ""
