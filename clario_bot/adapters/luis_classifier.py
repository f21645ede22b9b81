"""Intent recognizer backed by the LUIS v2 prediction endpoint."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from clario_bot.core.exceptions import ClassificationUnavailable
from clario_bot.core.intents import IntentResult, clamp_confidence, rank_results
from clario_bot.core.logging import get_logger
from clario_bot.core.ports import IntentClassifierPort, TurnContextPort

logger = get_logger(__name__)


class LuisIntentClassifier(IntentClassifierPort):
    """Query a published LUIS application and rank its intent scores."""

    def __init__(
        self,
        *,
        app_id: str,
        endpoint_key: str,
        endpoint: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = f"{endpoint.rstrip('/')}/luis/v2.0/apps/{app_id}"
        self._endpoint_key = endpoint_key
        self._transport = transport

    async def recognize(self, text: str, turn_context: TurnContextPort) -> list[IntentResult]:
        del turn_context
        params = {
            "q": text,
            "subscription-key": self._endpoint_key,
            "verbose": "true",
        }
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(self._url, params=params)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            logger.error("LUIS request failed: %s", exc)
            raise ClassificationUnavailable("LUIS intent recognition failed") from exc
        except ValueError as exc:
            logger.error("LUIS returned a malformed body: %s", exc)
            raise ClassificationUnavailable("LUIS returned a malformed response") from exc

        try:
            results = rank_results(_parse_intents(body))
        except ClassificationUnavailable as exc:
            logger.error("%s", exc)
            raise
        logger.info(
            "extracted intents: %s",
            " ".join(f"{r.intent_name}={r.confidence:.2f}" for r in results) or "<none>",
        )
        return results


def _parse_intents(body: Any) -> list[IntentResult]:
    if not isinstance(body, dict):
        raise ClassificationUnavailable("LUIS response is not a JSON object")
    entries = body.get("intents")
    if entries is not None and not isinstance(entries, list):
        raise ClassificationUnavailable("LUIS response has a non-list 'intents'")
    if not entries:
        if "topScoringIntent" not in body:
            raise ClassificationUnavailable("LUIS response carries no intents")
        entries = [body["topScoringIntent"]]
    results: list[IntentResult] = []
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("intent"), str):
            raise ClassificationUnavailable(f"LUIS returned a malformed intent entry: {entry!r}")
        try:
            score = float(entry["score"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ClassificationUnavailable(
                f"LUIS returned an unreadable score for {entry['intent']}"
            ) from exc
        results.append(IntentResult(intent_name=entry["intent"], confidence=clamp_confidence(score)))
    return results


__all__ = ["LuisIntentClassifier"]
