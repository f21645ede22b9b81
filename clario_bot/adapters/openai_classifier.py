"""Intent recognizer backed by OpenAI structured outputs."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, cast

from openai import OpenAI, OpenAIError
from openai.types.responses.easy_input_message_param import EasyInputMessageParam

from clario_bot.core.exceptions import ClassificationUnavailable
from clario_bot.core.intents import (
    IntentName,
    IntentResult,
    IntentScores,
    clamp_confidence,
    rank_results,
)
from clario_bot.core.logging import get_logger
from clario_bot.core.ports import IntentClassifierPort, TurnContextPort

logger = get_logger(__name__)

INTENT_CLASSIFICATION_SYSTEM_PROMPT = f"""
You are the language-understanding node of Clario, a chat assistant for Clario Admin users. Score how well the
user's latest message matches each of the intents below. Return one entry per plausible intent with a score between
0 and 1, highest first. If nothing fits, return `{IntentName.NONE.value}` with a high score.

<intents>
  <intent name="{IntentName.GREETING.value}">Hellos, good mornings, and other openers.</intent>
  <intent name="{IntentName.HELP.value}">The user asks for help or what the assistant can do.</intent>
  <intent name="{IntentName.CANCEL.value}">The user wants to stop or cancel the current activity.</intent>
  <intent name="{IntentName.GENERAL_INFO.value}">The user wants general information about Clario.</intent>
  <intent name="{IntentName.ON_DEVICE_LOG_IN.value}">The user wants to log in to Clario Admin.</intent>
  <intent name="{IntentName.CALENDAR_ADD.value}">The user wants to add an event to their calendar.</intent>
  <intent name="{IntentName.CALENDAR_FIND.value}">The user wants to find or list calendar events.</intent>
  <intent name="{IntentName.CALENDAR_EDIT.value}">The user wants to change an existing calendar event.</intent>
  <intent name="{IntentName.NONE.value}">Anything else.</intent>
</intents>
"""


class OpenAIIntentClassifier(IntentClassifierPort):
    """Classify messages with ``client.responses.parse`` into scored intents."""

    def __init__(
        self,
        *,
        api_key: str = "",
        model: str = "gpt-4o",
        client_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client_factory = client_factory
        self._client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            if self._client_factory is not None:
                self._client = self._client_factory()
            else:
                self._client = OpenAI(api_key=self._api_key)
        return self._client

    async def recognize(self, text: str, turn_context: TurnContextPort) -> list[IntentResult]:
        del turn_context
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._recognize_sync, text)

    def _recognize_sync(self, text: str) -> list[IntentResult]:
        messages: list[EasyInputMessageParam] = [
            {
                "role": "system",
                "content": INTENT_CLASSIFICATION_SYSTEM_PROMPT,
            },
            {
                "role": "user",
                "content": f"what is your classification of the latest user message: {text}",
            },
        ]
        try:
            response = self._get_client().responses.parse(
                model=self._model,
                input=cast(Any, messages),
                text_format=IntentScores,
                temperature=0,
                store=False,
            )
        except OpenAIError as exc:
            logger.error("intent classification request failed: %s", exc)
            raise ClassificationUnavailable("OpenAI intent classification failed") from exc

        scores = cast(Optional[IntentScores], getattr(response, "output_parsed", None))
        if scores is None:
            logger.error("intent classification returned no parsed output")
            raise ClassificationUnavailable("OpenAI returned no parsed intent scores")

        results = rank_results(
            [
                IntentResult(intent_name=item.intent.value, confidence=clamp_confidence(item.score))
                for item in scores.intents
            ]
        )
        logger.info(
            "extracted intents: %s",
            " ".join(f"{r.intent_name}={r.confidence:.2f}" for r in results) or "<none>",
        )
        return results


__all__ = ["OpenAIIntentClassifier", "INTENT_CLASSIFICATION_SYSTEM_PROMPT"]
