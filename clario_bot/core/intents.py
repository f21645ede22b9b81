"""Intent types and models for the Clario bot."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel


class IntentName(str, Enum):
    """Intent names the recognizer is trained to return."""

    GREETING = "Greeting"
    CANCEL = "Cancel"
    HELP = "Help"
    NONE = "None"
    GENERAL_INFO = "General_Info"
    CALENDAR_ADD = "Calendar_Add"
    CALENDAR_FIND = "Calendar_Find"
    CALENDAR_EDIT = "Calendar_Edit"
    ON_DEVICE_LOG_IN = "OnDevice_LogIn"


@dataclass(frozen=True, slots=True)
class IntentResult:
    """One recognizer guess: an intent name and its confidence in [0, 1]."""

    intent_name: str
    confidence: float


class IntentScore(BaseModel):
    """Structured-output item returned by LLM-backed recognizers."""

    intent: IntentName
    score: float


class IntentScores(BaseModel):
    """Container for a list of scored intents."""

    intents: list[IntentScore]


def clamp_confidence(value: float) -> float:
    """Pin a raw recognizer score into the closed unit interval."""
    return min(1.0, max(0.0, float(value)))


def rank_results(results: list[IntentResult]) -> list[IntentResult]:
    """Sort by descending confidence, keeping recognizer order for ties."""
    return sorted(results, key=lambda result: result.confidence, reverse=True)


__all__ = [
    "IntentName",
    "IntentResult",
    "IntentScore",
    "IntentScores",
    "clamp_confidence",
    "rank_results",
]
