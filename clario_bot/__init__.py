"""Clario bot: intent-routed conversational bot service."""

CLARIO_BOT_VERSION = "0.3.0"

__all__ = ["CLARIO_BOT_VERSION"]
