"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from typing import Any

from clario_bot.adapters.connector import BotConnectorClient
from clario_bot.adapters.luis_classifier import LuisIntentClassifier
from clario_bot.adapters.openai_classifier import OpenAIIntentClassifier
from clario_bot.adapters.templates import FileTemplateStore
from clario_bot.core.config import Settings, settings
from clario_bot.core.ports import IntentClassifierPort
from clario_bot.services import ServiceContainer, build_default_services


def build_classifier(config: Any = settings) -> IntentClassifierPort:
    """Return the intent recognizer selected by ``CLASSIFIER_BACKEND``."""

    backend = str(config.CLASSIFIER_BACKEND).lower()
    if backend == "openai":
        return OpenAIIntentClassifier(
            api_key=config.OPENAI_API_KEY,
            model=config.OPENAI_CLASSIFIER_MODEL,
        )
    if backend == "luis":
        if not config.LUIS_APP_ID or not config.LUIS_ENDPOINT_KEY:
            raise ValueError("LUIS_APP_ID and LUIS_ENDPOINT_KEY are required for the luis backend")
        return LuisIntentClassifier(
            app_id=config.LUIS_APP_ID,
            endpoint_key=config.LUIS_ENDPOINT_KEY,
            endpoint=config.LUIS_ENDPOINT,
        )
    raise ValueError(f"unknown CLASSIFIER_BACKEND: {config.CLASSIFIER_BACKEND}")


def build_default_service_container(config: Settings = settings) -> ServiceContainer:
    """Return the default service container wired to production adapters."""

    return build_default_services(
        classifier_port=build_classifier(config),
        template_store_port=FileTemplateStore(config.CARDS_DIR),
        connector_port=BotConnectorClient(
            app_id=config.MICROSOFT_APP_ID,
            app_password=config.MICROSOFT_APP_PASSWORD,
        ),
    )


__all__ = ["build_classifier", "build_default_service_container"]
