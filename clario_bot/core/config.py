"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CARDS_DIR = PACKAGE_DIR / "resources" / "cards"


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Intent classification
    # "openai" or "luis"; any other value is rejected by bootstrap.build_classifier
    CLASSIFIER_BACKEND: str = Field(default="openai")
    OPENAI_API_KEY: str = Field(default="")
    OPENAI_CLASSIFIER_MODEL: str = Field(default="gpt-4o")
    LUIS_APP_ID: str | None = Field(default=None)
    LUIS_ENDPOINT_KEY: str | None = Field(default=None)
    LUIS_ENDPOINT: str = Field(default="https://westus.api.cognitive.microsoft.com")

    # Bot Framework channel credentials (empty for the local emulator)
    MICROSOFT_APP_ID: str | None = Field(default=None)
    MICROSOFT_APP_PASSWORD: str | None = Field(default=None)

    # Inbound auth: a shared bearer token, not Bot Framework JWT validation.
    # Channels that send Microsoft-signed JWTs get 401 unless ENABLE_BOT_AUTH=false.
    BOT_API_TOKEN: str | None = Field(default=None)
    HEALTHCHECK_API_TOKEN: str | None = Field(default=None)
    ENABLE_BOT_AUTH: bool = Field(default=True)

    CARDS_DIR: Path = Field(default=DEFAULT_CARDS_DIR)

    CLARIO_BOT_LOG_LEVEL: str = Field(default="info")
    CLARIO_BOT_LOG_DIR: Path | None = Field(default=None)
    CLARIO_BOT_LOG_SCHEMA_VERSION: str = Field(default="1.0.0")
    LOG_PSEUDONYM_SECRET: str | None = Field(default=None)
    DATA_DIR: Path = Field(default=Path("/data"))


settings = Settings()
config = settings  # Alias used by the API layer


__all__ = ["Settings", "settings", "config", "DEFAULT_CARDS_DIR"]
