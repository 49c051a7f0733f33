"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutriscan.domain.state import Language

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    state_dir: Path = Path(".nutriscan")
    default_language: str = "en"
    supported_languages: str | None = None
    history_limit: int = 50
    water_step_ml: int = 250
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_supported_languages(raw: str | None) -> set[Language]:
    """Parse a comma-separated language list; empty or '*' means all."""
    if raw is None:
        return set(Language)
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return set(Language)
    languages: set[Language] = set()
    for chunk in cleaned.split(","):
        value = chunk.strip().lower()
        if value in {language.value for language in Language}:
            languages.add(Language(value))
    return languages or set(Language)
