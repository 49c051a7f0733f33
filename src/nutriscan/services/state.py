"""Typed, versioned persistence for the application state aggregate."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from nutriscan.domain.mood import MoodLog
from nutriscan.domain.nutrition import DailyProgress, NutritionInfo
from nutriscan.domain.profile import UserProfile
from nutriscan.domain.state import AppState, AuthStatus, Language, Theme
from nutriscan.services.localization import parse_language

_logger = logging.getLogger(__name__)

STATE_VERSION = 1

T = TypeVar("T")


class StateKey(StrEnum):
    """Fixed storage keys."""

    LANGUAGE = "language"
    AUTH_STATUS = "authStatus"
    USER_PROFILE = "userProfile"
    SCAN_HISTORY = "scanHistory"
    DAILY_PROGRESS = "dailyProgress"
    MOOD_HISTORY = "moodHistory"
    THEME = "theme"


class StateStore(Protocol):
    """Flat string key-value storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""

    def delete(self, key: str) -> None:
        """Remove a key if present."""


_PROFILE = TypeAdapter(UserProfile)
_HISTORY = TypeAdapter(list[NutritionInfo])
_PROGRESS = TypeAdapter(DailyProgress)
_MOODS = TypeAdapter(list[MoodLog])

# Version 0 blobs were written with the web client's camelCase field names.
_LEGACY_FIELDS = {
    "foodName": "food_name",
    "servingSize": "serving_size",
    "waterGoal": "water_goal",
    "dietaryPreference": "dietary_preference",
    "primaryGoal": "primary_goal",
    "customDetail": "custom_detail",
    "customProfession": "custom_profession",
}


@dataclass
class AppStateRepository:
    """Load and save each logical entity under its own key."""

    store: StateStore
    default_language: Language = Language.EN

    def load(self) -> AppState:
        """Load the full state, substituting defaults for missing keys."""
        return AppState(
            auth_status=self.load_auth_status(),
            profile=self.load_profile(),
            language=self.load_language(),
            theme=self.load_theme(),
            history=self.load_history(),
            progress=self.load_progress(),
            mood_history=self.load_mood_history(),
        )

    def load_language(self) -> Language:
        return parse_language(
            self.store.get(StateKey.LANGUAGE), self.default_language
        )

    def save_language(self, language: Language) -> None:
        self.store.set(StateKey.LANGUAGE, language.value)

    def load_auth_status(self) -> AuthStatus:
        raw = self.store.get(StateKey.AUTH_STATUS)
        try:
            return AuthStatus(raw) if raw else AuthStatus.LOGGED_OUT
        except ValueError:
            _logger.warning("Unknown auth status %r; logging out", raw)
            return AuthStatus.LOGGED_OUT

    def save_auth_status(self, status: AuthStatus) -> None:
        self.store.set(StateKey.AUTH_STATUS, status.value)

    def load_theme(self) -> Theme:
        return Theme.DARK if self.store.get(StateKey.THEME) == "dark" else Theme.LIGHT

    def save_theme(self, theme: Theme) -> None:
        self.store.set(StateKey.THEME, theme.value)

    def load_profile(self) -> UserProfile | None:
        return self._load(StateKey.USER_PROFILE, _PROFILE, lambda: None)

    def save_profile(self, profile: UserProfile | None) -> None:
        if profile is None:
            self.store.delete(StateKey.USER_PROFILE)
            return
        self._save(StateKey.USER_PROFILE, _PROFILE, profile)

    def load_history(self) -> list[NutritionInfo]:
        return self._load(StateKey.SCAN_HISTORY, _HISTORY, list)

    def save_history(self, history: list[NutritionInfo]) -> None:
        self._save(StateKey.SCAN_HISTORY, _HISTORY, history)

    def load_progress(self) -> DailyProgress:
        return self._load(StateKey.DAILY_PROGRESS, _PROGRESS, DailyProgress)

    def save_progress(self, progress: DailyProgress) -> None:
        self._save(StateKey.DAILY_PROGRESS, _PROGRESS, progress)

    def load_mood_history(self) -> list[MoodLog]:
        return self._load(StateKey.MOOD_HISTORY, _MOODS, list)

    def save_mood_history(self, mood_history: list[MoodLog]) -> None:
        self._save(StateKey.MOOD_HISTORY, _MOODS, mood_history)

    def _load(
        self, key: StateKey, adapter: TypeAdapter[T], default: Callable[[], T]
    ) -> T:
        raw = self.store.get(key)
        if raw is None:
            return default()
        try:
            payload = json.loads(raw)
            return adapter.validate_python(_unwrap(payload))
        except (ValueError, ValidationError) as exc:
            _logger.warning("Discarding unreadable state for %s: %s", key.value, exc)
            return default()

    def _save(self, key: StateKey, adapter: TypeAdapter[T], value: T) -> None:
        envelope = {
            "version": STATE_VERSION,
            "data": adapter.dump_python(value, mode="json"),
        }
        self.store.set(key, json.dumps(envelope, ensure_ascii=False))


def _unwrap(payload: object) -> object:
    """Return the entity data from an envelope, migrating legacy blobs."""
    if isinstance(payload, dict) and payload.get("version") == STATE_VERSION:
        return payload.get("data")
    return _rename_legacy_fields(payload)


def _rename_legacy_fields(payload: object) -> object:
    if isinstance(payload, list):
        return [_rename_legacy_fields(item) for item in payload]
    if isinstance(payload, dict):
        return {
            _LEGACY_FIELDS.get(key, key): _rename_legacy_fields(value)
            for key, value in payload.items()
        }
    return payload
