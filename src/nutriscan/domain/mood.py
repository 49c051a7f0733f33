"""Mood journal domain models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Mood(StrEnum):
    """Closed set of moods a user can log."""

    HAPPY = "Happy"
    NEUTRAL = "Neutral"
    SAD = "Sad"
    STRESSED = "Stressed"
    ENERGIZED = "Energized"


class MoodLog(BaseModel):
    """Single wellness journal entry."""

    model_config = ConfigDict(frozen=True)

    mood: Mood
    notes: str = ""
    date: datetime
