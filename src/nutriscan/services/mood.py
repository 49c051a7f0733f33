"""Mood journal."""

from datetime import UTC, datetime

from nutriscan.domain.errors import MoodNotSelectedError
from nutriscan.domain.mood import Mood, MoodLog


def log_mood(
    history: list[MoodLog],
    mood: Mood | None,
    notes: str = "",
    now: datetime | None = None,
) -> list[MoodLog]:
    """Prepend a new mood entry; a missing mood is rejected."""
    if mood is None:
        raise MoodNotSelectedError
    entry = MoodLog(mood=mood, notes=notes, date=now or datetime.now(tz=UTC))
    return [entry, *history]
