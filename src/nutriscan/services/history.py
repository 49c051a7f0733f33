"""Capped scan history."""

from nutriscan.domain.nutrition import NutritionInfo

HISTORY_LIMIT = 50


def append(
    history: list[NutritionInfo], entry: NutritionInfo, limit: int = HISTORY_LIMIT
) -> list[NutritionInfo]:
    """Prepend an entry and evict the oldest beyond the limit."""
    return [entry, *history][:limit]


def search(history: list[NutritionInfo], term: str) -> list[NutritionInfo]:
    """Filter entries by case-insensitive food name substring."""
    needle = term.lower()
    return [entry for entry in history if needle in entry.food_name.lower()]
