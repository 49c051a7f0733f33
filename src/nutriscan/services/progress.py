"""Daily progress aggregation."""

import math

from nutriscan.domain.nutrition import WATER_ML_PER_KG, DailyProgress, NutritionValues

WATER_STEP_ML = 250


def merge(progress: DailyProgress, delta: NutritionValues) -> DailyProgress:
    """Add a scan's macros to the running totals."""
    return progress.model_copy(
        update={
            "calories": progress.calories + delta.calories,
            "protein": progress.protein + delta.protein,
            "carbs": progress.carbs + delta.carbs,
            "fats": progress.fats + delta.fats,
        }
    )


def adjust_water(progress: DailyProgress, delta_ml: int) -> DailyProgress:
    """Change water intake, never going below zero."""
    return progress.model_copy(update={"water": max(0, progress.water + delta_ml)})


def recompute_water_goal(weight_kg: float) -> int:
    """Return the daily water goal in ml for a body weight, halves rounded up."""
    return math.floor(weight_kg * WATER_ML_PER_KG + 0.5)


def with_water_goal(progress: DailyProgress, weight_kg: float) -> DailyProgress:
    """Return progress with the goal derived from the given weight."""
    return progress.model_copy(update={"water_goal": recompute_water_goal(weight_kg)})


def water_percentage(progress: DailyProgress) -> float:
    """Share of the water goal reached, capped at 100."""
    if progress.water_goal <= 0:
        return 100.0
    return min(progress.water / progress.water_goal * 100, 100.0)
