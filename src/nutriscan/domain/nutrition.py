"""Nutrition domain models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_WATER_GOAL_ML = 2500
WATER_ML_PER_KG = 35

CALORIE_TARGET_KCAL = 2000
PROTEIN_TARGET_G = 100
CARBS_TARGET_G = 250
FATS_TARGET_G = 70


class Recommendation(StrEnum):
    """Personalized verdict for a scanned food."""

    SHOULD_EAT = "Should Eat"
    MODERATE = "Moderate"
    AVOID = "Avoid"


class NutritionValues(BaseModel):
    """Macronutrients for a typical serving."""

    model_config = ConfigDict(frozen=True)

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)


class NutritionInfo(BaseModel):
    """One scan result produced by the AI gateway."""

    model_config = ConfigDict(frozen=True)

    food_name: str
    nutrition: NutritionValues
    recommendation: Recommendation
    serving_size: str
    reason: str


class DailyProgress(BaseModel):
    """Running totals for the current day."""

    model_config = ConfigDict(frozen=True)

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0
    water: int = Field(default=0, ge=0)
    water_goal: int = DEFAULT_WATER_GOAL_ML
