"""User profile domain models."""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Gender(StrEnum):
    """Gender options offered at onboarding."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    PREFER_NOT_TO_SAY = "Prefer not to say"


class DietaryPreference(StrEnum):
    """Dietary preference options."""

    VEGETARIAN = "Vegetarian"
    NON_VEGETARIAN = "Non-Vegetarian"


class MedicalGoal(BaseModel):
    """Primary goal driven by a medical condition."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Medical"] = "Medical"
    detail: str
    custom_detail: str | None = None


class FitnessGoal(BaseModel):
    """Primary goal driven by fitness."""

    model_config = ConfigDict(frozen=True)

    type: Literal["Fitness"] = "Fitness"
    detail: str
    custom_detail: str | None = None


PrimaryGoal = MedicalGoal | FitnessGoal


class UserProfile(BaseModel):
    """Onboarded user attributes read by every AI generator."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    age: int = Field(gt=0)
    gender: Gender
    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    dietary_preference: DietaryPreference = DietaryPreference.NON_VEGETARIAN
    primary_goal: PrimaryGoal = Field(
        default_factory=lambda: FitnessGoal(detail="Weight Loss"),
        discriminator="type",
    )
    profession: str = Field(min_length=1)
    custom_profession: str | None = None

    @property
    def first_name(self) -> str:
        """Return the first word of the user's name."""
        return self.name.split(" ")[0]

    def summary(self) -> str:
        """Render the profile block embedded in AI prompts."""
        goal = self.primary_goal
        goal_line = f"{goal.type} - {goal.detail}"
        if goal.custom_detail:
            goal_line = f"{goal_line} ({goal.custom_detail})"
        profession_line = self.profession
        if self.custom_profession:
            profession_line = f"{profession_line} ({self.custom_profession})"
        lines = [
            f"- Age: {self.age}",
            f"- Gender: {self.gender.value}",
            f"- Height: {self.height:g} cm",
            f"- Weight: {self.weight:g} kg",
            f"- Dietary Preference: {self.dietary_preference.value}",
            f"- Primary Goal: {goal_line}",
            f"- Profession/Activity Level: {profession_line}",
        ]
        return "\n".join(lines)
