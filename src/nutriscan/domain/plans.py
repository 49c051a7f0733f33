"""Models for generated meal, shopping and workout plans."""

from pydantic import BaseModel, Field

DAYS_PER_PLAN = 7


class Meal(BaseModel):
    """Single meal suggestion."""

    name: str
    description: str


class DayPlan(BaseModel):
    """Meals for one day of the week."""

    day: str
    breakfast: Meal
    lunch: Meal
    dinner: Meal


class MealPlan(BaseModel):
    """Seven-day meal plan."""

    weekly_plan: list[DayPlan] = Field(
        min_length=DAYS_PER_PLAN, max_length=DAYS_PER_PLAN
    )


class ShoppingCategory(BaseModel):
    """Group of shopping items."""

    category: str
    items: list[str]


class ShoppingList(BaseModel):
    """Categorized shopping list derived from a meal plan."""

    categories: list[ShoppingCategory]


class Exercise(BaseModel):
    """Exercise prescription for a workout day."""

    name: str
    sets: str
    reps: str
    description: str


class DailyWorkout(BaseModel):
    """Workout for one day; an empty exercise list is a rest day."""

    day: str
    focus: str
    exercises: list[Exercise]

    @property
    def is_rest_day(self) -> bool:
        return not self.exercises


class WorkoutPlan(BaseModel):
    """Seven-day workout plan."""

    weekly_workout_plan: list[DailyWorkout] = Field(
        min_length=DAYS_PER_PLAN, max_length=DAYS_PER_PLAN
    )
