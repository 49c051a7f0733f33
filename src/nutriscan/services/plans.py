"""Meal, shopping list and workout plan generators."""

import logging
from dataclasses import dataclass, field

from nutriscan.domain.errors import GatewayError
from nutriscan.domain.plans import MealPlan, ShoppingList, WorkoutPlan
from nutriscan.domain.profile import UserProfile
from nutriscan.domain.state import Language
from nutriscan.services.gateway import AIGateway, strict_object
from nutriscan.services.translation import TranslationService

_logger = logging.getLogger(__name__)

_MEAL: dict[str, object] = strict_object(
    {
        "name": {"type": "string"},
        "description": {
            "type": "string",
            "description": "A short description of the meal.",
        },
    }
)

MEAL_PLAN_SCHEMA: dict[str, object] = strict_object(
    {
        "weekly_plan": {
            "type": "array",
            "description": "Seven daily meal plans, Monday to Sunday.",
            "items": strict_object(
                {
                    "day": {"type": "string"},
                    "breakfast": _MEAL,
                    "lunch": _MEAL,
                    "dinner": _MEAL,
                }
            ),
        }
    }
)

SHOPPING_LIST_SCHEMA: dict[str, object] = strict_object(
    {
        "categories": {
            "type": "array",
            "items": strict_object(
                {
                    "category": {
                        "type": "string",
                        "description": "Category name, e.g. Vegetables or Dairy.",
                    },
                    "items": {"type": "array", "items": {"type": "string"}},
                }
            ),
        }
    }
)

WORKOUT_PLAN_SCHEMA: dict[str, object] = strict_object(
    {
        "weekly_workout_plan": {
            "type": "array",
            "description": "Seven daily workouts, Monday to Sunday.",
            "items": strict_object(
                {
                    "day": {"type": "string"},
                    "focus": {"type": "string"},
                    "exercises": {
                        "type": "array",
                        "description": "Empty on a rest day.",
                        "items": strict_object(
                            {
                                "name": {"type": "string"},
                                "sets": {"type": "string"},
                                "reps": {"type": "string"},
                                "description": {"type": "string"},
                            }
                        ),
                    },
                }
            ),
        }
    }
)

_MEAL_PLAN_PROMPT = """\
Create a healthy and balanced 7-day meal plan (Monday to Sunday) for the user \
below. Meals should be simple to prepare and delicious.

User Profile:
{profile}

Your task:
- Give breakfast, lunch and dinner for each of the 7 days.
- For each meal, provide a name and a one-sentence description.
- Respect the dietary preference and primary goal.
- Return the response ONLY in the specified JSON format."""

_SHOPPING_LIST_PROMPT = """\
Based on the weekly meal plan below, create a consolidated shopping list \
grouped into logical categories (e.g. Vegetables, Fruits, Meat, Dairy, \
Pantry Staples).

Meal Plan:
{meal_plan}

Your task:
- Read through all meals for the week and list every ingredient needed.
- Group the ingredients into shopping categories.
- Keep the list budget-friendly and prefer seasonal options.
- Return the response ONLY in the specified JSON format."""

_WORKOUT_PLAN_PROMPT = """\
Create a balanced 7-day workout plan (Monday to Sunday) for the user below, \
suited to their activity level and aligned with their primary goal. Assume \
minimal or no gym equipment unless the goal implies professional training.

User Profile:
{profile}

Your task:
- Include at least one rest day.
- Give each day a clear focus (e.g. 'Full Body Strength', 'Cardio & Core', \
'Active Recovery', 'Rest Day').
- List 3-5 exercises on workout days, each with name, sets, reps (or \
duration) and a one-sentence tip.
- On a rest day the exercises array must be empty.
- Return the response ONLY in the specified JSON format."""


@dataclass
class PlanService:
    """Stateless generators; every call re-queries the gateway."""

    gateway: AIGateway

    async def generate_meal_plan(self, profile: UserProfile) -> MealPlan:
        """Generate a seven-day meal plan for the profile."""
        return await self.gateway.generate(
            prompt=_MEAL_PLAN_PROMPT.format(profile=profile.summary()),
            schema_name="meal_plan",
            schema=MEAL_PLAN_SCHEMA,
            response_model=MealPlan,
            failure_message=(
                "Failed to generate a meal plan. "
                "The AI model could not process the request."
            ),
        )

    async def generate_shopping_list(self, meal_plan: MealPlan) -> ShoppingList:
        """Derive a categorized shopping list from a meal plan."""
        return await self.gateway.generate(
            prompt=_SHOPPING_LIST_PROMPT.format(
                meal_plan=meal_plan.model_dump_json(indent=2)
            ),
            schema_name="shopping_list",
            schema=SHOPPING_LIST_SCHEMA,
            response_model=ShoppingList,
            failure_message=(
                "Failed to generate a shopping list. "
                "The AI model could not process the request."
            ),
        )

    async def generate_workout_plan(self, profile: UserProfile) -> WorkoutPlan:
        """Generate a seven-day workout plan for the profile."""
        return await self.gateway.generate(
            prompt=_WORKOUT_PLAN_PROMPT.format(profile=profile.summary()),
            schema_name="workout_plan",
            schema=WORKOUT_PLAN_SCHEMA,
            response_model=WorkoutPlan,
            failure_message=(
                "Failed to generate a workout plan. "
                "The AI model could not process the request."
            ),
        )


@dataclass
class PlanBoard:
    """View state for the plan pages; plans are never persisted."""

    plan_service: PlanService
    translation_service: TranslationService
    meal_plan: MealPlan | None = None
    shopping_list: ShoppingList | None = None
    workout_plan: WorkoutPlan | None = None
    is_loading: bool = False
    error: str | None = None
    workout_error: str | None = None
    _source_meal_plan: MealPlan | None = field(default=None, repr=False)

    async def generate_meal_plan(
        self, profile: UserProfile, language: Language
    ) -> MealPlan | None:
        """Replace the meal plan; a new plan drops the old shopping list."""
        self.is_loading = True
        self.error = None
        self.shopping_list = None
        try:
            plan = await self.plan_service.generate_meal_plan(profile)
        except GatewayError as exc:
            self.error = exc.message
            return None
        finally:
            self.is_loading = False
        self._source_meal_plan = plan
        self.meal_plan = await self.translation_service.translate_meal_plan(
            plan, language
        )
        return self.meal_plan

    async def generate_shopping_list(self, language: Language) -> ShoppingList | None:
        """Build a shopping list from the current meal plan.

        Without a meal plan this is a no-op: no error is recorded and the
        gateway is not called.
        """
        if self._source_meal_plan is None:
            _logger.info("Shopping list requested without a meal plan; ignoring")
            return None
        self.is_loading = True
        self.error = None
        try:
            shopping_list = await self.plan_service.generate_shopping_list(
                self._source_meal_plan
            )
        except GatewayError as exc:
            self.error = exc.message
            return None
        finally:
            self.is_loading = False
        self.shopping_list = await self.translation_service.translate_shopping_list(
            shopping_list, language
        )
        return self.shopping_list

    async def generate_workout_plan(
        self, profile: UserProfile, language: Language
    ) -> WorkoutPlan | None:
        """Replace the workout plan."""
        self.is_loading = True
        self.workout_error = None
        try:
            plan = await self.plan_service.generate_workout_plan(profile)
        except GatewayError as exc:
            self.workout_error = exc.message
            return None
        finally:
            self.is_loading = False
        self.workout_plan = await self.translation_service.translate_workout_plan(
            plan, language
        )
        return self.workout_plan
