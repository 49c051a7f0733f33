"""Best-effort AI translation of generated free text."""

import logging
from dataclasses import dataclass

from pydantic import BaseModel

from nutriscan.domain.errors import GatewayError
from nutriscan.domain.nutrition import NutritionInfo
from nutriscan.domain.plans import (
    DailyWorkout,
    DayPlan,
    Exercise,
    Meal,
    MealPlan,
    ShoppingCategory,
    ShoppingList,
    WorkoutPlan,
)
from nutriscan.domain.state import Language
from nutriscan.services.gateway import AIGateway, strict_object

_logger = logging.getLogger(__name__)

TRANSLATION_SCHEMA: dict[str, object] = strict_object(
    {
        "translations": {
            "type": "array",
            "description": "Translations in the same order as the input.",
            "items": {"type": "string"},
        }
    }
)

_TRANSLATION_PROMPT = """\
Translate each of the following texts into {language}. Return exactly one \
translation per text, in the same order, keeping numbers and units unchanged.

Texts (JSON array):
{texts}"""


class TranslationBatch(BaseModel):
    """Structured output for batch translation."""

    translations: list[str]


@dataclass
class TranslationService:
    """Translates AI-generated strings; falls back to the source text."""

    gateway: AIGateway

    async def translate_texts(
        self, texts: list[str], target_language: str
    ) -> list[str]:
        """Translate a batch of texts, keeping the original on any failure."""
        if not texts:
            return []
        batch = TranslationBatch(translations=texts)
        try:
            result = await self.gateway.generate(
                prompt=_TRANSLATION_PROMPT.format(
                    language=target_language,
                    texts=batch.model_dump_json(),
                ),
                schema_name="translation_batch",
                schema=TRANSLATION_SCHEMA,
                response_model=TranslationBatch,
                failure_message="Translation failed.",
            )
        except GatewayError:
            _logger.warning(
                "Translation to %s failed; keeping %s source texts",
                target_language,
                len(texts),
            )
            return list(texts)
        translated = result.translations
        return [
            translated[index]
            if index < len(translated) and translated[index].strip()
            else text
            for index, text in enumerate(texts)
        ]

    async def translate_nutrition_info(
        self, info: NutritionInfo, language: Language
    ) -> NutritionInfo:
        if language is Language.EN:
            return info
        food_name, serving_size, reason = await self.translate_texts(
            [info.food_name, info.serving_size, info.reason],
            language.display_name,
        )
        return info.model_copy(
            update={
                "food_name": food_name,
                "serving_size": serving_size,
                "reason": reason,
            }
        )

    async def translate_meal_plan(
        self, plan: MealPlan, language: Language
    ) -> MealPlan:
        if language is Language.EN:
            return plan
        texts: list[str] = []
        for day in plan.weekly_plan:
            texts.append(day.day)
            for meal in (day.breakfast, day.lunch, day.dinner):
                texts.extend([meal.name, meal.description])
        translated = iter(await self.translate_texts(texts, language.display_name))
        days = [
            DayPlan(
                day=next(translated),
                breakfast=Meal(name=next(translated), description=next(translated)),
                lunch=Meal(name=next(translated), description=next(translated)),
                dinner=Meal(name=next(translated), description=next(translated)),
            )
            for _ in plan.weekly_plan
        ]
        return MealPlan(weekly_plan=days)

    async def translate_shopping_list(
        self, shopping_list: ShoppingList, language: Language
    ) -> ShoppingList:
        if language is Language.EN:
            return shopping_list
        texts: list[str] = []
        for category in shopping_list.categories:
            texts.append(category.category)
            texts.extend(category.items)
        translated = iter(await self.translate_texts(texts, language.display_name))
        categories = [
            ShoppingCategory(
                category=next(translated),
                items=[next(translated) for _ in category.items],
            )
            for category in shopping_list.categories
        ]
        return ShoppingList(categories=categories)

    async def translate_workout_plan(
        self, plan: WorkoutPlan, language: Language
    ) -> WorkoutPlan:
        if language is Language.EN:
            return plan
        texts: list[str] = []
        for day in plan.weekly_workout_plan:
            texts.extend([day.day, day.focus])
            for exercise in day.exercises:
                texts.extend([exercise.name, exercise.description])
        translated = iter(await self.translate_texts(texts, language.display_name))
        days = [
            DailyWorkout(
                day=next(translated),
                focus=next(translated),
                exercises=[
                    Exercise(
                        name=next(translated),
                        sets=exercise.sets,
                        reps=exercise.reps,
                        description=next(translated),
                    )
                    for exercise in day.exercises
                ],
            )
            for day in plan.weekly_workout_plan
        ]
        return WorkoutPlan(weekly_workout_plan=days)
