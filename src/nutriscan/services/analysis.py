"""Food analysis via the AI gateway."""

from dataclasses import dataclass

from nutriscan.domain.nutrition import NutritionInfo
from nutriscan.domain.profile import UserProfile
from nutriscan.domain.state import ScanMode
from nutriscan.services.capture import to_data_url
from nutriscan.services.gateway import AIGateway, strict_object

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze image. The AI model could not process the request."
)

NUTRITION_SCHEMA: dict[str, object] = strict_object(
    {
        "food_name": {
            "type": "string",
            "description": "The name of the food item identified.",
        },
        "nutrition": strict_object(
            {
                "calories": {"type": "number", "minimum": 0},
                "protein": {"type": "number", "minimum": 0},
                "carbs": {"type": "number", "minimum": 0},
                "fats": {"type": "number", "minimum": 0},
            }
        ),
        "recommendation": {
            "type": "string",
            "enum": ["Should Eat", "Moderate", "Avoid"],
        },
        "serving_size": {
            "type": "string",
            "description": "Suggested serving size, e.g. '1 cup' or '100 grams'.",
        },
        "reason": {
            "type": "string",
            "description": "One sentence explaining the recommendation.",
        },
    }
)

_FOOD_PROMPT = """\
Analyze the food item in this image. Based on the user profile below, provide \
a nutritional analysis and a personalized recommendation.

User Profile:
{profile}

Your task:
1. Identify the primary food item in the image.
2. Estimate calories, protein, carbs and fats for a typical serving.
3. Based on the dietary preference and primary goal, recommend \
"Should Eat", "Moderate" or "Avoid".
4. Suggest a healthy serving size.
5. Give a short, one-sentence reason for the recommendation.

Return the response ONLY in the specified JSON format."""

_PRODUCT_PROMPT = """\
A user scanned a product with the following information: "{product}". \
Assume it comes from a barcode or QR code.

Based on this information and the user profile below, provide a nutritional \
analysis and a personalized recommendation. If the product isn't a food item, \
say so.

User Profile:
{profile}

Your task:
1. Identify the food product from the scanned information.
2. Find or estimate calories, protein, carbs and fats.
3. Recommend "Should Eat", "Moderate" or "Avoid" for this user.
4. Suggest a healthy serving size from the package information if available.
5. Give a short, one-sentence reason for the recommendation.

Return the response ONLY in the specified JSON format."""


@dataclass
class AnalysisService:
    """Builds analysis prompts and validates the nutrition payload."""

    gateway: AIGateway

    async def analyze(
        self,
        raw_data: str,
        media_type: str,
        profile: UserProfile,
        mode: ScanMode,
    ) -> NutritionInfo:
        """Analyze an image (food) or decoded product text (qr)."""
        if mode is ScanMode.FOOD:
            prompt = _FOOD_PROMPT.format(profile=profile.summary())
            image_data_url = to_data_url(raw_data, media_type)
        else:
            prompt = _PRODUCT_PROMPT.format(
                product=raw_data, profile=profile.summary()
            )
            image_data_url = None
        return await self.gateway.generate(
            prompt=prompt,
            schema_name="nutrition_analysis",
            schema=NUTRITION_SCHEMA,
            response_model=NutritionInfo,
            failure_message=ANALYSIS_FAILED_MESSAGE,
            image_data_url=image_data_url,
        )
