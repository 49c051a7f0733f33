"""Shared test fixtures."""

import asyncio
import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from nutriscan.config import Settings
from nutriscan.containers import AppContainer
from nutriscan.domain.errors import CaptureError
from nutriscan.domain.profile import Gender, UserProfile
from nutriscan.domain.state import Language, ScanMode
from nutriscan.services.analysis import AnalysisService
from nutriscan.services.capture import CapturedPayload
from nutriscan.services.chat import ChatService
from nutriscan.services.gateway import AIGateway, GatewayClient
from nutriscan.services.plans import PlanBoard, PlanService
from nutriscan.services.scans import ScanOrchestrator
from nutriscan.services.session import SessionController
from nutriscan.services.state import AppStateRepository, StateStore
from nutriscan.services.translation import TranslationService

TRANSLATION_PREFIX = "[hi] "

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def banana_payload() -> dict[str, object]:
    return {
        "food_name": "Banana",
        "nutrition": {"calories": 105, "protein": 1.3, "carbs": 27, "fats": 0.4},
        "recommendation": "Should Eat",
        "serving_size": "1 medium",
        "reason": "A good source of potassium and quick energy.",
    }


def meal_plan_payload(days: int = 7) -> dict[str, object]:
    return {
        "weekly_plan": [
            {
                "day": day,
                "breakfast": {"name": "Oatmeal", "description": "Oats with fruit."},
                "lunch": {"name": "Dal and rice", "description": "Lentil curry."},
                "dinner": {"name": "Paneer salad", "description": "Light and fresh."},
            }
            for day in WEEKDAYS[:days]
        ]
    }


def shopping_list_payload() -> dict[str, object]:
    return {
        "categories": [
            {"category": "Grains", "items": ["Oats", "Rice"]},
            {"category": "Dairy", "items": ["Paneer"]},
        ]
    }


def workout_plan_payload() -> dict[str, object]:
    workout = {
        "focus": "Full Body Strength",
        "exercises": [
            {
                "name": "Squats",
                "sets": "3",
                "reps": "12",
                "description": "Keep your back straight.",
            }
        ],
    }
    rest = {"focus": "Rest Day", "exercises": []}
    plan = [{"day": day, **workout} for day in WEEKDAYS[:-1]]
    plan.append({"day": "Sunday", **rest})
    return {"weekly_workout_plan": plan}


@dataclass
class InMemoryStateStore(StateStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    failing_keys: set[str] = field(default_factory=set)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        if key in self.failing_keys:
            raise OSError(f"Cannot write {key}")
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass
class FakeGatewayClient(GatewayClient):
    """Fake gateway client returning canned payloads by schema name."""

    payloads: dict[str, list[dict[str, object]]] = field(
        default_factory=lambda: {
            "nutrition_analysis": [banana_payload()],
            "meal_plan": [meal_plan_payload()],
            "shopping_list": [shopping_list_payload()],
            "workout_plan": [workout_plan_payload()],
        }
    )
    failing: set[str] = field(default_factory=set)
    calls: list[dict[str, object]] = field(default_factory=list)
    gate: asyncio.Event | None = None
    chunks: list[str] = field(default_factory=lambda: ["Drink ", "more ", "water."])
    stream_error: Exception | None = None
    stream_calls: list[dict[str, object]] = field(default_factory=list)

    async def generate_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "schema_name": schema_name,
                "prompt": prompt,
                "image_data_url": image_data_url,
            }
        )
        if self.gate is not None:
            await self.gate.wait()
        if schema_name in self.failing:
            raise RuntimeError(f"{schema_name} failed")
        queued = self.payloads.get(schema_name)
        if queued:
            return queued.pop(0) if len(queued) > 1 else queued[0]
        if schema_name == "translation_batch":
            texts = json.loads(prompt.rsplit("\n", 1)[1])["translations"]
            return {"translations": [f"{TRANSLATION_PREFIX}{text}" for text in texts]}
        raise RuntimeError(f"No payload for {schema_name}")

    async def stream_text(
        self,
        *,
        model: str,
        instructions: str,
        messages: list[dict[str, str]],
    ) -> AsyncIterator[str]:
        self.stream_calls.append({"instructions": instructions, "messages": messages})
        for index, chunk in enumerate(self.chunks):
            if self.stream_error is not None and index > 0:
                raise self.stream_error
            yield chunk

    def schema_calls(self, schema_name: str) -> list[dict[str, object]]:
        return [call for call in self.calls if call["schema_name"] == schema_name]


@dataclass
class FakeCaptureDevice:
    """Capture device that counts releases."""

    payload: CapturedPayload = field(
        default_factory=lambda: CapturedPayload(
            data="aGVsbG8=", media_type="image/jpeg", mode=ScanMode.FOOD
        )
    )
    error: CaptureError | None = None
    released: int = 0

    async def capture(self, mode: ScanMode) -> CapturedPayload:
        if self.error is not None:
            raise self.error
        return self.payload

    def release(self) -> None:
        self.released += 1


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(openai_api_key="openai-key", state_dir=tmp_path / "state")


@pytest.fixture
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def repository(state_store: InMemoryStateStore) -> AppStateRepository:
    return AppStateRepository(store=state_store)


@pytest.fixture
def gateway_client() -> FakeGatewayClient:
    return FakeGatewayClient()


@pytest.fixture
def gateway(gateway_client: FakeGatewayClient) -> AIGateway:
    return AIGateway(
        client=gateway_client, model="gpt-5.2", reasoning_effort="low", store=False
    )


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        name="Asha Rao",
        age=30,
        gender=Gender.FEMALE,
        height=165,
        weight=70,
        profession="Software Engineer",
    )


@pytest.fixture
def session(
    repository: AppStateRepository, profile: UserProfile
) -> SessionController:
    controller = SessionController.load(repository)
    controller.update_profile(profile)
    return controller


@pytest.fixture
def translation_service(gateway: AIGateway) -> TranslationService:
    return TranslationService(gateway)


@pytest.fixture
def orchestrator(
    session: SessionController,
    gateway: AIGateway,
    translation_service: TranslationService,
) -> ScanOrchestrator:
    return ScanOrchestrator(
        session=session,
        analysis_service=AnalysisService(gateway),
        translation_service=translation_service,
    )


@pytest.fixture
def plan_board(
    gateway: AIGateway, translation_service: TranslationService
) -> PlanBoard:
    return PlanBoard(
        plan_service=PlanService(gateway), translation_service=translation_service
    )


@pytest.fixture
def container(
    settings: Settings,
    session: SessionController,
    gateway: AIGateway,
    orchestrator: ScanOrchestrator,
    plan_board: PlanBoard,
) -> AppContainer:
    async def close_resources() -> None:
        orchestrator.reset()

    return AppContainer(
        settings=settings,
        supported_languages=set(Language),
        session=session,
        scan_orchestrator=orchestrator,
        plan_board=plan_board,
        chat_service=ChatService(gateway),
        close_resources=close_resources,
    )
