"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutriscan.adapters.file_state_store import FileStateStore
from nutriscan.adapters.openai_gateway_client import OpenAIGatewayClient
from nutriscan.config import Settings, parse_supported_languages
from nutriscan.domain.state import Language
from nutriscan.services.analysis import AnalysisService
from nutriscan.services.chat import ChatService
from nutriscan.services.gateway import AIGateway
from nutriscan.services.localization import parse_language
from nutriscan.services.plans import PlanBoard, PlanService
from nutriscan.services.scans import ScanOrchestrator
from nutriscan.services.session import SessionController
from nutriscan.services.state import AppStateRepository
from nutriscan.services.translation import TranslationService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    supported_languages: set[Language]
    session: SessionController
    scan_orchestrator: ScanOrchestrator
    plan_board: PlanBoard
    chat_service: ChatService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    openai_client = OpenAIGatewayClient.create(resolved_settings.openai_api_key)
    gateway = AIGateway(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    repository = AppStateRepository(
        store=FileStateStore(resolved_settings.state_dir),
        default_language=parse_language(resolved_settings.default_language),
    )
    session = SessionController.load(
        repository,
        history_limit=resolved_settings.history_limit,
        water_step_ml=resolved_settings.water_step_ml,
    )
    translation_service = TranslationService(gateway)
    scan_orchestrator = ScanOrchestrator(
        session=session,
        analysis_service=AnalysisService(gateway),
        translation_service=translation_service,
    )
    plan_board = PlanBoard(
        plan_service=PlanService(gateway),
        translation_service=translation_service,
    )

    async def close_resources() -> None:
        scan_orchestrator.reset()
        await openai_client.client.close()

    return AppContainer(
        settings=resolved_settings,
        supported_languages=parse_supported_languages(
            resolved_settings.supported_languages
        ),
        session=session,
        scan_orchestrator=scan_orchestrator,
        plan_board=plan_board,
        chat_service=ChatService(gateway),
        close_resources=close_resources,
    )
