"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from nutriscan.api.models import (
    AnalyzeRequest,
    ChatRequest,
    LanguageRequest,
    MoodRequest,
    ScanStartRequest,
    ThemeRequest,
    UploadRequest,
    WaterRequest,
)
from nutriscan.app_logging import configure_logging
from nutriscan.containers import AppContainer
from nutriscan.domain.errors import (
    AnalysisInProgressError,
    GatewayError,
    NutriScanError,
    OnboardingValidationError,
)
from nutriscan.domain.nutrition import (
    CALORIE_TARGET_KCAL,
    CARBS_TARGET_G,
    FATS_TARGET_G,
    PROTEIN_TARGET_G,
)
from nutriscan.domain.profile import UserProfile
from nutriscan.services.chat import Conversation
from nutriscan.services.progress import water_percentage
from nutriscan.services.scans import ScanView


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Session loaded: auth=%s language=%s history=%s",
            container.session.state.auth_status.value,
            container.session.state.language.value,
            len(container.session.state.history),
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.conversation = None

    @app.exception_handler(NutriScanError)
    async def handle_nutriscan_error(
        request: Request, exc: NutriScanError
    ) -> JSONResponse:
        if isinstance(exc, OnboardingValidationError):
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={"detail": exc.message, "errors": exc.errors},
            )
        if isinstance(exc, AnalysisInProgressError):
            status_code = status.HTTP_409_CONFLICT
        elif isinstance(exc, GatewayError):
            status_code = status.HTTP_502_BAD_GATEWAY
        else:
            status_code = status.HTTP_400_BAD_REQUEST
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    def _end_conversation(request: Request) -> None:
        """Drop the chat transcript; the next message greets the current user."""
        request.app.state.conversation = None

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/login")
    async def login(request: Request) -> dict[str, str]:
        """Mock login; no credentials are checked."""
        auth_status = _container(request).session.login()
        _end_conversation(request)
        return {"auth_status": auth_status.value}

    @app.post("/auth/logout")
    async def logout(request: Request) -> dict[str, str]:
        state_container = _container(request)
        state_container.session.logout()
        state_container.scan_orchestrator.reset()
        _end_conversation(request)
        return {"auth_status": state_container.session.state.auth_status.value}

    @app.post("/onboarding")
    async def onboarding(form: dict[str, object], request: Request) -> UserProfile:
        """Validate the onboarding form and store the profile."""
        profile = _container(request).session.complete_onboarding(form)
        _end_conversation(request)
        return profile

    @app.get("/profile")
    async def get_profile(request: Request) -> UserProfile:
        return _container(request).session.require_profile()

    @app.put("/profile")
    async def put_profile(profile: UserProfile, request: Request) -> UserProfile:
        """Replace the profile; the water goal follows the new weight."""
        _container(request).session.update_profile(profile)
        _end_conversation(request)
        return profile

    @app.get("/language")
    async def get_language(request: Request) -> dict[str, str]:
        return {"language": _container(request).session.state.language.value}

    @app.put("/language")
    async def put_language(
        body: LanguageRequest, request: Request
    ) -> dict[str, str]:
        state_container = _container(request)
        if body.language not in state_container.supported_languages:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Language {body.language.value} is not enabled.",
            )
        state_container.session.set_language(body.language)
        return {"language": body.language.value}

    @app.get("/theme")
    async def get_theme(request: Request) -> dict[str, str]:
        return {"theme": _container(request).session.state.theme.value}

    @app.put("/theme")
    async def put_theme(body: ThemeRequest, request: Request) -> dict[str, str]:
        _container(request).session.set_theme(body.theme)
        return {"theme": body.theme.value}

    @app.get("/i18n/{key}")
    async def localize(key: str, request: Request) -> dict[str, str]:
        """Look up an interface string; query parameters fill placeholders."""
        localizer = _container(request).session.localizer
        return {"key": key, "text": localizer.translate(key, **request.query_params)}

    @app.get("/scans/view")
    async def scan_view(request: Request) -> dict[str, object]:
        return _format_view(_container(request).scan_orchestrator.state)

    @app.post("/scans/start")
    async def scan_start(body: ScanStartRequest, request: Request) -> dict[str, object]:
        orchestrator = _container(request).scan_orchestrator
        orchestrator.start_scan(body.mode)
        return _format_view(orchestrator.state)

    @app.post("/scans/cancel")
    async def scan_cancel(request: Request) -> dict[str, object]:
        orchestrator = _container(request).scan_orchestrator
        orchestrator.cancel_scan()
        return _format_view(orchestrator.state)

    @app.post("/scans/reset")
    async def scan_reset(request: Request) -> dict[str, object]:
        orchestrator = _container(request).scan_orchestrator
        orchestrator.reset()
        return _format_view(orchestrator.state)

    @app.post("/scans/analyze")
    async def scan_analyze(body: AnalyzeRequest, request: Request) -> dict[str, object]:
        """Analyze a captured payload in the given (or current) scan mode."""
        orchestrator = _container(request).scan_orchestrator
        mode = body.mode or orchestrator.state.mode
        await orchestrator.perform_analysis(body.data, body.media_type, mode)
        return _format_view(orchestrator.state)

    @app.post("/scans/upload")
    async def scan_upload(body: UploadRequest, request: Request) -> dict[str, object]:
        orchestrator = _container(request).scan_orchestrator
        await orchestrator.analyze_upload(body.data, body.media_type)
        return _format_view(orchestrator.state)

    @app.get("/history")
    async def history(request: Request, q: str = "") -> dict[str, object]:
        entries = _container(request).session.search_history(q)
        return {"history": [entry.model_dump(mode="json") for entry in entries]}

    @app.get("/progress")
    async def progress(request: Request) -> dict[str, object]:
        return _format_progress(_container(request))

    @app.post("/progress/water")
    async def water(body: WaterRequest, request: Request) -> dict[str, object]:
        """Adjust water intake by an explicit amount or one configured step."""
        state_container = _container(request)
        session = state_container.session
        if body.delta_ml is not None:
            session.adjust_water(body.delta_ml)
        elif body.direction < 0:
            session.remove_water()
        else:
            session.add_water()
        return _format_progress(state_container)

    @app.get("/mood")
    async def mood_history(request: Request) -> dict[str, object]:
        entries = _container(request).session.state.mood_history
        return {"moods": [entry.model_dump(mode="json") for entry in entries]}

    @app.post("/mood")
    async def log_mood(body: MoodRequest, request: Request) -> dict[str, object]:
        entry = _container(request).session.log_mood(body.mood, body.notes)
        return entry.model_dump(mode="json")

    @app.get("/plans")
    async def plans(request: Request) -> dict[str, object]:
        return _format_plans(_container(request))

    @app.post("/plans/meal")
    async def meal_plan(request: Request) -> dict[str, object]:
        state_container = _container(request)
        session = state_container.session
        await state_container.plan_board.generate_meal_plan(
            session.require_profile(), session.state.language
        )
        return _format_plans(state_container)

    @app.post("/plans/shopping-list")
    async def shopping_list(request: Request) -> dict[str, object]:
        state_container = _container(request)
        await state_container.plan_board.generate_shopping_list(
            state_container.session.state.language
        )
        return _format_plans(state_container)

    @app.post("/plans/workout")
    async def workout_plan(request: Request) -> dict[str, object]:
        state_container = _container(request)
        session = state_container.session
        await state_container.plan_board.generate_workout_plan(
            session.require_profile(), session.state.language
        )
        return _format_plans(state_container)

    @app.post("/chat")
    async def chat(body: ChatRequest, request: Request) -> dict[str, object]:
        """Send a message to the assistant, opening a conversation if needed."""
        state_container = _container(request)
        session = state_container.session
        conversation: Conversation | None = request.app.state.conversation
        if conversation is None:
            conversation = state_container.chat_service.start(
                session.require_profile(), session.localizer
            )
            request.app.state.conversation = conversation
        reply = await state_container.chat_service.send(
            conversation, body.message, session.localizer
        )
        return {
            "reply": reply.content if reply else None,
            "messages": [
                {"role": message.role, "content": message.content}
                for message in conversation.messages
            ],
        }

    return app


def _format_view(view: ScanView) -> dict[str, object]:
    return {
        "view": view.view.value,
        "mode": view.mode.value if view.mode else None,
        "result": view.result.model_dump(mode="json") if view.result else None,
        "error": view.error,
    }


def _format_progress(container: AppContainer) -> dict[str, object]:
    progress = container.session.state.progress
    return {
        "progress": progress.model_dump(mode="json"),
        "water_percentage": water_percentage(progress),
        "targets": {
            "calories": CALORIE_TARGET_KCAL,
            "protein": PROTEIN_TARGET_G,
            "carbs": CARBS_TARGET_G,
            "fats": FATS_TARGET_G,
        },
    }


def _format_plans(container: AppContainer) -> dict[str, object]:
    board = container.plan_board
    return {
        "meal_plan": board.meal_plan.model_dump() if board.meal_plan else None,
        "shopping_list": (
            board.shopping_list.model_dump() if board.shopping_list else None
        ),
        "workout_plan": board.workout_plan.model_dump() if board.workout_plan else None,
        "is_loading": board.is_loading,
        "error": board.error,
        "workout_error": board.workout_error,
    }
