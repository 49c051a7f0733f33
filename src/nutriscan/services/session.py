"""Session controller owning the application state aggregate."""

import logging
from dataclasses import dataclass, field

from nutriscan.domain.errors import NutriScanError
from nutriscan.domain.mood import Mood, MoodLog
from nutriscan.domain.nutrition import DailyProgress, NutritionInfo
from nutriscan.domain.profile import UserProfile
from nutriscan.domain.state import AppState, AuthStatus, Language, Theme
from nutriscan.services import history as history_store
from nutriscan.services import progress as aggregator
from nutriscan.services.localization import Localizer
from nutriscan.services.mood import log_mood
from nutriscan.services.onboarding import validate_onboarding
from nutriscan.services.state import AppStateRepository

_logger = logging.getLogger(__name__)


@dataclass
class SessionController:
    """Single owner of session state; every mutation is written through."""

    repository: AppStateRepository
    history_limit: int = history_store.HISTORY_LIMIT
    water_step_ml: int = aggregator.WATER_STEP_ML
    state: AppState = field(default_factory=AppState)

    @classmethod
    def load(
        cls,
        repository: AppStateRepository,
        history_limit: int = history_store.HISTORY_LIMIT,
        water_step_ml: int = aggregator.WATER_STEP_ML,
    ) -> "SessionController":
        """Restore persisted state at session start."""
        controller = cls(
            repository=repository,
            history_limit=history_limit,
            water_step_ml=water_step_ml,
            state=repository.load(),
        )
        if controller.state.profile is not None:
            controller._sync_water_goal(controller.state.profile.weight)
        return controller

    @property
    def localizer(self) -> Localizer:
        return Localizer(self.state.language)

    def require_profile(self) -> UserProfile:
        """Return the onboarded profile or raise when there is none."""
        if self.state.profile is None:
            raise NutriScanError("Complete onboarding first.")
        return self.state.profile

    # Auth and onboarding

    def login(self) -> AuthStatus:
        """Mock login: resume with a stored profile or start onboarding."""
        stored = self.repository.load_profile()
        if stored is not None:
            self.state.profile = stored
            status = AuthStatus.LOGGED_IN
        else:
            status = AuthStatus.ONBOARDING
        self._set_auth_status(status)
        return status

    def logout(self) -> None:
        """Log out, keeping the stored profile for the next login."""
        self._set_auth_status(AuthStatus.LOGGED_OUT)

    def complete_onboarding(self, form: dict[str, object]) -> UserProfile:
        """Validate the onboarding form and store the resulting profile."""
        profile = validate_onboarding(form, self.localizer)
        self.update_profile(profile)
        self._set_auth_status(AuthStatus.LOGGED_IN)
        return profile

    def update_profile(self, profile: UserProfile) -> None:
        """Replace the profile and rederive the water goal."""
        self.repository.save_profile(profile)
        self.state.profile = profile
        self._sync_water_goal(profile.weight)

    # Preferences

    def set_language(self, language: Language) -> None:
        self.repository.save_language(language)
        self.state.language = language

    def set_theme(self, theme: Theme) -> None:
        self.repository.save_theme(theme)
        self.state.theme = theme

    # Scan results and progress

    def record_scan(self, result: NutritionInfo) -> None:
        """Fold a successful scan into history and daily progress."""
        history = history_store.append(
            self.state.history, result, limit=self.history_limit
        )
        progress = aggregator.merge(self.state.progress, result.nutrition)
        self.repository.save_history(history)
        self.repository.save_progress(progress)
        self.state.history = history
        self.state.progress = progress
        _logger.info(
            "Recorded scan %s (%s kcal); history size %s",
            result.food_name,
            result.nutrition.calories,
            len(history),
        )

    def search_history(self, term: str) -> list[NutritionInfo]:
        return history_store.search(self.state.history, term)

    def adjust_water(self, delta_ml: int) -> DailyProgress:
        """Change today's water intake by an arbitrary amount."""
        self._set_progress(aggregator.adjust_water(self.state.progress, delta_ml))
        return self.state.progress

    def add_water(self) -> DailyProgress:
        return self.adjust_water(self.water_step_ml)

    def remove_water(self) -> DailyProgress:
        return self.adjust_water(-self.water_step_ml)

    # Wellness

    def log_mood(self, mood: Mood | None, notes: str = "") -> MoodLog:
        """Prepend a mood entry and persist the journal."""
        mood_history = log_mood(self.state.mood_history, mood, notes)
        self.repository.save_mood_history(mood_history)
        self.state.mood_history = mood_history
        return mood_history[0]

    def _set_auth_status(self, status: AuthStatus) -> None:
        self.repository.save_auth_status(status)
        self.state.auth_status = status

    def _set_progress(self, progress: DailyProgress) -> None:
        self.repository.save_progress(progress)
        self.state.progress = progress

    def _sync_water_goal(self, weight_kg: float) -> None:
        goal = aggregator.recompute_water_goal(weight_kg)
        if goal != self.state.progress.water_goal:
            updated = aggregator.with_water_goal(self.state.progress, weight_kg)
            self._set_progress(updated)
