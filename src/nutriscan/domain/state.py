"""Session-level state enums and the application state aggregate."""

from dataclasses import dataclass, field
from enum import StrEnum

from nutriscan.domain.mood import MoodLog
from nutriscan.domain.nutrition import DailyProgress, NutritionInfo
from nutriscan.domain.profile import UserProfile


class AuthStatus(StrEnum):
    """Mock authentication status."""

    LOGGED_OUT = "LOGGED_OUT"
    ONBOARDING = "ONBOARDING"
    LOGGED_IN = "LOGGED_IN"


class Language(StrEnum):
    """Supported interface languages."""

    EN = "en"
    HI = "hi"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {Language.EN: "English", Language.HI: "Hindi"}


class Theme(StrEnum):
    """Color theme preference."""

    LIGHT = "light"
    DARK = "dark"


class ScanMode(StrEnum):
    """Capture mode chosen by the user."""

    FOOD = "food"
    QR = "qr"


class DashboardView(StrEnum):
    """Scan view states."""

    HOME = "HOME"
    SCANNING = "SCANNING"
    ANALYZING = "ANALYZING"
    RESULT = "RESULT"
    ERROR = "ERROR"


@dataclass
class AppState:
    """Process-wide session state mirrored to the state store."""

    auth_status: AuthStatus = AuthStatus.LOGGED_OUT
    profile: UserProfile | None = None
    language: Language = Language.EN
    theme: Theme = Theme.LIGHT
    history: list[NutritionInfo] = field(default_factory=list)
    progress: DailyProgress = field(default_factory=DailyProgress)
    mood_history: list[MoodLog] = field(default_factory=list)
