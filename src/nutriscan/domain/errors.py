"""Application error types."""


class NutriScanError(Exception):
    """Base class for recoverable, user-facing errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CaptureError(NutriScanError):
    """Raised when a captured payload cannot be read."""


class GatewayError(NutriScanError):
    """Raised when the AI gateway call fails or returns an invalid payload."""


class AnalysisInProgressError(NutriScanError):
    """Raised when a scan is triggered while another one is in flight."""

    def __init__(self) -> None:
        super().__init__("An analysis is already in progress.")


class MoodNotSelectedError(NutriScanError):
    """Raised when logging a mood without selecting one."""

    def __init__(self) -> None:
        super().__init__("Please select a mood.")


class OnboardingValidationError(NutriScanError):
    """Raised when onboarding fields are missing."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("Please fill in the required fields.")
        self.errors = errors
