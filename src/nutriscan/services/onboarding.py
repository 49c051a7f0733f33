"""Onboarding form validation."""

from pydantic import ValidationError

from nutriscan.domain.errors import OnboardingValidationError
from nutriscan.domain.profile import UserProfile
from nutriscan.services.localization import Localizer

REQUIRED_FIELDS = ("name", "age", "gender", "height", "weight", "profession")

DEFAULT_FORM: dict[str, object] = {
    "dietary_preference": "Non-Vegetarian",
    "primary_goal": {"type": "Fitness", "detail": "Weight Loss"},
}


def validate_onboarding(form: dict[str, object], localizer: Localizer) -> UserProfile:
    """Collect per-field errors and build a profile when the form is complete."""
    errors = {
        name: localizer.translate(f"{name}Required")
        for name in REQUIRED_FIELDS
        if not form.get(name)
    }
    if errors:
        raise OnboardingValidationError(errors)
    try:
        return UserProfile.model_validate({**DEFAULT_FORM, **form})
    except ValidationError as exc:
        raise OnboardingValidationError(_field_errors(exc)) from exc


def _field_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        location = error.get("loc") or ("form",)
        errors.setdefault(str(location[0]), error.get("msg", "Invalid value"))
    return errors
