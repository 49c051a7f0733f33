"""Request bodies for the HTTP API."""

from pydantic import BaseModel, Field

from nutriscan.domain.mood import Mood
from nutriscan.domain.state import Language, ScanMode, Theme


class ScanStartRequest(BaseModel):
    mode: ScanMode


class AnalyzeRequest(BaseModel):
    """Captured payload: base64 image data (food) or decoded code text (qr)."""

    data: str
    media_type: str = "image/jpeg"
    mode: ScanMode | None = None


class UploadRequest(BaseModel):
    """Uploaded image file as base64 or a data URL."""

    data: str
    media_type: str | None = None


class WaterRequest(BaseModel):
    delta_ml: int | None = None
    direction: int = Field(default=1, description="+1 adds one step, -1 removes one")


class MoodRequest(BaseModel):
    mood: Mood | None = None
    notes: str = ""


class LanguageRequest(BaseModel):
    language: Language


class ChatRequest(BaseModel):
    message: str


class ThemeRequest(BaseModel):
    theme: Theme
