"""Capture payloads from uploads, camera frames and barcode scans."""

import base64
import binascii
from dataclasses import dataclass
from typing import Protocol

from nutriscan.domain.errors import CaptureError
from nutriscan.domain.state import ScanMode

UNREADABLE_FILE_MESSAGE = "Could not read file."


@dataclass(frozen=True)
class CapturedPayload:
    """Raw input for one analysis: base64 image data or decoded barcode text."""

    data: str
    media_type: str
    mode: ScanMode


class CaptureDevice(Protocol):
    """Exclusively owned capture hardware such as a camera.

    Implementations build their payloads with from_image_bytes for food frames
    and from_barcode_text for decoded codes.
    """

    async def capture(self, mode: ScanMode) -> CapturedPayload:
        """Grab a frame (food) or a decoded code (qr)."""

    def release(self) -> None:
        """Release the underlying media stream."""


def from_image_bytes(image_bytes: bytes) -> CapturedPayload:
    """Wrap captured image bytes as a food payload."""
    if not image_bytes:
        raise CaptureError(UNREADABLE_FILE_MESSAGE)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return CapturedPayload(
        data=encoded,
        media_type=detect_mime_type(image_bytes),
        mode=ScanMode.FOOD,
    )


def from_barcode_text(text: str) -> CapturedPayload:
    """Wrap decoded barcode or QR text as a qr payload."""
    cleaned = text.strip()
    if not cleaned:
        raise CaptureError("No code could be decoded.")
    return CapturedPayload(data=cleaned, media_type="text/plain", mode=ScanMode.QR)


def decode_upload(data: str, media_type: str | None = None) -> CapturedPayload:
    """Decode an uploaded file given as base64 or a data URL."""
    body = data.strip()
    if body.startswith("data:"):
        header, _, body = body.partition(",")
        media_type = media_type or header[5:].split(";")[0] or None
    if not body:
        raise CaptureError(UNREADABLE_FILE_MESSAGE)
    try:
        image_bytes = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CaptureError(UNREADABLE_FILE_MESSAGE) from exc
    if not image_bytes:
        raise CaptureError(UNREADABLE_FILE_MESSAGE)
    return CapturedPayload(
        data=body,
        media_type=media_type or detect_mime_type(image_bytes),
        mode=ScanMode.FOOD,
    )


def to_data_url(data: str, media_type: str) -> str:
    """Build a data URL from base64 image data."""
    return f"data:{media_type};base64,{data}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
