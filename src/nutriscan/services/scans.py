"""Scan view state machine: capture, analyze, record."""

import logging
from dataclasses import dataclass, field

from nutriscan.domain.errors import AnalysisInProgressError, CaptureError, GatewayError
from nutriscan.domain.nutrition import NutritionInfo
from nutriscan.domain.state import DashboardView, ScanMode
from nutriscan.services.analysis import AnalysisService
from nutriscan.services.capture import CaptureDevice, decode_upload
from nutriscan.services.session import SessionController
from nutriscan.services.translation import TranslationService

_logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Could not save the scan result. Please try again."


@dataclass
class ScanView:
    """What the dashboard currently shows."""

    view: DashboardView = DashboardView.HOME
    mode: ScanMode | None = None
    result: NutritionInfo | None = None
    error: str | None = None


@dataclass
class ScanOrchestrator:
    """Drives one scan from capture to persisted result.

    Only one analysis may be in flight; a second trigger is rejected with
    AnalysisInProgressError before any gateway call. A result that lands after
    the user has navigated away is still recorded but leaves the view alone.
    """

    session: SessionController
    analysis_service: AnalysisService
    translation_service: TranslationService
    state: ScanView = field(default_factory=ScanView)
    _device: CaptureDevice | None = field(default=None, repr=False)
    _in_flight: bool = field(default=False, repr=False)
    _view_generation: int = field(default=0, repr=False)

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def start_scan(
        self, mode: ScanMode, device: CaptureDevice | None = None
    ) -> None:
        """Enter the scanning view, taking ownership of the capture device."""
        self._release_device()
        self._view_generation += 1
        self.state = ScanView(view=DashboardView.SCANNING, mode=mode)
        self._device = device

    def cancel_scan(self) -> None:
        """Leave the scanning view without side effects."""
        if self.state.view is DashboardView.SCANNING:
            self.reset()

    def reset(self) -> None:
        """Return to the home view; also the manual retry path from ERROR."""
        self._release_device()
        self._view_generation += 1
        self.state = ScanView()

    async def capture_and_analyze(self) -> NutritionInfo | None:
        """Capture from the owned device, release it, then analyze."""
        mode = self.state.mode
        device = self._device
        if self.state.view is not DashboardView.SCANNING or mode is None:
            return None
        if device is None:
            self._fail("No capture device is available.")
            return None
        try:
            payload = await device.capture(mode)
        except CaptureError as exc:
            self._fail(exc.message)
            return None
        finally:
            self._release_device()
        return await self.perform_analysis(payload.data, payload.media_type, mode)

    async def analyze_upload(
        self, data: str, media_type: str | None = None
    ) -> NutritionInfo | None:
        """Analyze an uploaded image file as a food scan."""
        self._release_device()
        try:
            payload = decode_upload(data, media_type)
        except CaptureError as exc:
            self._fail(exc.message)
            return None
        return await self.perform_analysis(
            payload.data, payload.media_type, payload.mode
        )

    async def perform_analysis(
        self, raw_data: str, media_type: str, mode: ScanMode | None
    ) -> NutritionInfo | None:
        """Analyze a payload; on success record it, on failure change nothing."""
        if mode is None:
            return None
        if self._in_flight:
            raise AnalysisInProgressError
        profile = self.session.require_profile()
        language = self.session.state.language
        self._in_flight = True
        self.state = ScanView(view=DashboardView.ANALYZING, mode=mode)
        generation = self._view_generation
        try:
            result = await self.analysis_service.analyze(
                raw_data, media_type, profile, mode
            )
            result = await self.translation_service.translate_nutrition_info(
                result, language
            )
        except GatewayError as exc:
            self._fail(exc.message, generation)
            return None
        finally:
            self._in_flight = False
        try:
            self.session.record_scan(result)
        except OSError:
            _logger.exception("Could not persist scan %s", result.food_name)
            self._fail(SAVE_FAILED_MESSAGE, generation)
            return None
        if generation == self._view_generation:
            self.state = ScanView(
                view=DashboardView.RESULT, mode=mode, result=result
            )
        else:
            _logger.info("Scan %s landed after the view changed", result.food_name)
        return result

    def _fail(self, message: str, generation: int | None = None) -> None:
        _logger.warning("Scan failed: %s", message)
        if generation is not None and generation != self._view_generation:
            return
        self.state = ScanView(
            view=DashboardView.ERROR, mode=self.state.mode, error=message
        )

    def _release_device(self) -> None:
        device, self._device = self._device, None
        if device is not None:
            device.release()

