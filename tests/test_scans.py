"""Tests for the scan orchestrator."""

import asyncio

import pytest

from nutriscan.domain.errors import (
    AnalysisInProgressError,
    CaptureError,
    NutriScanError,
)
from nutriscan.domain.state import DashboardView, Language, ScanMode
from nutriscan.services.analysis import ANALYSIS_FAILED_MESSAGE
from nutriscan.services.capture import CapturedPayload
from nutriscan.services.scans import SAVE_FAILED_MESSAGE, ScanOrchestrator
from nutriscan.services.session import SessionController
from tests.conftest import (
    TRANSLATION_PREFIX,
    FakeCaptureDevice,
    FakeGatewayClient,
    InMemoryStateStore,
)


def test_food_scan_records_result_and_progress(
    orchestrator: ScanOrchestrator,
    session: SessionController,
    gateway_client: FakeGatewayClient,
) -> None:
    device = FakeCaptureDevice()
    orchestrator.start_scan(ScanMode.FOOD, device)

    result = asyncio.run(orchestrator.capture_and_analyze())

    assert result is not None
    assert result.food_name == "Banana"
    assert orchestrator.state.view is DashboardView.RESULT
    assert orchestrator.state.result == result
    assert session.state.history == [result]
    assert session.state.progress.calories == 105
    assert session.state.progress.carbs == 27
    assert session.repository.load_history() == [result]
    assert session.repository.load_progress().calories == 105
    assert device.released == 1
    assert not orchestrator.in_flight
    call = gateway_client.schema_calls("nutrition_analysis")[0]
    assert call["image_data_url"] == "data:image/jpeg;base64,aGVsbG8="
    assert "- Weight: 70 kg" in str(call["prompt"])


def test_failed_analysis_leaves_state_untouched(
    orchestrator: ScanOrchestrator,
    session: SessionController,
    state_store: InMemoryStateStore,
    gateway_client: FakeGatewayClient,
) -> None:
    gateway_client.failing.add("nutrition_analysis")
    snapshot = dict(state_store.values)

    result = asyncio.run(
        orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD)
    )

    assert result is None
    assert orchestrator.state.view is DashboardView.ERROR
    assert orchestrator.state.error == ANALYSIS_FAILED_MESSAGE
    assert session.state.history == []
    assert session.state.progress.calories == 0
    assert state_store.values == snapshot
    assert not orchestrator.in_flight


def test_concurrent_analysis_is_rejected(
    orchestrator: ScanOrchestrator,
    session: SessionController,
    gateway_client: FakeGatewayClient,
) -> None:
    async def scenario() -> None:
        gateway_client.gate = asyncio.Event()
        first = asyncio.create_task(
            orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD)
        )
        await asyncio.sleep(0)
        assert orchestrator.in_flight
        assert orchestrator.state.view is DashboardView.ANALYZING

        with pytest.raises(AnalysisInProgressError):
            await orchestrator.perform_analysis(
                "aGVsbG8=", "image/jpeg", ScanMode.FOOD
            )
        assert len(gateway_client.calls) == 1

        gateway_client.gate.set()
        await first

    asyncio.run(scenario())

    assert len(session.state.history) == 1
    assert orchestrator.state.view is DashboardView.RESULT


def test_capture_error_releases_device(
    orchestrator: ScanOrchestrator, gateway_client: FakeGatewayClient
) -> None:
    device = FakeCaptureDevice(error=CaptureError("Could not access the camera."))
    orchestrator.start_scan(ScanMode.FOOD, device)

    result = asyncio.run(orchestrator.capture_and_analyze())

    assert result is None
    assert device.released == 1
    assert orchestrator.state.view is DashboardView.ERROR
    assert orchestrator.state.error == "Could not access the camera."
    assert gateway_client.calls == []


def test_capture_without_device_fails(orchestrator: ScanOrchestrator) -> None:
    orchestrator.start_scan(ScanMode.QR)

    asyncio.run(orchestrator.capture_and_analyze())

    assert orchestrator.state.view is DashboardView.ERROR
    assert orchestrator.state.error == "No capture device is available."


def test_leaving_scanning_releases_device(orchestrator: ScanOrchestrator) -> None:
    first = FakeCaptureDevice()
    second = FakeCaptureDevice()

    orchestrator.start_scan(ScanMode.FOOD, first)
    orchestrator.start_scan(ScanMode.QR, second)
    assert first.released == 1

    orchestrator.cancel_scan()
    assert second.released == 1
    assert orchestrator.state.view is DashboardView.HOME
    assert orchestrator.state.mode is None


def test_cancel_outside_scanning_is_ignored(orchestrator: ScanOrchestrator) -> None:
    asyncio.run(orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD))

    orchestrator.cancel_scan()

    assert orchestrator.state.view is DashboardView.RESULT


def test_reset_from_error_returns_home(
    orchestrator: ScanOrchestrator, gateway_client: FakeGatewayClient
) -> None:
    gateway_client.failing.add("nutrition_analysis")
    asyncio.run(orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD))
    assert orchestrator.state.view is DashboardView.ERROR

    orchestrator.reset()

    assert orchestrator.state.view is DashboardView.HOME
    assert orchestrator.state.error is None


def test_unreadable_upload_sets_error(
    orchestrator: ScanOrchestrator, gateway_client: FakeGatewayClient
) -> None:
    result = asyncio.run(orchestrator.analyze_upload("not base64!!"))

    assert result is None
    assert orchestrator.state.view is DashboardView.ERROR
    assert orchestrator.state.error == "Could not read file."
    assert gateway_client.calls == []


def test_upload_data_url_is_analyzed_as_food(
    orchestrator: ScanOrchestrator, gateway_client: FakeGatewayClient
) -> None:
    result = asyncio.run(orchestrator.analyze_upload("data:image/png;base64,aGVsbG8="))

    assert result is not None
    assert orchestrator.state.mode is ScanMode.FOOD
    call = gateway_client.schema_calls("nutrition_analysis")[0]
    assert call["image_data_url"] == "data:image/png;base64,aGVsbG8="


def test_missing_mode_is_a_no_op(
    orchestrator: ScanOrchestrator, gateway_client: FakeGatewayClient
) -> None:
    result = asyncio.run(orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", None))

    assert result is None
    assert orchestrator.state.view is DashboardView.HOME
    assert gateway_client.calls == []


def test_qr_scan_sends_product_text_without_image(
    orchestrator: ScanOrchestrator, gateway_client: FakeGatewayClient
) -> None:
    device = FakeCaptureDevice(
        payload=CapturedPayload(
            data="Organic Banana Chips 100g", media_type="text/plain", mode=ScanMode.QR
        )
    )
    orchestrator.start_scan(ScanMode.QR, device)

    asyncio.run(orchestrator.capture_and_analyze())

    call = gateway_client.schema_calls("nutrition_analysis")[0]
    assert call["image_data_url"] is None
    assert '"Organic Banana Chips 100g"' in str(call["prompt"])
    assert orchestrator.state.view is DashboardView.RESULT


def test_result_is_translated_before_recording(
    orchestrator: ScanOrchestrator, session: SessionController
) -> None:
    session.set_language(Language.HI)

    result = asyncio.run(
        orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD)
    )

    assert result is not None
    assert result.food_name == f"{TRANSLATION_PREFIX}Banana"
    assert result.nutrition.calories == 105
    assert session.state.history[0].food_name == f"{TRANSLATION_PREFIX}Banana"


def test_analysis_requires_profile(
    orchestrator: ScanOrchestrator,
    session: SessionController,
    gateway_client: FakeGatewayClient,
) -> None:
    session.state.profile = None

    with pytest.raises(NutriScanError):
        asyncio.run(
            orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD)
        )

    assert not orchestrator.in_flight
    assert gateway_client.calls == []


def test_late_result_after_reset_keeps_home_view(
    orchestrator: ScanOrchestrator,
    session: SessionController,
    gateway_client: FakeGatewayClient,
) -> None:
    async def scenario() -> None:
        gateway_client.gate = asyncio.Event()
        first = asyncio.create_task(
            orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD)
        )
        await asyncio.sleep(0)
        orchestrator.reset()

        gateway_client.gate.set()
        assert await first is not None

    asyncio.run(scenario())

    assert orchestrator.state.view is DashboardView.HOME
    assert orchestrator.state.result is None
    assert len(session.state.history) == 1
    assert session.state.progress.calories == 105


def test_late_failure_after_new_scan_keeps_scanning_view(
    orchestrator: ScanOrchestrator, gateway_client: FakeGatewayClient
) -> None:
    gateway_client.failing.add("nutrition_analysis")
    device = FakeCaptureDevice()

    async def scenario() -> None:
        gateway_client.gate = asyncio.Event()
        first = asyncio.create_task(
            orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD)
        )
        await asyncio.sleep(0)
        orchestrator.start_scan(ScanMode.QR, device)

        gateway_client.gate.set()
        assert await first is None

    asyncio.run(scenario())

    assert orchestrator.state.view is DashboardView.SCANNING
    assert orchestrator.state.mode is ScanMode.QR
    assert orchestrator.state.error is None
    assert device.released == 0


def test_storage_failure_shows_error_and_keeps_memory(
    orchestrator: ScanOrchestrator,
    session: SessionController,
    state_store: InMemoryStateStore,
) -> None:
    state_store.failing_keys.add("scanHistory")

    result = asyncio.run(
        orchestrator.perform_analysis("aGVsbG8=", "image/jpeg", ScanMode.FOOD)
    )

    assert result is None
    assert orchestrator.state.view is DashboardView.ERROR
    assert orchestrator.state.error == SAVE_FAILED_MESSAGE
    assert session.state.history == []
    assert session.state.progress.calories == 0
    assert not orchestrator.in_flight
