"""Testes do cálculo de horários reserváveis e do fallback."""

from __future__ import annotations

from datetime import date

import pytest

from app.domain.appointment import AppointmentRecord
from app.domain.catalog import ConfiguredSlot
from app.services.appointment_availability import (
    AvailabilityResolver,
    SlotRequestSequencer,
    active_slot_times,
    normalize_slot_set,
    occupied_slot_times,
    reconcile_selected_time,
)
from tests.fakes.fake_booking_api import FakeBookingApi
from utils.errors import BookingApiError

DAY = date(2026, 3, 13)
BRANCH = 2


def _appointment(time: str, *, status: str = "Programada", day: str = "2026-03-13T00:00:00", **kw) -> AppointmentRecord:
    return AppointmentRecord(
        id=kw.pop("id", 1),
        appointment_date=day,
        appointment_time=time,
        status=status,
        branch_id=kw.pop("branch_id", BRANCH),
        **kw,
    )


@pytest.fixture
def fallback_api(fake_api: FakeBookingApi) -> FakeBookingApi:
    fake_api.fail_available_times = BookingApiError("NO_HOURS_AVAILABLE|Sin horarios")
    fake_api.configured_slots[BRANCH] = [
        ConfiguredSlot(time="08:00", branch_id=BRANCH, is_active=True),
        ConfiguredSlot(time="09:00", branch_id=BRANCH, is_active=True),
        ConfiguredSlot(time="10:00", branch_id=BRANCH, is_active=False),
    ]
    fake_api.pending_appointments = [_appointment("08:00")]
    return fake_api


@pytest.mark.asyncio
async def test_primary_result_is_sorted_and_deduplicated(fake_api: FakeBookingApi) -> None:
    resolution = await AvailabilityResolver(fake_api).resolve(DAY, BRANCH)

    assert resolution.slots == ("08:00", "09:00", "10:00")
    assert resolution.source == "primary"
    assert resolution.error is None
    assert fake_api.calls_to("list_configured_slots") == []


@pytest.mark.asyncio
async def test_fallback_subtracts_occupied_slots(fallback_api: FakeBookingApi) -> None:
    resolution = await AvailabilityResolver(fallback_api).resolve(DAY, BRANCH)

    assert resolution.slots == ("09:00",)
    assert resolution.source == "fallback"
    assert resolution.error is not None
    assert resolution.error.code == "NO_HOURS_AVAILABLE"


@pytest.mark.asyncio
async def test_fallback_returns_empty_when_catalog_fails(fallback_api: FakeBookingApi) -> None:
    fallback_api.fail_configured_slots = BookingApiError("Error de conexión con el servidor")

    resolution = await AvailabilityResolver(fallback_api).resolve(DAY, BRANCH)

    assert resolution.slots == ()
    assert resolution.source == "unavailable"
    assert fallback_api.calls_to("list_pending_appointments") == []


@pytest.mark.asyncio
async def test_fallback_unfiltered_when_occupancy_fails(fallback_api: FakeBookingApi) -> None:
    fallback_api.fail_pending_appointments = BookingApiError("boom")

    resolution = await AvailabilityResolver(fallback_api).resolve(DAY, BRANCH)

    assert resolution.slots == ("08:00", "09:00")
    assert resolution.source == "fallback_unfiltered"


@pytest.mark.asyncio
async def test_unexpected_exception_never_escapes(fallback_api: FakeBookingApi) -> None:
    fallback_api.fail_available_times = RuntimeError("bug")

    resolution = await AvailabilityResolver(fallback_api).resolve(DAY, BRANCH)

    assert resolution.slots == ("09:00",)
    assert resolution.error is not None
    assert resolution.error.code == "UNKNOWN_ERROR"


def test_occupancy_compares_calendar_dates_and_ignores_cancelled() -> None:
    appointments = [
        _appointment("08:00", day="2026-03-13"),
        _appointment("09:00", day="2026-03-13T15:30:00Z"),
        _appointment("10:00", status="cancelada"),
        _appointment("11:00", status="Cancelled"),
        _appointment("12:00", day="2026-03-14T00:00:00"),
        _appointment("13:00", branch_id=1),
        _appointment("14:00", is_active=False),
        _appointment("15:00:00", status="Completada"),
    ]

    assert occupied_slot_times(appointments, DAY, BRANCH) == {"08:00", "09:00", "15:00"}


def test_active_slots_and_normalization() -> None:
    configured = [
        ConfiguredSlot(time="9:00", is_active=True),
        ConfiguredSlot(time="08:00:00", is_active=True),
        ConfiguredSlot(time="07:00", is_active=False),
    ]
    assert active_slot_times(configured) == ("08:00", "09:00")
    assert normalize_slot_set(["10:00", "bad", "10:00", "8:30"]) == ("08:30", "10:00")


def test_stale_selection_is_cleared_only_when_missing() -> None:
    assert reconcile_selected_time("09:00", ("08:00", "09:00")) == "09:00"
    assert reconcile_selected_time("09:00", ("08:00",)) is None
    assert reconcile_selected_time(None, ("08:00",)) is None


def test_sequencer_last_request_wins() -> None:
    sequencer = SlotRequestSequencer()
    first = sequencer.issue(DAY, BRANCH)
    second = sequencer.issue(date(2026, 3, 16), BRANCH)

    assert not sequencer.is_current(first)
    assert sequencer.is_current(second)

    sequencer.invalidate()
    assert not sequencer.is_current(second)
