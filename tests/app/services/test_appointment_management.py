"""Testes das operações pós-agendamento (consulta, cancelamento, conclusão)."""

from __future__ import annotations

from datetime import datetime

import pytest

from app.domain.appointment import AppointmentRecord
from app.services.appointment_management import (
    AppointmentManager,
    group_appointments,
    validate_client_number,
    validate_completion_notes,
)
from app.services.cancellation_policy import CancellationPolicyGuard
from tests.fakes.fake_booking_api import KNOWN_CLIENT, FakeBookingApi
from utils.errors import (
    BookingApiError,
    CancellationRefusedError,
    ClientNotFoundError,
    LocalValidationError,
)

NOW = datetime(2026, 3, 12, 8, 0)
REASON = "Tengo un viaje de trabajo"


def _record(id: int, status: str, day: str = "2026-03-14T00:00:00", time: str = "09:00") -> AppointmentRecord:
    return AppointmentRecord(
        id=id,
        appointment_number=f"APT-{id:03d}",
        appointment_date=day,
        appointment_time=time,
        status=status,
        branch_id=2,
    )


@pytest.fixture
def manager(fake_api: FakeBookingApi) -> AppointmentManager:
    fake_api.client_appointments[KNOWN_CLIENT] = [
        _record(1, "Programada"),
        _record(2, "Completada", day="2026-02-01"),
        _record(3, "Cancelada", day="2026-02-02"),
        _record(4, "Programada", day="2026-03-12T00:00:00", time="15:00"),
        _record(5, "En revisión"),
    ]
    return AppointmentManager(fake_api, CancellationPolicyGuard(24))


class TestLookup:
    @pytest.mark.asyncio
    async def test_groups_by_status(self, manager: AppointmentManager) -> None:
        grouped = await manager.lookup(KNOWN_CLIENT)

        assert [a.id for a in grouped.pending] == [1, 4]
        assert [a.id for a in grouped.completed] == [2]
        assert [a.id for a in grouped.cancelled] == [3]
        assert grouped.stats.total == 5
        assert grouped.to_dict()["stats"]["pending"] == 2
        assert grouped.to_dict()["completed"][0]["status_display"] == "Completada"

    @pytest.mark.asyncio
    async def test_invalid_format_never_calls_network(self, fake_api: FakeBookingApi, manager: AppointmentManager) -> None:
        with pytest.raises(LocalValidationError):
            await manager.lookup("12a45")

        assert fake_api.calls == []

    @pytest.mark.asyncio
    async def test_unknown_client(self, manager: AppointmentManager) -> None:
        with pytest.raises(ClientNotFoundError):
            await manager.lookup("555555")


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancel_outside_window(self, fake_api: FakeBookingApi, manager: AppointmentManager) -> None:
        outcome = await manager.cancel_by_id(KNOWN_CLIENT, 1, f"  {REASON}  ", now=NOW)

        assert outcome is not None
        assert outcome.success is True
        assert outcome.message == "Cita cancelada exitosamente"
        assert fake_api.calls_to("cancel_appointment") == [
            {"client_number": KNOWN_CLIENT, "appointment_id": 1, "reason": REASON}
        ]

    @pytest.mark.asyncio
    async def test_refused_inside_window_before_network(
        self, fake_api: FakeBookingApi, manager: AppointmentManager
    ) -> None:
        with pytest.raises(CancellationRefusedError) as exc_info:
            await manager.cancel_by_id(KNOWN_CLIENT, 4, REASON, now=NOW)

        assert exc_info.value.lead_time_hours == 24
        assert fake_api.calls_to("cancel_appointment") == []

    @pytest.mark.asyncio
    async def test_reason_is_validated_before_lookup(
        self, fake_api: FakeBookingApi, manager: AppointmentManager
    ) -> None:
        with pytest.raises(LocalValidationError) as exc_info:
            await manager.cancel_by_id(KNOWN_CLIENT, 1, "corto", now=NOW)

        assert "reason" in exc_info.value.errors
        assert fake_api.calls == []

    @pytest.mark.asyncio
    async def test_unknown_appointment_returns_none(self, manager: AppointmentManager) -> None:
        assert await manager.cancel_by_id(KNOWN_CLIENT, 99, REASON, now=NOW) is None

    @pytest.mark.asyncio
    async def test_unparsable_date_is_local_error(self, manager: AppointmentManager) -> None:
        with pytest.raises(LocalValidationError):
            await manager.cancel(KNOWN_CLIENT, _record(7, "Programada", day="pronto"), REASON, now=NOW)

    @pytest.mark.asyncio
    async def test_force_cancel_lets_server_decide(self, fake_api: FakeBookingApi, manager: AppointmentManager) -> None:
        fake_api.fail_cancel = BookingApiError("No se puede cancelar con menos de 24 horas")

        outcome = await manager.force_cancel(KNOWN_CLIENT, 4, REASON)

        assert outcome.success is False
        assert outcome.error is not None
        assert outcome.message == "No se puede cancelar con menos de 24 horas"


class TestComplete:
    @pytest.mark.asyncio
    async def test_complete(self, fake_api: FakeBookingApi, manager: AppointmentManager) -> None:
        outcome = await manager.complete(1, "  Se entregó el duplicado de factura ")

        assert outcome.success is True
        assert fake_api.calls_to("complete_appointment") == [
            {"appointment_id": 1, "notes": "Se entregó el duplicado de factura"}
        ]

    @pytest.mark.asyncio
    async def test_notes_are_required(self, fake_api: FakeBookingApi, manager: AppointmentManager) -> None:
        with pytest.raises(LocalValidationError):
            await manager.complete(1, "ok")

        assert fake_api.calls_to("complete_appointment") == []

    @pytest.mark.asyncio
    async def test_server_error_is_interpreted(self, fake_api: FakeBookingApi, manager: AppointmentManager) -> None:
        fake_api.fail_complete = BookingApiError("INVALID_STATE|La cita ya fue completada")

        outcome = await manager.complete(1, "Atención realizada sin novedad")

        assert outcome.success is False
        assert outcome.error is not None
        assert outcome.error.code == "INVALID_STATE"
        assert outcome.message == "La cita ya fue completada"


@pytest.mark.asyncio
async def test_verify_by_reference(manager: AppointmentManager) -> None:
    result = await manager.verify("APT-001", KNOWN_CLIENT)
    assert result.is_valid is True

    missing = await manager.verify("APT-999", KNOWN_CLIENT)
    assert missing.is_valid is False


@pytest.mark.parametrize(
    ("value", "ok"),
    [
        ("123456", True),
        ("12345", False),
        ("1" * 16, False),
        ("12a456", False),
        ("", False),
        ("\u00b9\u00b2\u00b3\u2074\u2075\u2076", False),
    ],
)
def test_validate_client_number(value: str, ok: bool) -> None:
    assert (validate_client_number(value) is None) is ok


def test_validate_completion_notes_bounds() -> None:
    assert validate_completion_notes("x" * 10) is None
    assert validate_completion_notes("x" * 1001) is not None


def test_unknown_status_counts_only_in_total(fake_api: FakeBookingApi) -> None:
    grouped = group_appointments(fake_api.clients[KNOWN_CLIENT], [_record(1, "En revisión")])
    assert grouped.stats.total == 1
    assert grouped.pending == grouped.completed == grouped.cancelled == ()
