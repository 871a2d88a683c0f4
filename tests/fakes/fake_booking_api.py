"""Fake in-memory da API de citas para testes deterministas."""

from __future__ import annotations

import asyncio
from datetime import date

from app.domain.appointment import AppointmentRecord, ScheduleReceipt, VerificationResult
from app.domain.catalog import AppointmentType, Branch, ConfiguredSlot, SystemSetting
from app.domain.client import ClientRecord, RegistrantData
from utils.errors import BookingApiError

KNOWN_CLIENT = "100200300"


class FakeBookingApi:
    """Implementa BookingApiProtocol sem IO.

    Falhas são injetadas por atributo (`fail_<operação>`) e cada chamada
    fica registrada em `calls` para validar que validações locais não
    chegam à rede.
    """

    def __init__(self) -> None:
        self.branches = [
            Branch(id=1, name="Sede Norte", code="N"),
            Branch(id=2, name="Sede Central", code="C", is_main=True),
        ]
        self.reasons = [
            AppointmentType(id=10, name="Revisión de factura", code="FACT"),
            AppointmentType(id=11, name="Nueva conexión", code="CONX"),
        ]
        self.clients = {
            KNOWN_CLIENT: ClientRecord(client_number=KNOWN_CLIENT, full_name="Ana Gómez"),
        }
        self.available_times: dict[tuple[date, int], list[str]] = {}
        self.default_times = ["10:00", "08:00", "09:00", "08:00"]
        self.configured_slots: dict[int, list[ConfiguredSlot]] = {}
        self.pending_appointments: list[AppointmentRecord] = []
        self.client_appointments: dict[str, list[AppointmentRecord]] = {}
        self.settings: dict[str, SystemSetting] = {}
        self.time_gates: dict[date, asyncio.Event] = {}

        self.fail_catalogs: Exception | None = None
        self.fail_available_times: Exception | None = None
        self.fail_configured_slots: Exception | None = None
        self.fail_pending_appointments: Exception | None = None
        self.fail_schedule: Exception | None = None
        self.fail_cancel: Exception | None = None
        self.fail_complete: Exception | None = None
        self.fail_setting: Exception | None = None

        self.calls: list[tuple[str, dict]] = []
        self._sequence = 0

    def calls_to(self, name: str) -> list[dict]:
        return [kwargs for call, kwargs in self.calls if call == name]

    async def validate_client(self, client_number: str) -> ClientRecord:
        self.calls.append(("validate_client", {"client_number": client_number}))
        record = self.clients.get(client_number)
        if record is None:
            raise BookingApiError("Cliente no encontrado", status_code=404)
        return record

    async def list_branches(self) -> list[Branch]:
        self.calls.append(("list_branches", {}))
        if self.fail_catalogs:
            raise self.fail_catalogs
        return list(self.branches)

    async def list_appointment_types(self) -> list[AppointmentType]:
        self.calls.append(("list_appointment_types", {}))
        if self.fail_catalogs:
            raise self.fail_catalogs
        return list(self.reasons)

    async def get_available_times(self, day: date, branch_id: int) -> list[str]:
        self.calls.append(("get_available_times", {"day": day, "branch_id": branch_id}))
        gate = self.time_gates.get(day)
        if gate is not None:
            await gate.wait()
        if self.fail_available_times:
            raise self.fail_available_times
        return list(self.available_times.get((day, branch_id), self.default_times))

    async def list_configured_slots(self, branch_id: int) -> list[ConfiguredSlot]:
        self.calls.append(("list_configured_slots", {"branch_id": branch_id}))
        if self.fail_configured_slots:
            raise self.fail_configured_slots
        return list(self.configured_slots.get(branch_id, []))

    async def list_pending_appointments(self) -> list[AppointmentRecord]:
        self.calls.append(("list_pending_appointments", {}))
        if self.fail_pending_appointments:
            raise self.fail_pending_appointments
        return list(self.pending_appointments)

    async def list_client_appointments(self, client_number: str) -> list[AppointmentRecord]:
        self.calls.append(("list_client_appointments", {"client_number": client_number}))
        return list(self.client_appointments.get(client_number, []))

    async def schedule_for_client(self, **kwargs) -> ScheduleReceipt:
        self.calls.append(("schedule_for_client", kwargs))
        return self._receipt("APT", kwargs)

    async def schedule_with_registration(self, *, registrant: RegistrantData, **kwargs) -> ScheduleReceipt:
        self.calls.append(("schedule_with_registration", {"registrant": registrant, **kwargs}))
        return self._receipt("SOL", kwargs)

    def _receipt(self, prefix: str, kwargs: dict) -> ScheduleReceipt:
        if self.fail_schedule:
            raise self.fail_schedule
        self._sequence += 1
        return ScheduleReceipt(
            ticket_number=f"{prefix}-{self._sequence:03d}",
            appointment_date=kwargs["day"].isoformat(),
            appointment_time=kwargs["time"],
            status="Programada",
            message="Cita agendada exitosamente",
        )

    async def cancel_appointment(self, client_number: str, appointment_id: int, reason: str) -> str:
        self.calls.append(
            (
                "cancel_appointment",
                {"client_number": client_number, "appointment_id": appointment_id, "reason": reason},
            )
        )
        if self.fail_cancel:
            raise self.fail_cancel
        return "Cita cancelada exitosamente"

    async def complete_appointment(self, appointment_id: int, notes: str) -> str:
        self.calls.append(("complete_appointment", {"appointment_id": appointment_id, "notes": notes}))
        if self.fail_complete:
            raise self.fail_complete
        return "Cita completada exitosamente"

    async def get_appointment(self, appointment_number: str, client_number: str) -> AppointmentRecord:
        self.calls.append(("get_appointment", {"appointment_number": appointment_number}))
        for record in self.client_appointments.get(client_number, []):
            if record.appointment_number == appointment_number:
                return record
        raise BookingApiError("Cita no encontrada", status_code=404)

    async def verify_appointment(self, appointment_number: str, client_number: str) -> VerificationResult:
        self.calls.append(("verify_appointment", {"appointment_number": appointment_number}))
        for record in self.client_appointments.get(client_number, []):
            if record.appointment_number == appointment_number:
                return VerificationResult(
                    is_valid=True,
                    appointment_number=appointment_number,
                    status=record.status,
                )
        return VerificationResult(is_valid=False, message="Cita no encontrada")

    async def get_setting(self, key: str) -> SystemSetting:
        self.calls.append(("get_setting", {"key": key}))
        if self.fail_setting:
            raise self.fail_setting
        setting = self.settings.get(key)
        if setting is None:
            raise BookingApiError("Configuración no encontrada", status_code=404)
        return setting
