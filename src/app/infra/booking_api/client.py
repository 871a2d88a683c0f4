"""Client concreto da API pública de citas."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from app.domain.appointment import AppointmentRecord, VerificationResult
from app.domain.catalog import AppointmentType, Branch, ConfiguredSlot, SystemSetting
from app.domain.client import ClientRecord
from app.infra.booking_api.parsers import (
    build_existing_client_body,
    build_registration_body,
    parse_message,
    parse_model,
    parse_model_list,
    parse_schedule_receipt,
    parse_time_list,
)
from app.protocols.booking_api import BookingApiProtocol

if TYPE_CHECKING:
    from datetime import date

    from app.domain.appointment import ScheduleReceipt
    from app.domain.client import RegistrantData
    from app.infra.http import HttpClient


def _segment(value: str | int) -> str:
    return quote(str(value), safe="")


class BookingApiClient(BookingApiProtocol):
    """Implementação do protocolo sobre os endpoints REST (JSON)."""

    __slots__ = ("_http",)

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    async def validate_client(self, client_number: str) -> ClientRecord:
        payload = await self._http.get(f"/public/client/validate/{_segment(client_number)}")
        return parse_model(ClientRecord, payload)

    async def list_branches(self) -> list[Branch]:
        return parse_model_list(Branch, await self._http.get("/public/branches"))

    async def list_appointment_types(self) -> list[AppointmentType]:
        return parse_model_list(AppointmentType, await self._http.get("/public/appointment-types"))

    async def get_available_times(self, day: date, branch_id: int) -> list[str]:
        payload = await self._http.get(
            "/public/available-times",
            params={"date": day.isoformat(), "branchId": branch_id},
        )
        return parse_time_list(payload)

    async def list_configured_slots(self, branch_id: int) -> list[ConfiguredSlot]:
        payload = await self._http.get(f"/availabletimes/branch/{_segment(branch_id)}")
        return parse_model_list(ConfiguredSlot, payload)

    async def list_pending_appointments(self) -> list[AppointmentRecord]:
        return parse_model_list(AppointmentRecord, await self._http.get("/appointments/pending"))

    async def list_client_appointments(self, client_number: str) -> list[AppointmentRecord]:
        payload = await self._http.get(f"/public/client/{_segment(client_number)}/appointments")
        return parse_model_list(AppointmentRecord, payload)

    async def schedule_for_client(
        self,
        *,
        client_number: str,
        branch_id: int,
        appointment_type_id: int,
        day: date,
        time: str,
        observations: str | None = None,
    ) -> ScheduleReceipt:
        body = build_existing_client_body(
            client_number=client_number,
            branch_id=branch_id,
            appointment_type_id=appointment_type_id,
            day=day,
            time=time,
            observations=observations,
        )
        payload = await self._http.post("/public/schedule-appointment", json=body)
        return parse_schedule_receipt(payload, "appointmentNumber")

    async def schedule_with_registration(
        self,
        *,
        registrant: RegistrantData,
        branch_id: int,
        appointment_type_id: int,
        day: date,
        time: str,
        observations: str | None = None,
    ) -> ScheduleReceipt:
        body = build_registration_body(
            registrant=registrant,
            branch_id=branch_id,
            appointment_type_id=appointment_type_id,
            day=day,
            time=time,
            observations=observations,
        )
        payload = await self._http.post("/public/schedule-simple-appointment", json=body)
        return parse_schedule_receipt(payload, "requestNumber")

    async def cancel_appointment(
        self,
        client_number: str,
        appointment_id: int,
        reason: str,
    ) -> str:
        payload = await self._http.patch(
            f"/public/client/{_segment(client_number)}/appointment/{_segment(appointment_id)}/cancel",
            json={"Reason": reason},
        )
        return parse_message(payload, "Cita cancelada exitosamente")

    async def complete_appointment(self, appointment_id: int, notes: str) -> str:
        payload = await self._http.patch(
            f"/appointments/complete/{_segment(appointment_id)}",
            json={"notes": notes},
        )
        return parse_message(payload, "Cita completada exitosamente")

    async def get_appointment(
        self,
        appointment_number: str,
        client_number: str,
    ) -> AppointmentRecord:
        payload = await self._http.get(
            f"/public/appointment/{_segment(appointment_number)}",
            params={"clientNumber": client_number},
        )
        return parse_model(AppointmentRecord, payload)

    async def verify_appointment(
        self,
        appointment_number: str,
        client_number: str,
    ) -> VerificationResult:
        payload = await self._http.get(
            "/public/verify-appointment",
            params={"number": appointment_number, "client": client_number},
        )
        return parse_model(VerificationResult, payload)

    async def get_setting(self, key: str) -> SystemSetting:
        return parse_model(SystemSetting, await self._http.get(f"/systemsettings/{_segment(key)}"))
