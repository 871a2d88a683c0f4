"""Helpers internos de parsing para respostas da API de citas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from app.domain.appointment import ScheduleReceipt, normalize_time
from utils.errors import BookingApiError

if TYPE_CHECKING:
    from datetime import date

    from app.domain.client import RegistrantData

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_model(model: type[ModelT], payload: Any) -> ModelT:
    if not isinstance(payload, dict):
        raise BookingApiError("Respuesta inválida del servidor")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise BookingApiError("Respuesta inválida del servidor") from exc


def parse_model_list(model: type[ModelT], payload: Any) -> list[ModelT]:
    # Algumas rotas embrulham a lista em {"data": [...]}
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        payload = payload["data"]
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise BookingApiError("Respuesta inválida del servidor")
    return [parse_model(model, item) for item in payload]


def parse_time_list(payload: Any) -> list[str]:
    """Lista de horários do servidor, normalizada para HH:MM."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        payload = payload["data"]
    if not isinstance(payload, list):
        raise BookingApiError("Respuesta inválida del servidor")
    times: list[str] = []
    for item in payload:
        value = normalize_time(item if isinstance(item, str) else None)
        if value is not None:
            times.append(value)
    return times


def parse_schedule_receipt(payload: Any, number_field: str) -> ScheduleReceipt:
    """Mapeia a resposta de agendamento (`appointmentNumber` ou `requestNumber`)."""
    if not isinstance(payload, dict):
        raise BookingApiError("Respuesta inválida del servidor")
    try:
        return ScheduleReceipt(
            ticket_number=str(payload.get(number_field) or ""),
            appointment_date=str(payload.get("appointmentDate") or ""),
            appointment_time=str(payload.get("appointmentTime") or ""),
            status=str(payload.get("status") or ""),
            message=str(payload.get("message") or ""),
        )
    except ValidationError as exc:
        raise BookingApiError("Respuesta de agendamiento sin número de cita") from exc


def parse_message(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
    if isinstance(payload, str) and payload:
        return payload
    return default


def build_existing_client_body(
    *,
    client_number: str,
    branch_id: int,
    appointment_type_id: int,
    day: date,
    time: str,
    observations: str | None,
) -> dict[str, Any]:
    return {
        "clientNumber": client_number,
        "branchId": branch_id,
        "appointmentTypeId": appointment_type_id,
        "appointmentDate": day.isoformat(),
        "appointmentTime": time,
        "observations": observations or None,
    }


def build_registration_body(
    *,
    registrant: RegistrantData,
    branch_id: int,
    appointment_type_id: int,
    day: date,
    time: str,
    observations: str | None,
) -> dict[str, Any]:
    """Corpo do registro simplificado; a API espera nomes em PascalCase."""
    return {
        "DocumentType": str(registrant.document_type),
        "DocumentNumber": registrant.document_number.strip(),
        "FullName": registrant.full_name.strip(),
        "Phone": registrant.phone.strip() or None,
        "Mobile": registrant.mobile.strip(),
        "Email": registrant.email.strip(),
        "Address": registrant.address.strip() or None,
        "BranchId": branch_id,
        "AppointmentTypeId": appointment_type_id,
        "AppointmentDate": day.isoformat(),
        "AppointmentTime": time,
        "Observations": observations or None,
    }
