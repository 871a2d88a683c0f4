"""Operações pós-agendamento: consulta, cancelamento, conclusão e verificação.

Validações locais levantam LocalValidationError e a política de
antecedência levanta CancellationRefusedError, sempre antes da rede.
Falhas do servidor voltam como ManagementOutcome com ErrorDescriptor.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.domain.appointment import (
    AppointmentRecord,
    is_cancelled_status,
    is_completed_status,
    is_pending_status,
    status_display_text,
)
from app.services.cancellation_policy import CancellationPolicyGuard, validate_cancellation_reason
from app.services.error_codes import parse_error_message
from config.logging import log_interpreted_error
from utils.errors import BookingApiError, ClientNotFoundError, LocalValidationError

if TYPE_CHECKING:
    from app.domain.appointment import VerificationResult
    from app.domain.client import ClientRecord
    from app.domain.errors import ErrorDescriptor
    from app.protocols.booking_api import BookingApiProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "appointment_management"

MIN_CLIENT_NUMBER_DIGITS = 6
MAX_CLIENT_NUMBER_DIGITS = 15
MIN_NOTES_LENGTH = 10
MAX_NOTES_LENGTH = 1000

_CLIENT_NUMBER_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class AppointmentStats:
    total: int = 0
    pending: int = 0
    completed: int = 0
    cancelled: int = 0


@dataclass(frozen=True, slots=True)
class ClientAppointments:
    """Citas de um cliente agrupadas por situação."""

    client: ClientRecord
    pending: tuple[AppointmentRecord, ...] = ()
    completed: tuple[AppointmentRecord, ...] = ()
    cancelled: tuple[AppointmentRecord, ...] = ()
    stats: AppointmentStats = field(default_factory=AppointmentStats)

    def to_dict(self) -> dict[str, Any]:
        return {
            "client": self.client.model_dump(),
            "pending": [_appointment_view(a) for a in self.pending],
            "completed": [_appointment_view(a) for a in self.completed],
            "cancelled": [_appointment_view(a) for a in self.cancelled],
            "stats": {
                "total": self.stats.total,
                "pending": self.stats.pending,
                "completed": self.stats.completed,
                "cancelled": self.stats.cancelled,
            },
        }


def _appointment_view(appointment: AppointmentRecord) -> dict[str, Any]:
    return {**appointment.model_dump(), "status_display": status_display_text(appointment.status)}


@dataclass(frozen=True, slots=True)
class ManagementOutcome:
    """Resultado de uma operação enviada ao servidor."""

    success: bool
    message: str = ""
    error: ErrorDescriptor | None = None


def validate_client_number(value: str | None) -> str | None:
    raw = (value or "").strip()
    if not raw:
        return "Número de identificación es obligatorio"
    if not _CLIENT_NUMBER_PATTERN.fullmatch(raw):
        return "Número de identificación debe contener solo números"
    if len(raw) < MIN_CLIENT_NUMBER_DIGITS:
        return "Número de identificación debe tener al menos 6 dígitos"
    if len(raw) > MAX_CLIENT_NUMBER_DIGITS:
        return "Número de identificación no puede tener más de 15 dígitos"
    return None


def validate_completion_notes(notes: str | None) -> str | None:
    value = notes or ""
    if not value.strip():
        return "Las notas de completado son obligatorias"
    if len(value.strip()) < MIN_NOTES_LENGTH:
        return "Las notas deben tener al menos 10 caracteres"
    if len(value) > MAX_NOTES_LENGTH:
        return "Las notas no pueden tener más de 1000 caracteres"
    return None


def group_appointments(
    client: ClientRecord,
    appointments: list[AppointmentRecord],
) -> ClientAppointments:
    """Agrupa por status; status desconhecidos contam só no total."""
    pending = tuple(a for a in appointments if is_pending_status(a.status))
    completed = tuple(a for a in appointments if is_completed_status(a.status))
    cancelled = tuple(a for a in appointments if is_cancelled_status(a.status))
    return ClientAppointments(
        client=client,
        pending=pending,
        completed=completed,
        cancelled=cancelled,
        stats=AppointmentStats(
            total=len(appointments),
            pending=len(pending),
            completed=len(completed),
            cancelled=len(cancelled),
        ),
    )


class AppointmentManager:
    """Fachada das operações sobre citas já emitidas.

    A antecedência mínima é injetada (lida uma vez via
    `read_lead_time_hours`) através do CancellationPolicyGuard.
    """

    def __init__(
        self,
        api: BookingApiProtocol,
        policy: CancellationPolicyGuard | None = None,
    ) -> None:
        self._api = api
        self._policy = policy or CancellationPolicyGuard()

    @property
    def lead_time_hours(self) -> int:
        return self._policy.lead_time_hours

    async def lookup(self, client_number: str) -> ClientAppointments:
        """Valida o cliente e lista suas citas agrupadas.

        Raises:
            LocalValidationError: número fora do formato (6 a 15 dígitos).
            ClientNotFoundError: cliente não validado no servidor.
            BookingApiError: falha ao listar as citas.
        """
        error = validate_client_number(client_number)
        if error:
            raise LocalValidationError({"client_number": error})
        number = client_number.strip()
        try:
            client = await self._api.validate_client(number)
        except BookingApiError as exc:
            logger.info(
                "client_lookup_failed",
                extra={"component": _COMPONENT, "action": "lookup", "result": "not_found"},
            )
            raise ClientNotFoundError() from exc

        appointments = await self._api.list_client_appointments(number)
        grouped = group_appointments(client, appointments)
        logger.info(
            "client_appointments_loaded",
            extra={
                "component": _COMPONENT,
                "action": "lookup",
                "result": "ok",
                "total": grouped.stats.total,
            },
        )
        return grouped

    async def cancel(
        self,
        client_number: str,
        appointment: AppointmentRecord,
        reason: str,
        now: datetime | None = None,
    ) -> ManagementOutcome:
        """Cancela respeitando a antecedência mínima.

        Raises:
            LocalValidationError: motivo inválido ou data da cita ilegível.
            CancellationRefusedError: dentro da janela de antecedência.
        """
        reason_error = validate_cancellation_reason(reason)
        if reason_error:
            raise LocalValidationError({"reason": reason_error})
        scheduled_at = appointment.scheduled_at()
        if scheduled_at is None:
            raise LocalValidationError({"appointment": "Fecha de la cita no válida"})
        self._policy.ensure_can_cancel(scheduled_at, now)
        return await self._send_cancellation(client_number, appointment.id, reason)

    async def cancel_by_id(
        self,
        client_number: str,
        appointment_id: int,
        reason: str,
        now: datetime | None = None,
    ) -> ManagementOutcome | None:
        """Como `cancel`, localizando a cita pelo id; None se não pertence ao cliente."""
        reason_error = validate_cancellation_reason(reason)
        if reason_error:
            raise LocalValidationError({"reason": reason_error})
        appointment = await self.find_client_appointment(client_number, appointment_id)
        if appointment is None:
            return None
        return await self.cancel(client_number, appointment, reason, now)

    async def force_cancel(
        self,
        client_number: str,
        appointment_id: int,
        reason: str,
    ) -> ManagementOutcome:
        """Envia o cancelamento sem a checagem local; o servidor decide."""
        reason_error = validate_cancellation_reason(reason)
        if reason_error:
            raise LocalValidationError({"reason": reason_error})
        return await self._send_cancellation(client_number, appointment_id, reason)

    async def _send_cancellation(
        self,
        client_number: str,
        appointment_id: int,
        reason: str,
    ) -> ManagementOutcome:
        try:
            message = await self._api.cancel_appointment(
                client_number.strip(), appointment_id, reason.strip()
            )
        except BookingApiError as exc:
            return self._failed("cancel", exc)
        logger.info(
            "appointment_cancelled",
            extra={"component": _COMPONENT, "action": "cancel", "result": "ok"},
        )
        return ManagementOutcome(success=True, message=message)

    async def complete(self, appointment_id: int, notes: str) -> ManagementOutcome:
        """Marca a cita como atendida.

        Raises:
            LocalValidationError: notas ausentes ou fora do tamanho.
        """
        notes_error = validate_completion_notes(notes)
        if notes_error:
            raise LocalValidationError({"notes": notes_error})
        try:
            message = await self._api.complete_appointment(appointment_id, notes.strip())
        except BookingApiError as exc:
            return self._failed("complete", exc)
        logger.info(
            "appointment_completed",
            extra={"component": _COMPONENT, "action": "complete", "result": "ok"},
        )
        return ManagementOutcome(success=True, message=message)

    async def find_client_appointment(
        self,
        client_number: str,
        appointment_id: int,
    ) -> AppointmentRecord | None:
        """Localiza uma cita do cliente pelo id interno."""
        appointments = await self._api.list_client_appointments(client_number.strip())
        return next((a for a in appointments if a.id == appointment_id), None)

    async def query(self, appointment_number: str, client_number: str) -> AppointmentRecord:
        return await self._api.get_appointment(appointment_number, client_number)

    async def verify(self, appointment_number: str, client_number: str) -> VerificationResult:
        return await self._api.verify_appointment(appointment_number, client_number)

    def _failed(self, action: str, exc: BookingApiError) -> ManagementOutcome:
        descriptor = parse_error_message(exc.message)
        log_interpreted_error(logger, _COMPONENT, action, descriptor)
        return ManagementOutcome(success=False, message=descriptor.message, error=descriptor)


__all__ = [
    "AppointmentManager",
    "AppointmentStats",
    "ClientAppointments",
    "ManagementOutcome",
    "group_appointments",
    "validate_client_number",
    "validate_completion_notes",
]
