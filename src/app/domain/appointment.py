"""Modelos de citas devolvidos pela API e helpers de status.

A API usa camelCase e serializa datas em formatos variados
(`2024-01-15`, `2024-01-15T00:00:00`, `2024-01-15T00:00:00Z`); a
normalização para data de calendário fica aqui para que nenhum
chamador dependa do formato do texto.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    extra="ignore",
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)

_TIME_PATTERN = re.compile(r"^\s*([0-9]{1,2}):([0-9]{2})(?::[0-9]{2}(?:\.[0-9]+)?)?\s*$")

CANCELLED_STATUSES = frozenset({"cancelled", "cancelada"})
COMPLETED_STATUSES = frozenset({"completed", "completada"})
PENDING_STATUSES = frozenset({"scheduled", "pendiente", "programada"})


class AppointmentRecord(BaseModel):
    """Cita persistida no servidor."""

    model_config = _WIRE_CONFIG

    id: int = Field(..., description="Identificador interno da cita.")
    appointment_number: str = Field(default="", description="Número (ticket) da cita.")
    appointment_date: str = Field(..., description="Data da cita como enviada pelo servidor.")
    appointment_time: str = Field(default="", description="Horário da cita.")
    status: str = Field(default="", description="Status textual da cita.")
    observations: str | None = Field(default=None, description="Observações do cidadão.")
    client_number: str | None = Field(default=None, description="Número do cliente.")
    client_name: str | None = Field(default=None, description="Nome do cliente.")
    branch_id: int | None = Field(default=None, description="Sede da cita.")
    branch_name: str | None = Field(default=None, description="Nome da sede.")
    appointment_type_id: int | None = Field(default=None, description="Motivo da cita.")
    appointment_type_name: str | None = Field(default=None, description="Nome do motivo.")
    created_at: str | None = Field(default=None, description="Momento de criação.")
    is_active: bool = Field(default=True, description="Registro ativo.")

    @property
    def calendar_date(self) -> date | None:
        """Data de calendário da cita, ignorando o horário do timestamp."""
        return parse_calendar_date(self.appointment_date)

    @property
    def slot_time(self) -> str | None:
        """Horário normalizado em HH:MM."""
        return normalize_time(self.appointment_time)

    def scheduled_at(self) -> datetime | None:
        """Data e hora locais da cita, ou None se não interpretáveis."""
        day = self.calendar_date
        slot = self.slot_time
        if day is None or slot is None:
            return None
        hour, minute = (int(part) for part in slot.split(":"))
        return datetime.combine(day, time(hour=hour, minute=minute))


class ScheduleReceipt(BaseModel):
    """Resposta de agendamento (cliente existente ou registro simplificado).

    `ticket_number` vem de `appointmentNumber` no caminho existente e de
    `requestNumber` no caminho novo.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    ticket_number: str = Field(..., min_length=1, description="Número emitido pelo servidor.")
    appointment_date: str = Field(default="", description="Data ecoada.")
    appointment_time: str = Field(default="", description="Horário ecoado.")
    status: str = Field(default="", description="Status inicial.")
    message: str = Field(default="", description="Mensagem do servidor.")


class VerifiedParty(BaseModel):
    """Resumo desnormalizado incluído na verificação (cliente/sede/motivo)."""

    model_config = _WIRE_CONFIG

    client_number: str | None = None
    full_name: str | None = None
    name: str | None = None
    address: str | None = None
    icon: str | None = None


class VerificationResult(BaseModel):
    """Resposta do endpoint público de verificação por referência."""

    model_config = _WIRE_CONFIG

    is_valid: bool = Field(default=False, description="Referência corresponde a uma cita.")
    appointment_number: str | None = None
    appointment_date: str | None = None
    appointment_time: str | None = None
    status: str | None = None
    status_description: str | None = None
    client: VerifiedParty | None = None
    branch: VerifiedParty | None = None
    appointment_type: VerifiedParty | None = None
    created_at: str | None = None
    observations: str | None = None
    message: str | None = None


def parse_calendar_date(value: str | date | None) -> date | None:
    """Converte texto ISO (data ou timestamp) em data de calendário."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = value.strip()
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def normalize_time(value: str | None) -> str | None:
    """Normaliza `H:MM`, `HH:MM` ou `HH:MM:SS` para `HH:MM`."""
    if not value:
        return None
    match = _TIME_PATTERN.match(value)
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def is_cancelled_status(status: str | None) -> bool:
    return (status or "").strip().lower() in CANCELLED_STATUSES


def is_completed_status(status: str | None) -> bool:
    return (status or "").strip().lower() in COMPLETED_STATUSES


def is_pending_status(status: str | None) -> bool:
    return (status or "").strip().lower() in PENDING_STATUSES


def status_display_text(status: str | None) -> str:
    """Primeira letra maiúscula e o restante minúsculo."""
    text = (status or "").strip()
    return text[:1].upper() + text[1:].lower()


__all__ = [
    "AppointmentRecord",
    "ScheduleReceipt",
    "VerificationResult",
    "VerifiedParty",
    "is_cancelled_status",
    "is_completed_status",
    "is_pending_status",
    "normalize_time",
    "parse_calendar_date",
    "status_display_text",
]
