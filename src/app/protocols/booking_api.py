"""Contrato da API de citas consumida pelo núcleo de agendamento.

Mantemos apenas o protocolo aqui para que serviços e workflow dependam
da capacidade (validar cliente, consultar horários, agendar...) e não do
transporte HTTP. Falhas são sinalizadas com `BookingApiError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date

    from app.domain.appointment import (
        AppointmentRecord,
        ScheduleReceipt,
        VerificationResult,
    )
    from app.domain.catalog import (
        AppointmentType,
        Branch,
        ConfiguredSlot,
        SystemSetting,
    )
    from app.domain.client import ClientRecord, RegistrantData


@runtime_checkable
class BookingApiProtocol(Protocol):
    """Operações lógicas da API de citas (request → response JSON)."""

    async def validate_client(self, client_number: str) -> ClientRecord:
        """Valida um cliente existente pelo número."""
        ...

    async def list_branches(self) -> list[Branch]:
        """Catálogo de sedes."""
        ...

    async def list_appointment_types(self) -> list[AppointmentType]:
        """Catálogo de motivos."""
        ...

    async def get_available_times(self, day: date, branch_id: int) -> list[str]:
        """Horários livres (HH:MM) já filtrados e ordenados pelo servidor."""
        ...

    async def list_configured_slots(self, branch_id: int) -> list[ConfiguredSlot]:
        """Horários configurados da sede, independentes da data."""
        ...

    async def list_pending_appointments(self) -> list[AppointmentRecord]:
        """Citas vigentes usadas para calcular ocupação no fallback."""
        ...

    async def list_client_appointments(self, client_number: str) -> list[AppointmentRecord]:
        """Citas de um cliente."""
        ...

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
        """Agenda para cliente conhecido."""
        ...

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
        """Cria cliente e cita numa única requisição."""
        ...

    async def cancel_appointment(
        self,
        client_number: str,
        appointment_id: int,
        reason: str,
    ) -> str:
        """Cancela a cita e retorna a mensagem de confirmação."""
        ...

    async def complete_appointment(self, appointment_id: int, notes: str) -> str:
        """Marca a cita como atendida (uso do agente)."""
        ...

    async def get_appointment(
        self,
        appointment_number: str,
        client_number: str,
    ) -> AppointmentRecord:
        """Consulta uma cita pelo número."""
        ...

    async def verify_appointment(
        self,
        appointment_number: str,
        client_number: str,
    ) -> VerificationResult:
        """Verificação pública por referência."""
        ...

    async def get_setting(self, key: str) -> SystemSetting:
        """Lê um setting administrado no servidor."""
        ...
