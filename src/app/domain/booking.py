"""Rascunho e confirmação de uma solicitação de agendamento."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from typing import Any

from app.domain.client import ExistingClient, NewClient

REQUIRED_DRAFT_FIELDS = ("reason", "branch", "date", "time")


@dataclass(frozen=True, slots=True)
class BookingDraft:
    """Solicitação em construção, pertencente exclusivamente ao workflow.

    Imutável: cada operação do workflow produz um novo rascunho via
    `with_changes`.
    """

    identity: ExistingClient | NewClient | None = None
    reason_id: int | None = None
    branch_id: int | None = None
    date: date | None = None
    time: str | None = None
    observations: str = ""

    def with_changes(self, **changes: Any) -> BookingDraft:
        return replace(self, **changes)

    def missing_fields(self) -> tuple[str, ...]:
        """Campos obrigatórios ainda vazios, na ordem de exibição."""
        values = {
            "reason": self.reason_id,
            "branch": self.branch_id,
            "date": self.date,
            "time": self.time,
        }
        return tuple(name for name in REQUIRED_DRAFT_FIELDS if values[name] is None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity_kind": self.identity.kind if self.identity else None,
            "reason_id": self.reason_id,
            "branch_id": self.branch_id,
            "date": self.date.isoformat() if self.date else None,
            "time": self.time,
            "observations": self.observations,
        }


@dataclass(frozen=True, slots=True)
class VerificationArtifact:
    """Referência escaneável (QR) que leva à verificação pública."""

    verification_url: str
    image_data_url: str


@dataclass(frozen=True, slots=True)
class AppointmentConfirmation:
    """Ticket emitido pelo servidor, com snapshots do momento do envio."""

    ticket_number: str
    identity: ExistingClient | NewClient
    draft: BookingDraft
    client_reference: str = ""
    appointment_date: str = ""
    appointment_time: str = ""
    status: str = ""
    message: str = ""
    artifact: VerificationArtifact | None = None
    issued_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticket_number": self.ticket_number,
            "client_reference": self.client_reference,
            "identity_kind": self.identity.kind,
            "issued_at": self.issued_at.isoformat(),
            "appointment_date": self.appointment_date,
            "appointment_time": self.appointment_time,
            "status": self.status,
            "message": self.message,
            "draft": self.draft.to_dict(),
            "verification_url": self.artifact.verification_url if self.artifact else None,
            "qr_code": self.artifact.image_data_url if self.artifact else None,
        }


__all__ = [
    "REQUIRED_DRAFT_FIELDS",
    "AppointmentConfirmation",
    "BookingDraft",
    "VerificationArtifact",
]
