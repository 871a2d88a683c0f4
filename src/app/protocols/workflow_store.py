"""Protocolo de armazenamento das sessões de agendamento em andamento."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.services.booking_workflow import BookingWorkflow


class WorkflowStoreProtocol(ABC):
    """Contrato mínimo para guardar um BookingWorkflow por sessão.

    Cada sessão possui exatamente um workflow; não há compartilhamento
    nem lock entre sessões.
    """

    @abstractmethod
    def save(self, session_id: str, workflow: BookingWorkflow, ttl_seconds: int = 7200) -> None: ...

    @abstractmethod
    def load(self, session_id: str) -> BookingWorkflow | None: ...

    @abstractmethod
    def delete(self, session_id: str) -> bool: ...
