"""Store em memória das sessões de agendamento.

Guarda o próprio BookingWorkflow (não serializado) por session_id, com
expiração por TTL. Sem persistência entre reinícios: o servidor de citas
é o dono dos dados emitidos.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.protocols.workflow_store import WorkflowStoreProtocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.services.booking_workflow import BookingWorkflow

logger = logging.getLogger(__name__)


class MemoryWorkflowStore(WorkflowStoreProtocol):
    """Store de workflows em memória, limitado a `max_sessions` entradas."""

    def __init__(
        self,
        max_sessions: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: dict[str, tuple[BookingWorkflow, float]] = {}  # session_id -> (workflow, expires_at)
        self._max_sessions = max_sessions
        self._clock = clock

    def _cleanup_expired(self) -> None:
        """Remove entradas expiradas."""
        now = self._clock()
        expired = [k for k, (_, expires_at) in self._store.items() if expires_at <= now]
        for k in expired:
            del self._store[k]

    def save(self, session_id: str, workflow: BookingWorkflow, ttl_seconds: int = 7200) -> None:
        self._cleanup_expired()
        if session_id not in self._store and len(self._store) >= self._max_sessions:
            # Evita crescimento ilimitado: descarta a sessão mais próxima de expirar
            oldest = min(self._store, key=lambda k: self._store[k][1])
            del self._store[oldest]
            logger.warning(
                "workflow_store_evicted",
                extra={"component": "workflow_store", "max_sessions": self._max_sessions},
            )
        self._store[session_id] = (workflow, self._clock() + ttl_seconds)

    def load(self, session_id: str) -> BookingWorkflow | None:
        entry = self._store.get(session_id)
        if entry is None:
            return None
        workflow, expires_at = entry
        if self._clock() >= expires_at:
            del self._store[session_id]
            return None
        return workflow

    def delete(self, session_id: str) -> bool:
        if session_id in self._store:
            del self._store[session_id]
            return True
        return False

    def __len__(self) -> int:
        self._cleanup_expired()
        return len(self._store)
