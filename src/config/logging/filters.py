"""Filter de logging que injeta contexto da requisição e da solicitação.

Campos injetados:
- correlation_id: rastreamento da requisição HTTP
- booking_id: solicitação de agendamento em andamento (se houver)
- service: nome do serviço
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Enriquece cada record com correlation_id, booking_id e service.

    Valores passados explicitamente via `extra` são preservados.

    Args:
        service_name: Nome do serviço.
        correlation_id_getter: Retorna o correlation_id do contexto atual.
        booking_id_getter: Retorna o id da solicitação do contexto atual.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        booking_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")
        self._get_booking_id = booking_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._get_correlation_id()
        if not getattr(record, "booking_id", None):
            record.booking_id = self._get_booking_id()
        record.service = self._service_name
        return True
