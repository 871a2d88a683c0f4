"""Métricas via structured logging.

Registradas como logs estruturados para agregação posterior
(BigQuery, CloudWatch Insights etc.).

Métricas suportadas:
- Latência: tempo de chamadas à API de citas por operação
- Desfecho: contador de agendamentos confirmados/rejeitados/com falha
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "booking_api_client")
        operation: Nome da operação (ex: "available_times")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_booking_outcome(
    outcome: str,
    identity_kind: str,
    error_code: str | None = None,
) -> None:
    """Registra desfecho de uma tentativa de agendamento.

    Args:
        outcome: "confirmed", "rejected" (regra de negócio) ou "failed"
        identity_kind: "existing" ou "new"
        error_code: Código interpretado quando não confirmado
    """
    logger.info(
        "metric_booking_outcome",
        extra={
            "metric_type": "counter",
            "outcome": outcome,
            "identity_kind": identity_kind,
            "error_code": error_code,
        },
    )
