"""Observabilidade — correlation/booking ids e métricas via logs.

Uso:
    from app.observability import get_correlation_id, set_booking_id
    from app.observability import record_latency, record_booking_outcome
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_booking_id,
    get_correlation_id,
    reset_booking_id,
    reset_correlation_id,
    set_booking_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_booking_outcome,
    record_latency,
)

__all__ = [
    "generate_correlation_id",
    "get_booking_id",
    "get_correlation_id",
    "record_booking_outcome",
    "record_latency",
    "reset_booking_id",
    "reset_correlation_id",
    "set_booking_id",
    "set_correlation_id",
]
