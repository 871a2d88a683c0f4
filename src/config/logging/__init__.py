"""Logging estruturado JSON do serviço de agendamento.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="agendamiento_citas")
    logger = get_logger(__name__)

Campos em todo log: asctime, level, logger, message, correlation_id,
booking_id, service.
"""

from config.logging.config import (
    configure_logging,
    get_logger,
    log_fallback,
    log_interpreted_error,
)
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "log_interpreted_error",
]
