"""Formatter JSON (python-json-logger) com campos padronizados.

Exemplo de saída:
    {"asctime": "2026-10-19 10:30:00,120", "level": "INFO",
     "logger": "app.services.booking_workflow", "message": "booking_confirmed",
     "correlation_id": "abc-123", "booking_id": "f3c1...", "service": "agendamiento_citas"}
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem estável: o formatter respeita a ordem do format string
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "booking_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria o formatter JSON usado pelo handler raiz."""
    return JsonFormatter(
        " ".join(f"%({name})s" for name in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
    )
