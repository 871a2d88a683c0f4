"""Testes para config.logging.

Cobre: configure_logging, get_logger, log_fallback, log_interpreted_error,
CorrelationIdFilter, create_json_formatter.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from app.domain.errors import ErrorDescriptor
from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
    log_interpreted_error,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Configura logging com nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_is_case_insensitive(self) -> None:
        """Nível aceita minúsculas."""
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        """configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_context_filter(self) -> None:
        """Handler recebe o filter de correlation/booking id."""
        configure_logging(
            correlation_id_getter=lambda: "corr",
            booking_id_getter=lambda: "booking",
        )
        handler = logging.getLogger().handlers[0]
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "agendamiento_citas"


class TestGetLogger:
    def test_get_logger_same_name_returns_same_instance(self) -> None:
        """Mesmo nome retorna mesma instância."""
        logger = get_logger("booking.module")
        assert isinstance(logger, logging.Logger)
        assert logger is get_logger("booking.module")


class TestLogFallback:
    """Testes para log_fallback."""

    def test_log_fallback_basic(self) -> None:
        """Formato lazy: template e componente como args."""
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "availability_resolver")
        call_args = logger.info.call_args
        assert call_args[0][0] == "Fallback applied for %s"
        assert call_args[0][1] == "availability_resolver"
        extra = call_args[1]["extra"]
        assert extra["fallback_used"] is True
        assert extra["component"] == "availability_resolver"
        assert "reason" not in extra
        assert "elapsed_ms" not in extra

    def test_log_fallback_with_all_params(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "cancellation_policy", reason="setting_unavailable", elapsed_ms=12.5)
        extra = logger.info.call_args[1]["extra"]
        assert extra["reason"] == "setting_unavailable"
        assert extra["elapsed_ms"] == 12.5


class TestLogInterpretedError:
    """Severidade depende de o código ser uma regra de negócio esperada."""

    def test_expected_validation_is_logged_at_info(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        descriptor = ErrorDescriptor(
            code="SUNDAY_NOT_AVAILABLE",
            message="No se atiende los domingos",
            is_expected_validation=True,
        )
        log_interpreted_error(logger, "booking_workflow", "schedule", descriptor)

        logger.warning.assert_not_called()
        assert logger.info.call_args[0][0] == "business_rule_rejected"
        extra = logger.info.call_args[1]["extra"]
        assert extra["error_code"] == "SUNDAY_NOT_AVAILABLE"
        assert extra["result"] == "rejected"

    def test_unexpected_error_is_logged_at_warning_without_message(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        descriptor = ErrorDescriptor(code="UNKNOWN_ERROR", message="detalle del servidor")
        log_interpreted_error(logger, "booking_workflow", "schedule", descriptor)

        logger.info.assert_not_called()
        assert logger.warning.call_args[0][0] == "unexpected_error"
        extra = logger.warning.call_args[1]["extra"]
        assert extra["expected_validation"] is False
        assert "detalle del servidor" not in str(extra)


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_ids_from_getters(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "corr-123", lambda: "bk-1")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.booking_id == "bk-1"
        assert record.service == "svc"

    def test_filter_preserves_explicit_values(self) -> None:
        """Valores passados via extra têm precedência."""
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"
        record.booking_id = "explicit-booking"
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"
        assert record.booking_id == "explicit-booking"

    def test_filter_uses_empty_string_without_getters(self) -> None:
        filter_ = CorrelationIdFilter("service_name")
        record = _record()
        filter_.filter(record)
        assert record.correlation_id == ""
        assert record.booking_id == ""


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_fields_include_booking_id(self) -> None:
        assert "booking_id" in REQUIRED_LOG_FIELDS
        assert "correlation_id" in REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_json_formatter_formats_record(self) -> None:
        """Saída é JSON com campos renomeados."""
        formatter = create_json_formatter()
        record = _record("booking_confirmed")
        record.correlation_id = "abc-123"
        record.booking_id = "bk-9"
        record.service = "test_service"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "booking_confirmed"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "test"
        assert payload["booking_id"] == "bk-9"
        assert payload["correlation_id"] == "abc-123"


class TestLoggingIntegration:
    def test_full_logging_flow(self) -> None:
        """Fluxo completo: configure, get_logger, log com extras."""
        configure_logging(
            level="DEBUG",
            service_name="integration_test",
            correlation_id_getter=lambda: "int-test-001",
        )
        logger = get_logger("integration.test")
        logger.debug("slot_refresh", extra={"component": "availability_resolver"})
        logger.info("booking_confirmed", extra={"latency_ms": 42})
        logger.warning("unexpected_error")
