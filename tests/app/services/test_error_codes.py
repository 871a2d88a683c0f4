"""Testes da interpretação de mensagens `CODIGO|mensagem`."""

from __future__ import annotations

import pytest

from app.services.error_codes import (
    EXPECTED_VALIDATION_CODES,
    GENERIC_ERROR_MESSAGE,
    UNKNOWN_ERROR_CODE,
    describe_for_display,
    get_error_color_classes,
    get_error_hint,
    get_error_icon,
    is_expected_validation_error,
    parse_error_message,
)


@pytest.mark.parametrize("raw", [None, ""])
def test_absent_message_is_unknown_with_generic_text(raw) -> None:
    descriptor = parse_error_message(raw)
    assert descriptor.code == UNKNOWN_ERROR_CODE
    assert descriptor.message == GENERIC_ERROR_MESSAGE
    assert descriptor.is_expected_validation is False


def test_message_without_separator_keeps_trimmed_text() -> None:
    descriptor = parse_error_message("  Error interno del servidor  ")
    assert descriptor.code == UNKNOWN_ERROR_CODE
    assert descriptor.message == "Error interno del servidor"
    assert descriptor.is_expected_validation is False


def test_only_first_separator_splits() -> None:
    descriptor = parse_error_message(" HOLIDAY_NOT_AVAILABLE | Día festivo | 25/12 ")
    assert descriptor.code == "HOLIDAY_NOT_AVAILABLE"
    assert descriptor.message == "Día festivo | 25/12"
    assert descriptor.is_expected_validation is True


def test_unknown_code_with_separator_is_not_expected() -> None:
    descriptor = parse_error_message("DB_TIMEOUT|Tiempo agotado")
    assert descriptor.code == "DB_TIMEOUT"
    assert descriptor.is_expected_validation is False


def test_expected_codes_are_closed_and_case_sensitive() -> None:
    assert len(EXPECTED_VALIDATION_CODES) == 7
    assert is_expected_validation_error("NO_HOURS_AVAILABLE")
    assert not is_expected_validation_error("no_hours_available")
    assert not is_expected_validation_error(None)


def test_presentation_for_sunday_holiday_and_past_date() -> None:
    assert get_error_hint("SUNDAY_NOT_AVAILABLE") == "Por favor seleccione un día entre lunes y sábado"
    assert get_error_icon("HOLIDAY_NOT_AVAILABLE") == "🎉"
    assert get_error_color_classes("SUNDAY_NOT_AVAILABLE")["text"] == "text-amber-600"
    assert get_error_hint("PAST_DATE_NOT_AVAILABLE") is not None


def test_other_codes_use_generic_presentation() -> None:
    assert get_error_hint("DUPLICATE_APPOINTMENT") is None
    assert get_error_icon("DUPLICATE_APPOINTMENT") == "⚠️"
    assert get_error_color_classes(None)["border"] == "border-gray-200"


def test_describe_for_display_payload() -> None:
    payload = describe_for_display(
        parse_error_message("SUNDAY_NOT_AVAILABLE|Los domingos no se atienden citas")
    )
    assert payload["code"] == "SUNDAY_NOT_AVAILABLE"
    assert payload["message"] == "Los domingos no se atienden citas"
    assert payload["is_expected_validation"] is True
    assert payload["hint"]
    assert payload["icon"] == "📅"
