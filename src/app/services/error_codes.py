"""Interpretação de erros de negócio no formato `CODIGO|mensagem`.

O servidor de citas devolve violações de regra (feriado, domingo, data
passada, sem capacidade...) como texto `CODIGO|mensagem humana`. Aqui o
texto bruto vira um ErrorDescriptor e os códigos ganham metadados de
apresentação (dica, ícone, classes de estilo).

Funções puras, sem IO.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.errors import ErrorDescriptor

UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"
GENERIC_ERROR_MESSAGE = "Ocurrió un error inesperado"
EMPTY_MESSAGE_FALLBACK = "Ocurrió un error"

HOLIDAY_NOT_AVAILABLE = "HOLIDAY_NOT_AVAILABLE"
SUNDAY_NOT_AVAILABLE = "SUNDAY_NOT_AVAILABLE"
PAST_DATE_NOT_AVAILABLE = "PAST_DATE_NOT_AVAILABLE"
NO_HOURS_AVAILABLE = "NO_HOURS_AVAILABLE"
DUPLICATE_APPOINTMENT = "DUPLICATE_APPOINTMENT"
CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
OUTSIDE_BUSINESS_HOURS = "OUTSIDE_BUSINESS_HOURS"

# Conjunto fechado; comparação sensível a maiúsculas
EXPECTED_VALIDATION_CODES: frozenset[str] = frozenset({
    HOLIDAY_NOT_AVAILABLE,
    SUNDAY_NOT_AVAILABLE,
    PAST_DATE_NOT_AVAILABLE,
    NO_HOURS_AVAILABLE,
    DUPLICATE_APPOINTMENT,
    CLIENT_NOT_FOUND,
    OUTSIDE_BUSINESS_HOURS,
})


@dataclass(frozen=True, slots=True)
class ErrorPresentation:
    """Metadados de exibição de um código de erro."""

    hint: str | None
    icon: str
    text_class: str
    background_class: str
    border_class: str


DEFAULT_PRESENTATION = ErrorPresentation(
    hint=None,
    icon="⚠️",
    text_class="text-gray-600",
    background_class="bg-gray-50",
    border_class="border-gray-200",
)

_PRESENTATIONS: dict[str, ErrorPresentation] = {
    SUNDAY_NOT_AVAILABLE: ErrorPresentation(
        hint="Por favor seleccione un día entre lunes y sábado",
        icon="📅",
        text_class="text-amber-600",
        background_class="bg-amber-50",
        border_class="border-amber-200",
    ),
    HOLIDAY_NOT_AVAILABLE: ErrorPresentation(
        hint="Por favor seleccione otra fecha",
        icon="🎉",
        text_class="text-red-600",
        background_class="bg-red-50",
        border_class="border-red-200",
    ),
    PAST_DATE_NOT_AVAILABLE: ErrorPresentation(
        hint="Seleccione una fecha desde hoy en adelante",
        icon="⏰",
        text_class="text-gray-600",
        background_class="bg-gray-50",
        border_class="border-gray-200",
    ),
}


def parse_error_message(raw: str | None) -> ErrorDescriptor:
    """Converte o texto bruto do servidor em ErrorDescriptor.

    Apenas o primeiro `|` separa código e mensagem; os demais ficam
    intactos na mensagem.

    Args:
        raw: Mensagem bruta (pode ser None ou vazia).

    Returns:
        ErrorDescriptor com código, mensagem e flag de validação esperada.
    """
    if not raw:
        return ErrorDescriptor(
            code=UNKNOWN_ERROR_CODE,
            message=GENERIC_ERROR_MESSAGE,
            is_expected_validation=False,
        )

    if "|" not in raw:
        return ErrorDescriptor(
            code=UNKNOWN_ERROR_CODE,
            message=raw.strip(),
            is_expected_validation=False,
        )

    code_part, message_part = raw.split("|", 1)
    code = code_part.strip()
    return ErrorDescriptor(
        code=code,
        message=message_part.strip() or EMPTY_MESSAGE_FALLBACK,
        is_expected_validation=is_expected_validation_error(code),
    )


def is_expected_validation_error(code: str | None) -> bool:
    """True somente para os códigos de regra de negócio conhecidos."""
    return code in EXPECTED_VALIDATION_CODES


def get_error_presentation(code: str | None) -> ErrorPresentation:
    """Metadados de exibição; DEFAULT_PRESENTATION fora do subconjunto curado."""
    if code is None:
        return DEFAULT_PRESENTATION
    return _PRESENTATIONS.get(code, DEFAULT_PRESENTATION)


def get_error_hint(code: str | None) -> str | None:
    return get_error_presentation(code).hint


def get_error_icon(code: str | None) -> str:
    return get_error_presentation(code).icon


def get_error_color_classes(code: str | None) -> dict[str, str]:
    """Classes de estilo (texto, fundo, borda) para o código."""
    presentation = get_error_presentation(code)
    return {
        "text": presentation.text_class,
        "background": presentation.background_class,
        "border": presentation.border_class,
    }


def describe_for_display(descriptor: ErrorDescriptor) -> dict[str, object]:
    """Payload pronto para a camada de apresentação."""
    presentation = get_error_presentation(descriptor.code)
    return {
        "code": descriptor.code,
        "message": descriptor.message,
        "is_expected_validation": descriptor.is_expected_validation,
        "hint": presentation.hint,
        "icon": presentation.icon,
        "classes": get_error_color_classes(descriptor.code),
    }


__all__ = [
    "CLIENT_NOT_FOUND",
    "DUPLICATE_APPOINTMENT",
    "EXPECTED_VALIDATION_CODES",
    "HOLIDAY_NOT_AVAILABLE",
    "NO_HOURS_AVAILABLE",
    "OUTSIDE_BUSINESS_HOURS",
    "PAST_DATE_NOT_AVAILABLE",
    "SUNDAY_NOT_AVAILABLE",
    "UNKNOWN_ERROR_CODE",
    "ErrorPresentation",
    "describe_for_display",
    "get_error_color_classes",
    "get_error_hint",
    "get_error_icon",
    "get_error_presentation",
    "is_expected_validation_error",
    "parse_error_message",
]
