"""Resolução da identidade do cidadão (fase 1 do agendamento).

Dois caminhos: cliente existente, validado no registro pelo número, ou
registrante novo, cujos dados são validados localmente e enviados junto
com o agendamento.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from app.domain.client import DocumentType, ExistingClient, NewClient, RegistrantData
from utils.errors import ClientNotFoundError, LocalValidationError

if TYPE_CHECKING:
    from app.protocols.booking_api import BookingApiProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "client_identity"

CLIENT_NUMBER_REQUIRED = "Por favor ingrese el número de cliente"
CLIENT_NOT_FOUND_MESSAGE = "Cliente no encontrado"

_DOCUMENT_PATTERN = re.compile(r"^[0-9]{1,15}$")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_MOBILE_PATTERN = re.compile(r"^[0-9]{10}$")

REQUIRED_REGISTRANT_FIELDS = ("document_number", "full_name", "email", "mobile")


class ClientIdentityResolver:
    """Valida cliente existente contra o registro."""

    __slots__ = ("_api",)

    def __init__(self, api: BookingApiProtocol) -> None:
        self._api = api

    async def resolve_existing(self, client_number: str) -> ExistingClient:
        """Resolve um número de cliente em identidade existente.

        Qualquer falha do lookup (inexistente, rede, servidor) é reportada
        igualmente como ClientNotFoundError; o chamador oferece o caminho
        de cliente novo.

        Raises:
            LocalValidationError: número vazio (nenhuma chamada de rede).
            ClientNotFoundError: lookup falhou.
        """
        normalized = (client_number or "").strip()
        if not normalized:
            raise LocalValidationError({"client_number": CLIENT_NUMBER_REQUIRED})

        try:
            record = await self._api.validate_client(normalized)
        except Exception as exc:
            logger.info(
                "client_lookup_failed",
                extra={
                    "component": _COMPONENT,
                    "action": "resolve_existing",
                    "result": "not_found",
                    "error_type": type(exc).__name__,
                },
            )
            raise ClientNotFoundError(CLIENT_NOT_FOUND_MESSAGE) from exc

        return ExistingClient(client_number=record.client_number or normalized, record=record)


def validate_document_number(value: str) -> str | None:
    if not value.strip():
        return "Número de documento es requerido"
    if not _DOCUMENT_PATTERN.match(value.strip()):
        return "Número de documento inválido (solo números, máx 15 dígitos)"
    return None


def validate_full_name(value: str) -> str | None:
    trimmed = value.strip()
    if not trimmed:
        return "Nombre completo es requerido"
    if not 3 <= len(trimmed) <= 200:
        return "Nombre debe tener entre 3 y 200 caracteres"
    return None


def validate_email(value: str) -> str | None:
    if not value.strip():
        return "Email es requerido"
    if not _EMAIL_PATTERN.match(value.strip()):
        return "Email inválido"
    return None


def validate_mobile(value: str) -> str | None:
    if not value.strip():
        return "Celular es requerido"
    if not _MOBILE_PATTERN.match(value.strip()):
        return "Celular debe tener 10 dígitos"
    return None


_FIELD_VALIDATORS = {
    "document_number": validate_document_number,
    "full_name": validate_full_name,
    "email": validate_email,
    "mobile": validate_mobile,
}


def validate_registrant_field(field: str, value: str) -> str | None:
    """Valida um campo obrigatório; campos opcionais nunca bloqueiam."""
    validator = _FIELD_VALIDATORS.get(field)
    return validator(value) if validator else None


def registrant_errors(registrant: RegistrantData) -> dict[str, str]:
    """Mensagens de erro dos campos obrigatórios inválidos."""
    errors: dict[str, str] = {}
    for field in REQUIRED_REGISTRANT_FIELDS:
        message = validate_registrant_field(field, getattr(registrant, field))
        if message:
            errors[field] = message
    return errors


def is_registrant_valid(registrant: RegistrantData) -> bool:
    """AND lógico das quatro validações obrigatórias."""
    return not registrant_errors(registrant)


class RegistrantForm:
    """Formulário do registrante, alterado campo a campo.

    A validade agregada é recalculada a cada alteração (para habilitar o
    botão de envio); mensagens por campo aparecem após o blur.
    """

    __slots__ = ("_data", "_errors", "_touched")

    def __init__(self, data: RegistrantData | None = None) -> None:
        self._data = data or RegistrantData()
        self._errors: dict[str, str] = {}
        self._touched: set[str] = set()

    @property
    def data(self) -> RegistrantData:
        return self._data

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def is_valid(self) -> bool:
        return is_registrant_valid(self._data)

    def update(self, **changes: Any) -> None:
        """Aplica alterações de campos; revalida os campos já tocados."""
        unknown = set(changes) - set(RegistrantData.model_fields)
        if unknown:
            raise LocalValidationError({name: "Campo desconocido" for name in sorted(unknown)})
        if "document_type" in changes:
            changes["document_type"] = DocumentType(changes["document_type"])
        self._data = self._data.model_copy(update=changes)
        for field in changes:
            if field in self._touched:
                self._refresh_error(field)

    def blur(self, field: str) -> str | None:
        """Marca o campo como tocado e retorna sua mensagem de erro."""
        self._touched.add(field)
        return self._refresh_error(field)

    def validate_all(self) -> dict[str, str]:
        """Toca todos os campos obrigatórios e retorna os erros."""
        self._touched.update(REQUIRED_REGISTRANT_FIELDS)
        self._errors = registrant_errors(self._data)
        return dict(self._errors)

    def to_identity(self) -> NewClient:
        """Produz a identidade nova; exige os campos obrigatórios válidos.

        Raises:
            LocalValidationError: algum campo obrigatório inválido.
        """
        self.validate_all()
        errors = registrant_errors(self._data)
        if errors:
            raise LocalValidationError(errors)
        return NewClient(registrant=self._data)

    def _refresh_error(self, field: str) -> str | None:
        value = getattr(self._data, field, "")
        message = validate_registrant_field(field, value)
        if message:
            self._errors[field] = message
        else:
            self._errors.pop(field, None)
        return message


__all__ = [
    "CLIENT_NOT_FOUND_MESSAGE",
    "CLIENT_NUMBER_REQUIRED",
    "ClientIdentityResolver",
    "RegistrantForm",
    "is_registrant_valid",
    "registrant_errors",
    "validate_document_number",
    "validate_email",
    "validate_full_name",
    "validate_mobile",
    "validate_registrant_field",
]
