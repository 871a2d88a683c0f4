"""Exceções compartilhadas do núcleo de agendamento."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura (rede, servidor, payload)."""


class BookingApiError(InfrastructureError):
    """Falha de uma chamada à API de citas.

    `message` preserva a mensagem bruta do servidor, que pode seguir a
    convenção `CODIGO|mensagem` interpretada por `parse_error_message`.
    `status_code` é None para falhas de rede ou payload ilegível.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ClientNotFoundError(LookupError):
    """Cliente não pôde ser validado no registro (qualquer falha de lookup)."""

    def __init__(self, message: str = "Cliente no encontrado") -> None:
        super().__init__(message)
        self.message = message


class CancellationRefusedError(Exception):
    """Cancelamento recusado localmente pela antecedência mínima."""

    def __init__(self, reason: str, lead_time_hours: int) -> None:
        super().__init__(reason)
        self.reason = reason
        self.lead_time_hours = lead_time_hours


class InvalidTransitionError(Exception):
    """Operação do workflow não permitida na fase atual."""


class LocalValidationError(ValueError):
    """Falha de validação local; nunca chega à rede.

    Attributes:
        errors: Mapa campo → mensagem para exibição.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(errors.values()))
        self.errors = dict(errors)
