"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    BookingApiError,
    CancellationRefusedError,
    ClientNotFoundError,
    InfrastructureError,
    InvalidTransitionError,
    LocalValidationError,
)

__all__ = [
    "BookingApiError",
    "CancellationRefusedError",
    "ClientNotFoundError",
    "InfrastructureError",
    "InvalidTransitionError",
    "LocalValidationError",
]
