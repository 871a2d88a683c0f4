"""Protocolos e contratos do core da aplicação."""

from .booking_api import BookingApiProtocol
from .workflow_store import WorkflowStoreProtocol

__all__ = [
    "BookingApiProtocol",
    "WorkflowStoreProtocol",
]
