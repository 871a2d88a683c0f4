"""Agregador de settings do serviço de agendamento.

Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    BookingSessionSettings,
    Environment,
    get_base_settings,
    get_booking_session_settings,
)
from config.settings.booking_api import (
    CANCELLATION_HOURS_SETTING_KEY,
    BookingApiSettings,
    get_booking_api_settings,
)

__all__ = [
    "CANCELLATION_HOURS_SETTING_KEY",
    "BaseSettings",
    "BookingApiSettings",
    "BookingSessionSettings",
    "Environment",
    "get_base_settings",
    "get_booking_api_settings",
    "get_booking_session_settings",
]
