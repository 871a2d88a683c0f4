"""Agregador de settings base."""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.session import (
    BookingSessionSettings,
    get_booking_session_settings,
)

__all__ = [
    "BaseSettings",
    "BookingSessionSettings",
    "Environment",
    "get_base_settings",
    "get_booking_session_settings",
]
