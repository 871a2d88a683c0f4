"""Integração com a API pública de citas."""

from app.infra.booking_api.client import BookingApiClient

__all__ = ["BookingApiClient"]
