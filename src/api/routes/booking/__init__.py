"""Rotas das sessões de agendamento."""

from api.routes.booking.router import router

__all__ = ["router"]
