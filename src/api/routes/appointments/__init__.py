"""Rotas de gestão de citas."""

from api.routes.appointments.router import router

__all__ = ["router"]
