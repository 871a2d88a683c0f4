"""Contexto de rastreamento: correlation_id da requisição e booking_id.

Ambos vivem em ContextVar (seguros para async) e são injetados nos logs
pelo filter de config.logging.

Uso:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_booking_id: ContextVar[str] = ContextVar("booking_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None ou vazio, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


def get_booking_id() -> str:
    """Retorna o id da solicitação de agendamento do contexto atual."""
    return _booking_id.get()


def set_booking_id(booking_id: str) -> Token[str]:
    """Associa o contexto atual a uma solicitação de agendamento."""
    return _booking_id.set(booking_id)


def reset_booking_id(token: Token[str]) -> None:
    """Restaura o booking_id ao valor anterior."""
    _booking_id.reset(token)
