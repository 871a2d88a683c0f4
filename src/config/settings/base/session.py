"""Settings das sessões de agendamento mantidas pela camada HTTP.

Cada sessão guarda um único BookingWorkflow (rascunho + identidade) em
memória do processo; o servidor de citas é o dono da persistência.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class BookingSessionSettings:
    """Configurações das sessões de agendamento.

    Attributes:
        ttl_seconds: Tempo de vida de uma sessão inativa
        max_sessions: Limite de sessões simultâneas no processo
    """

    ttl_seconds: int = 7200  # 2h
    max_sessions: int = 10_000

    def validate(self) -> list[str]:
        errors: list[str] = []
        if self.ttl_seconds <= 0:
            errors.append("BOOKING_SESSION_TTL_SECONDS deve ser > 0")
        if self.max_sessions < 1:
            errors.append("BOOKING_SESSION_MAX deve ser >= 1")
        return errors


def _load_session_from_env() -> BookingSessionSettings:
    """Carrega BookingSessionSettings de variáveis de ambiente."""
    return BookingSessionSettings(
        ttl_seconds=int(os.getenv("BOOKING_SESSION_TTL_SECONDS", "7200")),
        max_sessions=int(os.getenv("BOOKING_SESSION_MAX", "10000")),
    )


@lru_cache(maxsize=1)
def get_booking_session_settings() -> BookingSessionSettings:
    """Retorna instância cacheada de BookingSessionSettings."""
    return _load_session_from_env()
