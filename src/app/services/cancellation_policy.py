"""Política de cancelamento do lado do cliente (antecedência mínima).

Consultiva: o servidor é a autoridade. Uma aprovação local não garante
que o servidor aceite, e uma recusa local não impede que a mensagem do
servidor seja mostrada se o envio for forçado por outro caminho.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from config.logging import log_fallback
from utils.errors import CancellationRefusedError

if TYPE_CHECKING:
    from app.protocols.booking_api import BookingApiProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "cancellation_policy"

DEFAULT_LEAD_TIME_HOURS = 24
MIN_REASON_LENGTH = 10
MAX_REASON_LENGTH = 500


@dataclass(frozen=True, slots=True)
class CancellationDecision:
    """Resultado da avaliação local de cancelamento."""

    allowed: bool
    lead_time_hours: int
    hours_until: float
    reason: str | None = None


def refusal_message(lead_time_hours: int) -> str:
    return (
        "No se puede cancelar. Debe cancelar con al menos "
        f"{lead_time_hours} horas de anticipación."
    )


def parse_lead_time_hours(raw: str | None, default: int = DEFAULT_LEAD_TIME_HOURS) -> int:
    """Converte o valor textual do setting; ausente/ilegível/negativo → default."""
    hours = _try_parse_hours(raw)
    return default if hours is None else hours


def _try_parse_hours(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return int(value)


async def read_lead_time_hours(
    api: BookingApiProtocol,
    key: str,
    default: int = DEFAULT_LEAD_TIME_HOURS,
) -> int:
    """Lê a antecedência do setting do servidor, uma vez, para injeção.

    Falha de leitura, setting inativo ou valor ilegível usam o default.
    """
    try:
        setting = await api.get_setting(key)
    except Exception:
        log_fallback(logger, _COMPONENT, reason="setting_unavailable")
        return default
    if not setting.is_active:
        log_fallback(logger, _COMPONENT, reason="setting_inactive")
        return default
    hours = _try_parse_hours(setting.setting_value)
    if hours is None:
        log_fallback(logger, _COMPONENT, reason="setting_unparsable")
        return default
    return hours


def can_cancel(
    appointment_at: datetime,
    lead_time_hours: int,
    now: datetime | None = None,
) -> bool:
    """`(appointment_at - now) >= lead_time_hours` horas (limite inclusivo)."""
    reference = now or _now_like(appointment_at)
    return appointment_at - reference >= timedelta(hours=lead_time_hours)


class CancellationPolicyGuard:
    """Avalia cancelamentos com a antecedência injetada na construção."""

    __slots__ = ("_lead_time_hours",)

    def __init__(self, lead_time_hours: int = DEFAULT_LEAD_TIME_HOURS) -> None:
        if lead_time_hours < 0:
            raise ValueError("lead_time_hours deve ser >= 0")
        self._lead_time_hours = lead_time_hours

    @property
    def lead_time_hours(self) -> int:
        return self._lead_time_hours

    def evaluate(
        self,
        appointment_at: datetime,
        now: datetime | None = None,
    ) -> CancellationDecision:
        reference = now or _now_like(appointment_at)
        hours_until = (appointment_at - reference).total_seconds() / 3600
        if can_cancel(appointment_at, self._lead_time_hours, reference):
            return CancellationDecision(
                allowed=True,
                lead_time_hours=self._lead_time_hours,
                hours_until=hours_until,
            )
        return CancellationDecision(
            allowed=False,
            lead_time_hours=self._lead_time_hours,
            hours_until=hours_until,
            reason=refusal_message(self._lead_time_hours),
        )

    def ensure_can_cancel(self, appointment_at: datetime, now: datetime | None = None) -> None:
        """Levanta CancellationRefusedError antes de qualquer chamada de rede."""
        decision = self.evaluate(appointment_at, now)
        if not decision.allowed:
            raise CancellationRefusedError(
                decision.reason or refusal_message(self._lead_time_hours),
                self._lead_time_hours,
            )


def validate_cancellation_reason(reason: str | None) -> str | None:
    """Motivo obrigatório, 10 a 500 caracteres."""
    value = reason or ""
    if not value.strip():
        return "El motivo de cancelación es obligatorio"
    if len(value.strip()) < MIN_REASON_LENGTH:
        return "El motivo debe tener al menos 10 caracteres"
    if len(value) > MAX_REASON_LENGTH:
        return "El motivo no puede tener más de 500 caracteres"
    return None


def _now_like(moment: datetime) -> datetime:
    # Compara na mesma "espécie" de datetime (naive local ou aware)
    if moment.tzinfo is None:
        return datetime.now()
    return datetime.now(moment.tzinfo)


__all__ = [
    "DEFAULT_LEAD_TIME_HOURS",
    "CancellationDecision",
    "CancellationPolicyGuard",
    "can_cancel",
    "parse_lead_time_hours",
    "read_lead_time_hours",
    "refusal_message",
    "validate_cancellation_reason",
]
