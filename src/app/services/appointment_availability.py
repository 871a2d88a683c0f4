"""Resolução de horários reserváveis para (data, sede).

Caminho comum: a consulta primária do servidor, que já aplica feriados,
fechamentos semanais e antecedência mínima. Se ela falhar, derivamos um
conjunto a partir dos horários configurados da sede menos as citas que
já ocupam a data. O fallback não replica as regras do servidor: um
conjunto vazio nesse caminho significa "sem informação".

`resolve` nunca levanta exceção.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from app.domain.appointment import is_cancelled_status, normalize_time
from app.services.error_codes import parse_error_message
from config.logging import log_fallback
from utils.errors import BookingApiError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from app.domain.appointment import AppointmentRecord
    from app.domain.catalog import ConfiguredSlot
    from app.domain.errors import ErrorDescriptor
    from app.protocols.booking_api import BookingApiProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "availability_resolver"

SlotSource = Literal["primary", "fallback", "fallback_unfiltered", "unavailable"]


@dataclass(frozen=True, slots=True)
class SlotResolution:
    """SlotSet calculado para uma (data, sede).

    Attributes:
        slots: Horários HH:MM, ordenados e sem duplicatas
        source: Caminho que produziu o conjunto
        error: Erro interpretado da consulta primária, quando ela falhou
    """

    slots: tuple[str, ...]
    source: SlotSource
    error: ErrorDescriptor | None = None


class AvailabilityResolver:
    """Calcula o SlotSet com degradação graciosa."""

    __slots__ = ("_api",)

    def __init__(self, api: BookingApiProtocol) -> None:
        self._api = api

    async def resolve(self, day: date, branch_id: int) -> SlotResolution:
        """Retorna os horários reserváveis; nunca levanta exceção.

        Args:
            day: Data de calendário da cita
            branch_id: Sede escolhida

        Returns:
            SlotResolution com o melhor conjunto disponível
        """
        try:
            times = await self._api.get_available_times(day, branch_id)
            return SlotResolution(slots=normalize_slot_set(times), source="primary")
        except BookingApiError as exc:
            primary_error = parse_error_message(exc.message)
        except Exception:
            logger.exception(
                "available_times_unexpected_error",
                extra={"component": _COMPONENT, "action": "primary_query", "result": "error"},
            )
            primary_error = parse_error_message(None)

        log_fallback(logger, _COMPONENT, reason="primary_query_failed")
        return await self._resolve_fallback(day, branch_id, primary_error)

    async def _resolve_fallback(
        self,
        day: date,
        branch_id: int,
        primary_error: ErrorDescriptor,
    ) -> SlotResolution:
        try:
            configured = await self._api.list_configured_slots(branch_id)
        except Exception:
            logger.warning(
                "configured_slots_unavailable",
                extra={"component": _COMPONENT, "action": "fallback_catalog", "result": "error"},
            )
            return SlotResolution(slots=(), source="unavailable", error=primary_error)

        active_slots = active_slot_times(configured)

        try:
            appointments = await self._api.list_pending_appointments()
        except Exception:
            log_fallback(logger, _COMPONENT, reason="occupancy_unavailable")
            return SlotResolution(
                slots=active_slots,
                source="fallback_unfiltered",
                error=primary_error,
            )

        occupied = occupied_slot_times(appointments, day, branch_id)
        return SlotResolution(
            slots=tuple(slot for slot in active_slots if slot not in occupied),
            source="fallback",
            error=primary_error,
        )


def normalize_slot_set(times: Iterable[str]) -> tuple[str, ...]:
    """Ordena, remove duplicatas e descarta valores que não são HH:MM."""
    return tuple(sorted({slot for value in times if (slot := normalize_time(value))}))


def active_slot_times(configured: Iterable[ConfiguredSlot]) -> tuple[str, ...]:
    """Horários configurados ativos, como SlotSet."""
    return normalize_slot_set(slot.time for slot in configured if slot.is_active)


def occupied_slot_times(
    appointments: Iterable[AppointmentRecord],
    day: date,
    branch_id: int,
) -> frozenset[str]:
    """Horários já consumidos na sede/data.

    Ocupa o horário toda cita ativa da mesma sede cuja data de calendário
    é a data alvo e cujo status não é cancelado em nenhuma grafia
    reconhecida ("cancelled", "cancelada", sem diferenciar maiúsculas).
    """
    occupied: set[str] = set()
    for appointment in appointments:
        if not appointment.is_active or is_cancelled_status(appointment.status):
            continue
        if appointment.branch_id != branch_id or appointment.calendar_date != day:
            continue
        if slot := appointment.slot_time:
            occupied.add(slot)
    return frozenset(occupied)


def reconcile_selected_time(selected: str | None, slots: Iterable[str]) -> str | None:
    """Mantém o horário escolhido só se ele continua no novo SlotSet."""
    if selected is None:
        return None
    return selected if selected in set(slots) else None


class SlotRequestSequencer:
    """Garante last-request-wins entre recálculos concorrentes.

    Cada recálculo recebe um número de sequência monotônico junto com a
    (data, sede) para a qual foi emitido; só o resultado da emissão mais
    recente pode ser aplicado.
    """

    __slots__ = ("_latest", "_sequence")

    def __init__(self) -> None:
        self._sequence = 0
        self._latest: tuple[int, date, int] | None = None

    def issue(self, day: date, branch_id: int) -> tuple[int, date, int]:
        self._sequence += 1
        self._latest = (self._sequence, day, branch_id)
        return self._latest

    def is_current(self, token: tuple[int, date, int]) -> bool:
        return self._latest == token

    def invalidate(self) -> None:
        """Descarta qualquer recálculo em voo (ex.: reset do workflow)."""
        self._sequence += 1
        self._latest = None


__all__ = [
    "AvailabilityResolver",
    "SlotRequestSequencer",
    "SlotResolution",
    "active_slot_times",
    "normalize_slot_set",
    "occupied_slot_times",
    "reconcile_selected_time",
]
