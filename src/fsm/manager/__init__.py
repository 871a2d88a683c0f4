"""
Exports públicos do módulo fsm/manager.

Máquina de estados do fluxo de agendamento.
"""

from fsm.manager.machine import (
    INITIAL_STATES,
    BookingStateMachine,
    create_booking_fsm,
)

__all__ = [
    "INITIAL_STATES",
    "BookingStateMachine",
    "create_booking_fsm",
]
