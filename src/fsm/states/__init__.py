"""
Exports públicos do módulo fsm/states.

Fases do fluxo de agendamento.
"""

from fsm.states.booking import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    BookingState,
    is_terminal,
    is_valid_state,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "BookingState",
    "is_terminal",
    "is_valid_state",
]
