"""
Módulo FSM — máquina de estados do fluxo de agendamento de citas.

Fases: IDENTITY → DETAILS → CONFIRMATION. CONFIRMATION é terminal
até um reset explícito (evento NEW_REQUEST).

Estrutura:
    - states/: Fases (BookingState)
    - transitions/: Grafo (VALID_TRANSITIONS) e eventos (next_state)
    - rules/: Guards dependentes do rascunho
    - manager/: Máquina de estados (BookingStateMachine)
    - types/: Registros de transição (StateTransition, TransitionResult)
"""

from fsm.manager import (
    INITIAL_STATES,
    BookingStateMachine,
    create_booking_fsm,
)
from fsm.rules import (
    GuardResult,
    TransitionContext,
    evaluate_guards,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    BookingState,
    is_terminal,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    BookingEvent,
    get_valid_targets,
    is_transition_valid,
    next_state,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "INITIAL_STATES",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "BookingEvent",
    "BookingState",
    "BookingStateMachine",
    "GuardResult",
    "StateTransition",
    "TransitionContext",
    "TransitionResult",
    "create_booking_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "next_state",
    "validate_transition_map",
]
