"""
Exports públicos do módulo fsm/transitions.

Grafo de transições e função de transição por evento.
"""

from fsm.transitions.rules import (
    EVENT_TRANSITIONS,
    RESET_EVENTS,
    VALID_TRANSITIONS,
    BookingEvent,
    TransitionMap,
    get_valid_targets,
    is_transition_valid,
    next_state,
    validate_transition_map,
)

__all__ = [
    "EVENT_TRANSITIONS",
    "RESET_EVENTS",
    "VALID_TRANSITIONS",
    "BookingEvent",
    "TransitionMap",
    "get_valid_targets",
    "is_transition_valid",
    "next_state",
    "validate_transition_map",
]
