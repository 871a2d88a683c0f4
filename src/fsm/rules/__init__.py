"""
Exports públicos do módulo fsm/rules.

Guards das transições do fluxo de agendamento.
"""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    Guard,
    GuardResult,
    TransitionContext,
    evaluate_guards,
    guard_booking_confirmed,
    guard_identity_resolved,
    guard_same_state,
    guard_terminal_state,
    guard_valid_state,
)

__all__ = [
    "DEFAULT_GUARDS",
    "Guard",
    "GuardResult",
    "TransitionContext",
    "evaluate_guards",
    "guard_booking_confirmed",
    "guard_identity_resolved",
    "guard_same_state",
    "guard_terminal_state",
    "guard_valid_state",
]
