"""
Exports públicos do módulo fsm/types.

Registros de transição do fluxo de agendamento.
"""

from fsm.types.transition import StateTransition, TransitionResult

__all__ = [
    "StateTransition",
    "TransitionResult",
]
