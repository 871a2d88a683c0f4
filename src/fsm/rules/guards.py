"""
Guards das transições do fluxo de agendamento.

O grafo diz quais fases se conectam; os guards dizem se o rascunho
atual permite a passagem. Ambos precisam aprovar uma transição.
"""

from collections.abc import Callable
from typing import Protocol

from fsm.states.booking import TERMINAL_STATES, BookingState


class TransitionContext(Protocol):
    """
    Visão do rascunho necessária para avaliar guards.

    Implementado pelo BookingWorkflow; a FSM nunca vê dados pessoais,
    apenas os predicados já calculados.
    """

    @property
    def has_identity(self) -> bool:
        """Identidade (existente ou nova) resolvida na fase 1."""
        ...

    @property
    def registrant_valid(self) -> bool:
        """Predicado agregado do formulário; True quando a identidade não é nova."""
        ...

    @property
    def missing_fields(self) -> tuple[str, ...]:
        """Campos obrigatórios do rascunho ainda vazios."""
        ...

    @property
    def has_confirmation(self) -> bool:
        """Servidor já emitiu a cita."""
        ...


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


Guard = Callable[[BookingState, BookingState, TransitionContext | None], GuardResult]


def guard_valid_state(
    from_state: BookingState,
    to_state: BookingState,
    context: TransitionContext | None = None,
) -> GuardResult:
    """Guard: ambos os estados pertencem ao enum."""
    if not isinstance(from_state, BookingState):
        return GuardResult.deny(f"Estado de origem inválido: {from_state}")
    if not isinstance(to_state, BookingState):
        return GuardResult.deny(f"Estado de destino inválido: {to_state}")
    return GuardResult.allow()


def guard_terminal_state(
    from_state: BookingState,
    to_state: BookingState,
    context: TransitionContext | None = None,
) -> GuardResult:
    """Guard: CONFIRMATION não tem saída pelo grafo."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Estado {from_state.name} é terminal, não permite transição"
        )
    return GuardResult.allow()


def guard_same_state(
    from_state: BookingState,
    to_state: BookingState,
    context: TransitionContext | None = None,
) -> GuardResult:
    """
    Guard: transição reflexiva só em DETAILS (loop de erro de agendamento).

    Args:
        from_state: Estado de origem
        to_state: Estado de destino
        context: Não usado

    Returns:
        GuardResult indicando se transição é permitida
    """
    if from_state == BookingState.DETAILS:
        return GuardResult.allow()
    if from_state == to_state:
        return GuardResult.deny(
            f"Transição reflexiva não permitida: {from_state.name} → {to_state.name}"
        )
    return GuardResult.allow()


def guard_identity_resolved(
    from_state: BookingState,
    to_state: BookingState,
    context: TransitionContext | None = None,
) -> GuardResult:
    """
    Guard: só entra em DETAILS com identidade resolvida e, no caminho
    de cliente novo, com o formulário de registro válido.
    """
    if from_state != BookingState.IDENTITY or to_state != BookingState.DETAILS:
        return GuardResult.allow()
    if context is None:
        return GuardResult.deny("Contexto ausente para avaliar identidade")
    if not context.has_identity:
        return GuardResult.deny("Identidade do cliente não resolvida")
    if not context.registrant_valid:
        return GuardResult.deny("Dados do novo cliente inválidos")
    return GuardResult.allow()


def guard_booking_confirmed(
    from_state: BookingState,
    to_state: BookingState,
    context: TransitionContext | None = None,
) -> GuardResult:
    """
    Guard: CONFIRMATION exige rascunho completo, registrante ainda válido
    e cita emitida pelo servidor.
    """
    if to_state != BookingState.CONFIRMATION:
        return GuardResult.allow()
    if context is None:
        return GuardResult.deny("Contexto ausente para avaliar confirmação")
    if context.missing_fields:
        return GuardResult.deny(
            f"Campos obrigatórios ausentes: {', '.join(context.missing_fields)}"
        )
    if not context.registrant_valid:
        return GuardResult.deny("Dados do novo cliente inválidos")
    if not context.has_confirmation:
        return GuardResult.deny("Cita ainda não confirmada pelo servidor")
    return GuardResult.allow()


# Aplicados em ordem; todos devem retornar allow()
DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_terminal_state,
    guard_same_state,
    guard_identity_resolved,
    guard_booking_confirmed,
]


def evaluate_guards(
    from_state: BookingState,
    to_state: BookingState,
    context: TransitionContext | None = None,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia todos os guards para uma transição.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino
        context: Predicados do rascunho atual
        guards: Lista de guards a aplicar (usa DEFAULT_GUARDS se None)

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state, context)
        if not result.allowed:
            return result

    return GuardResult.allow()
