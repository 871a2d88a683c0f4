"""
Máquina de estados do fluxo de agendamento.

Mantém a fase atual e o histórico de transições. Toda mudança de fase
passa pelo grafo (transitions) e pelos guards (rules).
"""

from typing import Any

from fsm.rules.guards import GuardResult, TransitionContext, evaluate_guards
from fsm.states.booking import (
    DEFAULT_INITIAL_STATE,
    BookingState,
    is_terminal,
)
from fsm.transitions.rules import (
    RESET_EVENTS,
    BookingEvent,
    get_valid_targets,
    is_transition_valid,
    next_state,
)
from fsm.types.transition import StateTransition, TransitionResult


class BookingStateMachine:
    """
    Máquina de estados de uma solicitação de agendamento.

    Attributes:
        current_state: Fase atual
        history: Histórico de transições desde o último reset
    """

    __slots__ = ("_booking_id", "_current_state", "_history")

    def __init__(
        self,
        initial_state: BookingState | None = None,
        booking_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._booking_id = booking_id

    @property
    def current_state(self) -> BookingState:
        """Fase atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def booking_id(self) -> str:
        """Identificador da solicitação (para logs)."""
        return self._booking_id

    @property
    def is_terminal(self) -> bool:
        """Verifica se a cita já foi confirmada."""
        return is_terminal(self._current_state)

    def can_transition_to(
        self,
        target: BookingState,
        context: TransitionContext | None = None,
    ) -> bool:
        """Verifica se pode transitar para a fase alvo."""
        if not is_transition_valid(self._current_state, target):
            return False
        return evaluate_guards(self._current_state, target, context).allowed

    def get_valid_targets(self) -> frozenset[BookingState]:
        """Retorna fases de destino válidas a partir da fase atual."""
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: BookingState,
        trigger: str,
        context: TransitionContext | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de fase.

        Args:
            target: Fase de destino
            trigger: Identificador do gatilho (ex: 'schedule_succeeded')
            context: Predicados do rascunho para os guards
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        guard_result: GuardResult = evaluate_guards(self._current_state, target, context)
        if not guard_result.allowed:
            return TransitionResult(
                success=False,
                error_reason=guard_result.reason,
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)
        return TransitionResult(success=True, transition=transition)

    def fire(
        self,
        event: BookingEvent,
        context: TransitionContext | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Aplica um evento usando a função de transição pura.

        NEW_REQUEST reinicia a máquina em IDENTITY a partir de qualquer
        fase, inclusive a terminal; o histórico recomeça com esse registro.

        Args:
            event: Evento recebido
            context: Predicados do rascunho para os guards
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        target = next_state(self._current_state, event)
        if target is None:
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Evento {event} não se aplica ao estado {self._current_state.name}"
                ),
            )

        if event in RESET_EVENTS:
            transition = StateTransition(
                from_state=self._current_state,
                to_state=target,
                trigger=str(event),
                metadata=metadata or {},
            )
            self.reset(target)
            self._history.append(transition)
            return TransitionResult(success=True, transition=transition)

        return self.transition(target, str(event), context=context, metadata=metadata)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo da fase atual, seguro para logs."""
        return {
            "booking_id": self._booking_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        """Histórico em formato seguro para logs."""
        return [t.to_log_dict() for t in self._history]

    def reset(self, new_initial_state: BookingState | None = None) -> None:
        """
        Reseta a máquina para a fase inicial e limpa o histórico.

        Args:
            new_initial_state: Nova fase inicial (usa default se None)
        """
        self._current_state = new_initial_state or DEFAULT_INITIAL_STATE
        self._history = []


def create_booking_fsm(
    booking_id: str,
    initial_state: BookingState | None = None,
) -> BookingStateMachine:
    """
    Factory para criar a FSM de uma solicitação.

    Args:
        booking_id: Identificador da solicitação
        initial_state: Fase inicial (opcional)

    Returns:
        BookingStateMachine configurada
    """
    return BookingStateMachine(
        initial_state=initial_state,
        booking_id=booking_id,
    )


INITIAL_STATES = frozenset({DEFAULT_INITIAL_STATE})
