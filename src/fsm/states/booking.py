"""
Estados canônicos do fluxo de agendamento de citas.

O fluxo tem três fases explícitas e nenhuma transição pula fase:
identificação do cliente → detalhes da cita → confirmação.
"""

from enum import StrEnum


class BookingState(StrEnum):
    """
    Fases de uma solicitação de agendamento.

    Estados não-terminais:
        - IDENTITY: Cliente existente ou registrante novo ainda não resolvido
        - DETAILS: Motivo, sede, data e horário sendo escolhidos

    Estados terminais:
        - CONFIRMATION: Cita emitida pelo servidor; só sai via reset explícito
    """

    IDENTITY = "IDENTITY"
    DETAILS = "DETAILS"
    CONFIRMATION = "CONFIRMATION"

    def __str__(self) -> str:
        return self.value


# Uma vez confirmada, a solicitação só volta ao início por "nueva solicitud"
TERMINAL_STATES: frozenset[BookingState] = frozenset({
    BookingState.CONFIRMATION,
})

DEFAULT_INITIAL_STATE: BookingState = BookingState.IDENTITY


def is_terminal(state: BookingState) -> bool:
    """
    Verifica se o estado é terminal (cita confirmada).

    Args:
        state: Estado a ser verificado

    Returns:
        True se o estado é terminal, False caso contrário
    """
    return state in TERMINAL_STATES


def is_valid_state(state: BookingState) -> bool:
    """Verifica se o valor é um BookingState válido."""
    return isinstance(state, BookingState)
