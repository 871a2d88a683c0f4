"""
Regras de transição entre as fases do agendamento.

Define o grafo de transições por estado alvo (VALID_TRANSITIONS) e a
função pura de transição por evento (next_state), usada pelo workflow
para que o estado seja sempre derivado de (estado atual, evento).
"""

from enum import StrEnum

from fsm.states.booking import TERMINAL_STATES, BookingState

TransitionMap = dict[BookingState, frozenset[BookingState]]


class BookingEvent(StrEnum):
    """Eventos que movem o fluxo de agendamento."""

    CLIENT_RESOLVED = "client_resolved"
    REGISTRANT_ACCEPTED = "registrant_accepted"
    SCHEDULE_FAILED = "schedule_failed"
    SCHEDULE_SUCCEEDED = "schedule_succeeded"
    NEW_REQUEST = "new_request"

    def __str__(self) -> str:
        return self.value


VALID_TRANSITIONS: TransitionMap = {
    # IDENTITY: só avança quando a identidade está resolvida
    BookingState.IDENTITY: frozenset({
        BookingState.DETAILS,
    }),

    # DETAILS: loop de erro de agendamento ou confirmação
    BookingState.DETAILS: frozenset({
        BookingState.DETAILS,
        BookingState.CONFIRMATION,
    }),

    # Terminal: saída apenas via NEW_REQUEST (reset)
    BookingState.CONFIRMATION: frozenset(),
}

EVENT_TRANSITIONS: dict[tuple[BookingState, BookingEvent], BookingState] = {
    (BookingState.IDENTITY, BookingEvent.CLIENT_RESOLVED): BookingState.DETAILS,
    (BookingState.IDENTITY, BookingEvent.REGISTRANT_ACCEPTED): BookingState.DETAILS,
    (BookingState.DETAILS, BookingEvent.SCHEDULE_FAILED): BookingState.DETAILS,
    (BookingState.DETAILS, BookingEvent.SCHEDULE_SUCCEEDED): BookingState.CONFIRMATION,
    (BookingState.IDENTITY, BookingEvent.NEW_REQUEST): BookingState.IDENTITY,
    (BookingState.DETAILS, BookingEvent.NEW_REQUEST): BookingState.IDENTITY,
    (BookingState.CONFIRMATION, BookingEvent.NEW_REQUEST): BookingState.IDENTITY,
}

# Eventos que reiniciam a solicitação em vez de seguir o grafo
RESET_EVENTS: frozenset[BookingEvent] = frozenset({BookingEvent.NEW_REQUEST})


def get_valid_targets(state: BookingState) -> frozenset[BookingState]:
    """
    Retorna os estados de destino válidos para um estado de origem.

    Args:
        state: Estado de origem

    Returns:
        Conjunto de estados de destino permitidos (vazio se terminal)
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: BookingState, to_state: BookingState) -> bool:
    """
    Verifica se uma transição é válida segundo o grafo.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino

    Returns:
        True se a transição é permitida, False caso contrário
    """
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def next_state(state: BookingState, event: BookingEvent) -> BookingState | None:
    """
    Função de transição pura: (estado, evento) → próximo estado.

    Args:
        state: Estado atual
        event: Evento recebido

    Returns:
        Próximo estado, ou None se o evento não se aplica ao estado
    """
    return EVENT_TRANSITIONS.get((state, event))


def validate_transition_map() -> list[str]:
    """
    Valida a integridade dos mapas de transição.

    Verifica:
    - Todos os estados do enum estão no grafo
    - Estados terminais têm conjunto vazio
    - Todo evento não-reset leva a um destino permitido pelo grafo

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in BookingState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    for (from_state, event), target in EVENT_TRANSITIONS.items():
        if event in RESET_EVENTS:
            continue
        if not is_transition_valid(from_state, target):
            errors.append(
                f"Evento {event} leva {from_state.name} → {target.name} fora do grafo"
            )

    return errors
