"""
Regras de transição válidas entre estados de um booking.

Este módulo define o grafo de transições do ciclo de vida:
    pending → confirmed | rejected
    confirmed → cancelled
"""

from fsm.states.booking import TERMINAL_STATES, BookingStatus

# Tipagem explícita do mapa de transições
TransitionMap = dict[BookingStatus, frozenset[BookingStatus]]

# Chave: estado de origem
# Valor: conjunto de estados de destino permitidos
VALID_TRANSITIONS: TransitionMap = {
    # PENDING: decisão do provider
    BookingStatus.PENDING: frozenset({
        BookingStatus.CONFIRMED,
        BookingStatus.REJECTED,
    }),

    # CONFIRMED: só o booker cancela
    BookingStatus.CONFIRMED: frozenset({
        BookingStatus.CANCELLED,
    }),

    # Estados terminais
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def get_valid_targets(state: BookingStatus) -> frozenset[BookingStatus]:
    """
    Retorna os estados de destino válidos para um estado de origem.

    Args:
        state: Estado de origem

    Returns:
        Conjunto de estados de destino permitidos (vazio se terminal)
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: BookingStatus, to_state: BookingStatus) -> bool:
    """Verifica se uma transição é permitida pelo grafo."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)

