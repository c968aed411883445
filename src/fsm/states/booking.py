"""
Estados canônicos de um agendamento (booking).

Este módulo define os estados persistidos que um booking pode assumir
durante seu ciclo de vida. O estado "expirado" não é persistido: é
derivado em leitura a partir de PENDING + horário de início no passado.
"""

from datetime import datetime
from enum import StrEnum


class BookingStatus(StrEnum):
    """
    Estados persistidos de um booking.

    Estados não-terminais:
        - PENDING: Pagamento capturado, aguardando decisão do provider
        - CONFIRMED: Aceito pelo provider

    Estados terminais:
        - REJECTED: Recusado pelo provider (reembolso integral)
        - CANCELLED: Cancelado pelo booker (reembolso parcial)
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


# Estado derivado exibido para PENDING cujo início já passou (nunca gravado)
EXPIRED_READ_STATE = "expired"

# Uma vez em estado terminal, o booking só aceita escrita de campos de reembolso
TERMINAL_STATES: frozenset[BookingStatus] = frozenset({
    BookingStatus.REJECTED,
    BookingStatus.CANCELLED,
})

# Estados que ocupam o horário do provider
BLOCKING_STATES: frozenset[BookingStatus] = frozenset({
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
})

DEFAULT_INITIAL_STATE: BookingStatus = BookingStatus.PENDING


def is_terminal(state: BookingStatus) -> bool:
    """Verifica se o estado é terminal."""
    return state in TERMINAL_STATES


def is_valid_state(state: object) -> bool:
    """
    Verifica se o valor é um estado válido do enum.

    Args:
        state: Valor a ser verificado

    Returns:
        True se é um BookingStatus válido
    """
    return isinstance(state, BookingStatus)


def blocks_slot(state: BookingStatus) -> bool:
    """Retorna True se o estado impede que o horário seja reservado por outro."""
    return state in BLOCKING_STATES


def effective_status(state: BookingStatus, start_utc: datetime, now: datetime) -> str:
    """
    Retorna o estado para exibição, incluindo o estado derivado "expired".

    Args:
        state: Estado persistido
        start_utc: Início do booking (UTC)
        now: Instante de referência (UTC)

    Returns:
        Valor do estado persistido ou EXPIRED_READ_STATE
    """
    if state == BookingStatus.PENDING and start_utc < now:
        return EXPIRED_READ_STATE
    return state.value
