"""
Exports públicos do módulo fsm/states.

Estados canônicos do ciclo de vida de um booking.
"""

from fsm.states.booking import (
    BLOCKING_STATES,
    DEFAULT_INITIAL_STATE,
    EXPIRED_READ_STATE,
    TERMINAL_STATES,
    BookingStatus,
    blocks_slot,
    effective_status,
    is_terminal,
    is_valid_state,
)

__all__ = [
    "BLOCKING_STATES",
    "DEFAULT_INITIAL_STATE",
    "EXPIRED_READ_STATE",
    "TERMINAL_STATES",
    "BookingStatus",
    "blocks_slot",
    "effective_status",
    "is_terminal",
    "is_valid_state",
]
