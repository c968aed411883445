"""
Módulo FSM: Máquina de Estados do ciclo de vida de bookings.

Estrutura:
    - states/: Estados persistidos (BookingStatus) e estado derivado "expired"
    - transitions/: Grafo de transições (VALID_TRANSITIONS)
    - rules/: Guards (estado terminal, reflexivo, parte autorizada)
    - manager/: Máquina de estados (BookingStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import (
    BookingStateMachine,
    create_fsm,
)
from fsm.rules import (
    GuardResult,
    evaluate_guards,
)
from fsm.states import (
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
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
)
from fsm.types import (
    Actor,
    StateTransition,
    TransitionResult,
)

__all__ = [
    "BLOCKING_STATES",
    "DEFAULT_INITIAL_STATE",
    "EXPIRED_READ_STATE",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "Actor",
    "BookingStateMachine",
    "BookingStatus",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "blocks_slot",
    "create_fsm",
    "effective_status",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
]
