"""
Exports públicos do módulo fsm/rules.

Guards para transições de estado de um booking.
"""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    TARGET_ACTORS,
    Guard,
    GuardResult,
    evaluate_guards,
    guard_actor,
    guard_same_state,
    guard_terminal_state,
    guard_valid_state,
)

__all__ = [
    "DEFAULT_GUARDS",
    "TARGET_ACTORS",
    "Guard",
    "GuardResult",
    "evaluate_guards",
    "guard_actor",
    "guard_same_state",
    "guard_terminal_state",
    "guard_valid_state",
]
