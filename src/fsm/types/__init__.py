"""
Exports públicos do módulo fsm/types.

Tipos e estruturas de dados para transições de estado.
"""

from fsm.types.transition import Actor, StateTransition, TransitionResult

__all__ = [
    "Actor",
    "StateTransition",
    "TransitionResult",
]
