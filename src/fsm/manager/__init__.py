"""
Exports públicos do módulo fsm/manager.

Máquina de estados (BookingStateMachine) do ciclo de vida de bookings.
"""

from fsm.manager.machine import BookingStateMachine, create_fsm

__all__ = [
    "BookingStateMachine",
    "create_fsm",
]
