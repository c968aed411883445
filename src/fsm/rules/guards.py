"""
Guards para transições de estado de um booking.

Guards complementam o grafo de transições com regras de contexto:
quem pode disparar cada destino e bloqueio de transições reflexivas.
"""

from collections.abc import Callable

from fsm.states.booking import TERMINAL_STATES, BookingStatus
from fsm.types.transition import Actor


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


Guard = Callable[[BookingStatus, BookingStatus, Actor], GuardResult]

# Parte autorizada a levar o booking a cada destino
TARGET_ACTORS: dict[BookingStatus, Actor] = {
    BookingStatus.CONFIRMED: "provider",
    BookingStatus.REJECTED: "provider",
    BookingStatus.CANCELLED: "booker",
}


def guard_valid_state(
    from_state: BookingStatus,
    to_state: BookingStatus,
    actor: Actor,
) -> GuardResult:
    """Guard: ambos os estados precisam ser membros do enum."""
    if not isinstance(from_state, BookingStatus):
        return GuardResult.deny(f"Estado de origem inválido: {from_state}")
    if not isinstance(to_state, BookingStatus):
        return GuardResult.deny(f"Estado de destino inválido: {to_state}")
    return GuardResult.allow()


def guard_terminal_state(
    from_state: BookingStatus,
    to_state: BookingStatus,
    actor: Actor,
) -> GuardResult:
    """Guard: estados terminais não permitem saída."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Booking já está {from_state.value}, não permite transição"
        )
    return GuardResult.allow()


def guard_same_state(
    from_state: BookingStatus,
    to_state: BookingStatus,
    actor: Actor,
) -> GuardResult:
    """Guard: confirmar um booking já confirmado (e afins) é inválido."""
    if from_state == to_state:
        return GuardResult.deny(f"Booking já está {from_state.value}")
    return GuardResult.allow()


def guard_actor(
    from_state: BookingStatus,
    to_state: BookingStatus,
    actor: Actor,
) -> GuardResult:
    """Guard: somente a parte esperada dispara cada destino."""
    expected = TARGET_ACTORS.get(to_state)
    if expected is not None and actor != expected:
        return GuardResult.deny(
            f"Somente o {expected} pode levar o booking a {to_state.value}"
        )
    return GuardResult.allow()


# Aplicados em ordem; todos devem retornar allow()
DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_terminal_state,
    guard_same_state,
    guard_actor,
]


def evaluate_guards(
    from_state: BookingStatus,
    to_state: BookingStatus,
    actor: Actor,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia todos os guards para uma transição.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino
        actor: Parte que dispara a transição
        guards: Lista de guards a aplicar (usa DEFAULT_GUARDS se None)

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state, actor)
        if not result.allowed:
            return result

    return GuardResult.allow()
