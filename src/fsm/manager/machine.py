"""
Máquina de estados (BookingStateMachine) para o ciclo de vida de um booking.

A máquina valida transições e produz o registro de auditoria. Ela não
executa efeitos colaterais (reembolso, notificação): isso fica no caso
de uso que a consulta antes de gravar o novo estado.
"""

from datetime import UTC, datetime
from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.booking import DEFAULT_INITIAL_STATE, BookingStatus
from fsm.transitions.rules import is_transition_valid
from fsm.types.transition import Actor, StateTransition, TransitionResult


class BookingStateMachine:
    """
    Máquina de estados de um booking.

    Attributes:
        current_state: Estado atual da máquina
    """

    __slots__ = ("_booking_id", "_current_state")

    def __init__(
        self,
        initial_state: BookingStatus | None = None,
        booking_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._booking_id = booking_id

    @property
    def current_state(self) -> BookingStatus:
        """Estado atual da máquina."""
        return self._current_state

    def check(self, target: BookingStatus, actor: Actor) -> str | None:
        """
        Valida uma transição sem aplicá-la.

        Returns:
            Motivo da recusa, ou None se a transição é permitida
        """
        guard_result: GuardResult = evaluate_guards(self._current_state, target, actor)
        if not guard_result.allowed:
            return guard_result.reason

        if not is_transition_valid(self._current_state, target):
            return (
                f"Transição inválida: {self._current_state.value} → {target.value}"
            )
        return None

    def transition(
        self,
        target: BookingStatus,
        trigger: str,
        actor: Actor,
        metadata: dict[str, Any] | None = None,
        at: datetime | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Operação que dispara a transição (ex: 'confirm')
            actor: Parte que dispara a transição
            metadata: Dados adicionais para auditoria (nunca PII)
            at: Momento da transição (default: agora, UTC)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        reason = self.check(target, actor)
        if reason is not None:
            return TransitionResult(success=False, error_reason=reason)

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            actor=actor,
            metadata={"booking_id": self._booking_id, **(metadata or {})},
            timestamp=at or datetime.now(UTC),
        )
        self._current_state = target
        return TransitionResult(success=True, transition=transition)


def create_fsm(
    booking_id: str,
    initial_state: BookingStatus | None = None,
) -> BookingStateMachine:
    """
    Factory function para criar a máquina de um booking.

    Args:
        booking_id: Identificador do booking
        initial_state: Estado persistido atual (opcional)

    Returns:
        BookingStateMachine configurada
    """
    return BookingStateMachine(
        initial_state=initial_state,
        booking_id=booking_id,
    )
