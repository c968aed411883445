"""Cobertura adicional para guard denial na BookingStateMachine."""

from __future__ import annotations

import fsm.manager.machine as machine_module
from fsm.manager.machine import BookingStateMachine
from fsm.rules.guards import GuardResult
from fsm.states import BookingStatus


def test_transition_returns_failure_when_guard_blocks_valid_transition(
    monkeypatch,
) -> None:
    def _deny_guard(from_state: BookingStatus, to_state: BookingStatus, actor: str) -> GuardResult:
        del from_state, to_state, actor
        return GuardResult.deny("blocked_by_guard")

    monkeypatch.setattr(machine_module, "evaluate_guards", _deny_guard)

    machine = BookingStateMachine(initial_state=BookingStatus.PENDING, booking_id="bk-guard")
    result = machine.transition(target=BookingStatus.CONFIRMED, trigger="confirm", actor="provider")

    assert result.success is False
    assert result.error_reason == "blocked_by_guard"
    assert machine.current_state == BookingStatus.PENDING
