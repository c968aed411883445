"""Testes da resolução de slots candidatos a partir de regras."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from app.domain.availability import ExclusionRule, RecurringRule
from app.services.availability_resolver import candidate_slots, candidate_slots_for_range

MONDAY = "2024-03-04"


def _rule(rule_id: str, weekday: int, start: str, end: str, provider_id: str = "prov_1") -> RecurringRule:
    return RecurringRule(
        id=rule_id,
        provider_id=provider_id,
        weekday=weekday,
        start_time=start,
        end_time=end,
    )


def _exclusion(day: str, provider_id: str = "prov_1") -> ExclusionRule:
    return ExclusionRule(id=f"ex_{day}", provider_id=provider_id, date=day)


class TestCandidateSlots:
    def test_weekday_rule_is_tiled_in_provider_timezone(self) -> None:
        rules = [_rule("r1", 1, "09:00", "12:00")]

        slots = candidate_slots(rules, [], MONDAY, 60, 0, "America/New_York")

        assert [slot.start_utc.hour for slot in slots] == [14, 15, 16]

    def test_exclusion_wins_over_recurring_rule(self) -> None:
        rules = [_rule("r1", 1, "09:00", "17:00")]

        slots = candidate_slots(rules, [_exclusion(MONDAY)], MONDAY, 60, 15, "UTC")

        assert slots == []

    def test_exclusion_on_other_date_does_not_apply(self) -> None:
        rules = [_rule("r1", 1, "09:00", "11:00")]

        slots = candidate_slots(rules, [_exclusion("2024-03-05")], MONDAY, 60, 0, "UTC")

        assert len(slots) == 2

    def test_multiple_blocks_are_concatenated_in_start_order(self) -> None:
        rules = [
            _rule("afternoon", 1, "14:00", "16:00"),
            _rule("morning", 1, "09:00", "10:00"),
        ]

        slots = candidate_slots(rules, [], MONDAY, 60, 0, "UTC")

        assert [slot.start_utc for slot in slots] == [
            datetime(2024, 3, 4, 9, 0, tzinfo=UTC),
            datetime(2024, 3, 4, 14, 0, tzinfo=UTC),
            datetime(2024, 3, 4, 15, 0, tzinfo=UTC),
        ]

    def test_weekday_zero_matches_sunday(self) -> None:
        rules = [_rule("sun", 0, "10:00", "11:00")]

        assert len(candidate_slots(rules, [], "2024-03-10", 60, 0, "UTC")) == 1
        assert candidate_slots(rules, [], "2024-03-09", 60, 0, "UTC") == []

    def test_rules_of_other_providers_are_ignored(self) -> None:
        rules = [_rule("mine", 1, "09:00", "10:00"), _rule("theirs", 1, "11:00", "12:00", "prov_2")]
        exclusions = [_exclusion(MONDAY, "prov_2")]

        slots = candidate_slots(rules, exclusions, MONDAY, 60, 0, "UTC", provider_id="prov_1")

        assert [slot.start_utc.hour for slot in slots] == [9]


class TestCandidateSlotsForRange:
    def test_returns_every_date_in_range(self) -> None:
        rules = [_rule("mon", 1, "09:00", "10:00"), _rule("wed", 3, "09:00", "10:00")]

        result = candidate_slots_for_range(rules, [_exclusion("2024-03-06")], MONDAY, 3, 60, 0, "UTC")

        assert list(result) == ["2024-03-04", "2024-03-05", "2024-03-06"]
        assert len(result["2024-03-04"]) == 1
        assert result["2024-03-05"] == []
        assert result["2024-03-06"] == []

    def test_zero_days_raises(self) -> None:
        with pytest.raises(ValueError):
            candidate_slots_for_range([], [], MONDAY, 0, 60, 0, "UTC")
