"""Testes do filtro de conflitos entre slots e bookings."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from app.domain.booking import Booking, TimeSlot
from app.services.conflict_filter import available_slots, is_slot_available, overlaps
from fsm import BookingStatus
from tests.fakes.builders import make_booking

NOW = datetime(2024, 3, 4, 8, 0, tzinfo=UTC)


def _slot(hour: int, minute: int = 0, minutes: int = 60) -> TimeSlot:
    start = datetime(2024, 3, 4, hour, minute, tzinfo=UTC)
    return TimeSlot(start_utc=start, end_utc=start + timedelta(minutes=minutes))


def _booking_at(hour: int, status: BookingStatus, booking_id: str = "bk") -> Booking:
    return make_booking(
        booking_id,
        start=datetime(2024, 3, 4, hour, 0, tzinfo=UTC),
        status=status,
    )


class TestOverlaps:
    def test_half_open_intervals(self) -> None:
        a = datetime(2024, 1, 1, 9, tzinfo=UTC)
        b = datetime(2024, 1, 1, 10, tzinfo=UTC)
        c = datetime(2024, 1, 1, 11, tzinfo=UTC)

        assert overlaps(a, c, b, c) is True
        assert overlaps(a, b, b, c) is False
        assert overlaps(b, c, a, b) is False


class TestAvailableSlots:
    def test_past_and_current_slots_are_removed(self) -> None:
        candidates = [_slot(7), _slot(8), _slot(9)]

        result = available_slots(candidates, [], NOW)

        assert result == [_slot(9)]

    def test_pending_and_confirmed_bookings_block(self) -> None:
        candidates = [_slot(9), _slot(10), _slot(11)]
        bookings = [
            _booking_at(9, BookingStatus.PENDING, "a"),
            _booking_at(11, BookingStatus.CONFIRMED, "b"),
        ]

        assert available_slots(candidates, bookings, NOW) == [_slot(10)]

    def test_rejected_and_cancelled_bookings_do_not_block(self) -> None:
        candidates = [_slot(9), _slot(10)]
        bookings = [
            _booking_at(9, BookingStatus.REJECTED, "a"),
            _booking_at(10, BookingStatus.CANCELLED, "b"),
        ]

        assert available_slots(candidates, bookings, NOW) == candidates

    def test_back_to_back_booking_does_not_conflict(self) -> None:
        candidates = [_slot(10)]
        bookings = [_booking_at(9, BookingStatus.CONFIRMED)]

        assert available_slots(candidates, bookings, NOW) == candidates

    def test_partial_overlap_conflicts(self) -> None:
        candidates = [_slot(9, 30)]
        bookings = [_booking_at(9, BookingStatus.PENDING)]

        assert available_slots(candidates, bookings, NOW) == []

    def test_other_provider_bookings_are_ignored_when_scoped(self) -> None:
        other = make_booking(
            "other",
            start=datetime(2024, 3, 4, 9, 0, tzinfo=UTC),
            provider_id="prov_2",
        )

        assert available_slots([_slot(9)], [other], NOW, provider_id="prov_1") == [_slot(9)]
        assert available_slots([_slot(9)], [other], NOW) == []

    def test_is_slot_available(self) -> None:
        booking = _booking_at(9, BookingStatus.PENDING)

        assert is_slot_available(_slot(9), [booking], NOW) is False
        assert is_slot_available(_slot(10), [booking], NOW) is True
