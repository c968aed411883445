"""Testes dos modelos de domínio (Booking, TimeSlot, regras, perfis)."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest
from pydantic import ValidationError

from app.domain.availability import (
    ExclusionRule,
    RecurringRule,
    availability_rule_from_document,
)
from app.domain.booking import Booking, TimeSlot
from app.domain.errors import NotFoundError, SlotUnavailableError
from app.domain.user_profile import UserProfile
from fsm import BookingStatus
from tests.fakes.builders import make_booking


class TestTimeSlot:
    def test_naive_datetimes_are_treated_as_utc(self) -> None:
        slot = TimeSlot(start_utc=datetime(2024, 3, 4, 9, 0), end_utc=datetime(2024, 3, 4, 10, 0))

        assert slot.start_utc.tzinfo is not None
        assert slot.duration_minutes == 60

    def test_start_must_precede_end(self) -> None:
        moment = datetime(2024, 3, 4, 9, 0, tzinfo=UTC)
        with pytest.raises(ValidationError):
            TimeSlot(start_utc=moment, end_utc=moment)


class TestBooking:
    def test_duration_must_match_session_minutes(self) -> None:
        with pytest.raises(ValidationError):
            make_booking(minutes=60, session_minutes=45)

    def test_document_round_trip_keeps_status_and_drops_none(self) -> None:
        booking = make_booking(status=BookingStatus.CONFIRMED)

        document = booking.to_document()
        restored = Booking.from_document({k: v for k, v in document.items() if k != "id"}, doc_id="bk_1")

        assert document["status"] == "confirmed"
        assert "refund_id" not in document
        assert restored.id == "bk_1"
        assert restored.status == BookingStatus.CONFIRMED

    def test_iso_strings_are_parsed_as_utc(self) -> None:
        booking = make_booking(
            start=datetime(2024, 3, 5, 12, 0, tzinfo=UTC),
            cancelled_at="2024-03-04T10:00:00Z",
        )
        assert booking.cancelled_at == datetime(2024, 3, 4, 10, 0, tzinfo=UTC)

    def test_effective_status_and_refund_flag(self) -> None:
        booking = make_booking(start=datetime(2024, 3, 5, 12, 0, tzinfo=UTC))

        assert booking.effective_status(booking.start_utc - timedelta(seconds=1)) == "pending"
        assert booking.effective_status(booking.start_utc + timedelta(seconds=1)) == "expired"
        assert booking.is_refunded is False
        assert booking.model_copy(update={"refund_id": "re_1"}).is_refunded is True


class TestAvailabilityRules:
    def test_rule_from_document_dispatches_on_type(self) -> None:
        recurring = availability_rule_from_document(
            {"type": "recurring", "provider_id": "p", "weekday": 0, "start_time": "08:00", "end_time": "12:00"},
            doc_id="r1",
        )
        exclusion = availability_rule_from_document(
            {"type": "exclusion", "provider_id": "p", "date": "2024-12-25"},
            doc_id="e1",
        )

        assert isinstance(recurring, RecurringRule)
        assert recurring.id == "r1"
        assert isinstance(exclusion, ExclusionRule)
        assert exclusion.day == date(2024, 12, 25)

    def test_unknown_rule_type_raises(self) -> None:
        with pytest.raises(ValueError):
            availability_rule_from_document({"type": "weird", "provider_id": "p"}, doc_id="x")

    def test_exclusion_accepts_date_objects(self) -> None:
        rule = ExclusionRule(id="e", provider_id="p", date=date(2024, 12, 25))
        assert rule.date == "2024-12-25"


class TestUserProfile:
    def test_invalid_timezone_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UserProfile(id="u", timezone="Mars/Olympus")

    def test_defaults(self) -> None:
        profile = UserProfile(id="u")
        assert profile.default_session_minutes == 60
        assert profile.buffer_minutes == 15
        assert profile.notification_settings.new_booking_request is False
        assert profile.zone.key == "UTC"


class TestErrors:
    def test_error_payload_has_code_reason_and_booking(self) -> None:
        error = SlotUnavailableError("ocupado", booking_id="bk_1")
        assert error.to_dict() == {
            "error": "slot_unavailable",
            "reason": "ocupado",
            "booking_id": "bk_1",
        }
        assert NotFoundError("x").to_dict() == {"error": "not_found", "reason": "x"}
