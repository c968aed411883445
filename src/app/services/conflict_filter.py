"""Filtro de conflitos entre slots candidatos e bookings existentes."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from fsm.states.booking import blocks_slot

if TYPE_CHECKING:
    from app.domain.booking import Booking, TimeSlot


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Sobreposição de intervalos semiabertos: encostar não conflita."""
    return a_start < b_end and a_end > b_start


def _blocking(bookings: Iterable[Booking], provider_id: str | None) -> list[Booking]:
    return [
        booking
        for booking in bookings
        if blocks_slot(booking.status)
        and (provider_id is None or booking.provider_id == provider_id)
    ]


def _conflicts(slot: TimeSlot, blocking: list[Booking]) -> bool:
    return any(
        overlaps(slot.start_utc, slot.end_utc, booking.start_utc, booking.end_utc)
        for booking in blocking
    )


def available_slots(
    candidates: Iterable[TimeSlot],
    existing_bookings: Iterable[Booking],
    now: datetime,
    *,
    provider_id: str | None = None,
) -> list[TimeSlot]:
    """Remove slots no passado e slots ocupados por bookings pending/confirmed.

    A ordem dos candidatos é preservada.
    """
    blocking = _blocking(existing_bookings, provider_id)
    return [
        slot
        for slot in candidates
        if slot.start_utc > now and not _conflicts(slot, blocking)
    ]


def is_slot_available(
    slot: TimeSlot,
    existing_bookings: Iterable[Booking],
    now: datetime,
    *,
    provider_id: str | None = None,
) -> bool:
    return bool(available_slots([slot], existing_bookings, now, provider_id=provider_id))


__all__ = ["available_slots", "is_slot_available", "overlaps"]
