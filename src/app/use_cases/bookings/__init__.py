"""Use cases do ciclo de vida de bookings."""

from .lifecycle import SLOT_UNAVAILABLE_REASON, BookingLifecycle, booking_id_for_payment

__all__ = [
    "SLOT_UNAVAILABLE_REASON",
    "BookingLifecycle",
    "booking_id_for_payment",
]
