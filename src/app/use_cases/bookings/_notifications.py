"""Notificações de transição de booking (opt-in por destinatário).

Falha de entrega nunca desfaz a transição: é registrada e descartada.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.notifier import NotificationKind, NotificationPayload
from app.services.time_arithmetic import format_date_in_timezone, format_time_in_timezone
from config.logging import log_side_effect_failure

if TYPE_CHECKING:
    from app.domain.booking import Booking
    from app.domain.user_profile import UserProfile
    from app.protocols.notifier import NotifierProtocol

logger = logging.getLogger(__name__)


def build_message(kind: NotificationKind, booking: Booking, reason: str | None = None) -> str:
    if kind is NotificationKind.NEW_BOOKING_REQUEST:
        return f"{booking.booker_name or 'A client'} requested a session with you."
    if kind is NotificationKind.BOOKING_CONFIRMED:
        return (
            f"{booking.provider_name or 'Your provider'} confirmed your session. "
            f"Join at {booking.meeting_link}"
        )
    if kind is NotificationKind.BOOKING_DECLINED:
        text = f"{booking.provider_name or 'Your provider'} declined your session. A full refund was issued."
    else:
        text = f"{booking.booker_name or 'Your client'} cancelled the session."
    if reason:
        text = f"{text} Reason: {reason}"
    return text


def build_payload(
    kind: NotificationKind,
    booking: Booking,
    recipient: UserProfile,
    reason: str | None = None,
) -> NotificationPayload:
    """Monta o payload com data/hora no timezone do destinatário."""
    return NotificationPayload(
        provider_name=booking.provider_name,
        booker_name=booking.booker_name,
        date=format_date_in_timezone(booking.start_utc, recipient.timezone),
        time=format_time_in_timezone(booking.start_utc, recipient.timezone),
        message=build_message(kind, booking, reason),
        meeting_link=booking.meeting_link,
    )


def wants(recipient: UserProfile | None, kind: NotificationKind) -> bool:
    if recipient is None:
        return False
    return bool(getattr(recipient.notification_settings, kind.value, False))


async def notify_if_opted_in(
    notifier: NotifierProtocol,
    kind: NotificationKind,
    booking: Booking,
    recipient: UserProfile | None,
    *,
    fallback_email: str = "",
    reason: str | None = None,
) -> bool:
    """Envia notificação se o destinatário optou por ela.

    Returns:
        True se o envio foi concluído sem erro
    """
    if recipient is None or not wants(recipient, kind):
        return False
    email = recipient.email or fallback_email
    try:
        await notifier.notify(kind, email, build_payload(kind, booking, recipient, reason))
    except Exception as exc:
        log_side_effect_failure(
            logger,
            "notifier",
            "notification_failed",
            exc,
            booking_id=booking.id,
        )
        return False
    return True
