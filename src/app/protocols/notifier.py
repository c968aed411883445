"""Contrato de envio de notificações por email."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable


class NotificationKind(StrEnum):
    """Tipos de notificação; o valor coincide com a flag de opt-in do usuário."""

    NEW_BOOKING_REQUEST = "new_booking_request"
    BOOKING_CONFIRMED = "booking_confirmed"
    BOOKING_DECLINED = "booking_declined"
    BOOKING_CANCELLED = "booking_cancelled"


@dataclass(frozen=True, slots=True)
class NotificationPayload:
    """Conteúdo de uma notificação (data/hora já no timezone do destinatário)."""

    provider_name: str
    booker_name: str
    date: str
    time: str
    message: str
    meeting_link: str | None = None

    def to_template_params(self) -> dict[str, str]:
        params = {
            "provider_name": self.provider_name,
            "booker_name": self.booker_name,
            "date": self.date,
            "time": self.time,
            "message": self.message,
        }
        if self.meeting_link:
            params["meeting_link"] = self.meeting_link
        return params


@runtime_checkable
class NotifierProtocol(Protocol):
    """Contrato para entrega de notificações."""

    async def notify(
        self,
        kind: NotificationKind,
        recipient_email: str,
        payload: NotificationPayload,
    ) -> None:
        """Envia notificação; erros são propagados ao chamador."""
        ...
