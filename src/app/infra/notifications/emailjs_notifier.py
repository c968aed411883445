"""Notificações por email via API REST do EmailJS."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from app.protocols.notifier import NotificationKind, NotificationPayload, NotifierProtocol

if TYPE_CHECKING:
    from config.settings.email import EmailSettings

logger = logging.getLogger(__name__)

# Notificações cujo destinatário é o provider; as demais vão para o booker
PROVIDER_KINDS = frozenset({
    NotificationKind.NEW_BOOKING_REQUEST,
    NotificationKind.BOOKING_CANCELLED,
})

SUBJECTS: dict[NotificationKind, str] = {
    NotificationKind.NEW_BOOKING_REQUEST: "New booking request",
    NotificationKind.BOOKING_CONFIRMED: "Your booking is confirmed",
    NotificationKind.BOOKING_DECLINED: "Your booking was declined",
    NotificationKind.BOOKING_CANCELLED: "A booking was cancelled",
}


class NotificationDeliveryError(Exception):
    """EmailJS respondeu com erro ou ficou inacessível."""


class EmailJsNotifier(NotifierProtocol):
    """Envia emails transacionais pelo EmailJS.

    Sem credenciais configuradas ou com endereço inválido, o envio é
    ignorado com warning (ambiente de desenvolvimento).
    """

    def __init__(
        self,
        settings: EmailSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = http_client

    async def notify(
        self,
        kind: NotificationKind,
        recipient_email: str,
        payload: NotificationPayload,
    ) -> None:
        if not self._settings.is_configured:
            logger.warning(
                "email_skipped",
                extra={"component": "notifier", "action": kind.value, "result": "not_configured"},
            )
            return
        if not recipient_email or "@" not in recipient_email:
            logger.warning(
                "email_skipped",
                extra={"component": "notifier", "action": kind.value, "result": "invalid_recipient"},
            )
            return

        body = self._build_body(kind, recipient_email, payload)
        try:
            if self._client is not None:
                response = await self._client.post(self._settings.api_url, json=body)
            else:
                async with httpx.AsyncClient(
                    timeout=self._settings.request_timeout_seconds
                ) as client:
                    response = await client.post(self._settings.api_url, json=body)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise NotificationDeliveryError(f"Falha ao enviar email ({kind.value}): {exc}") from exc

        logger.info(
            "email_sent",
            extra={"component": "notifier", "action": kind.value, "result": "sent"},
        )

    def _build_body(
        self,
        kind: NotificationKind,
        recipient_email: str,
        payload: NotificationPayload,
    ) -> dict[str, object]:
        template_id = (
            self._settings.provider_template_id
            if kind in PROVIDER_KINDS
            else self._settings.booker_template_id
        )
        template_params: dict[str, str] = {
            "to_email": recipient_email,
            "subject": SUBJECTS[kind],
            **payload.to_template_params(),
        }
        return {
            "service_id": self._settings.service_id,
            "template_id": template_id,
            "user_id": self._settings.public_key,
            "template_params": template_params,
        }
