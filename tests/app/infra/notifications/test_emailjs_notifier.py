"""Testes do EmailJsNotifier com transporte HTTP mockado."""

from __future__ import annotations

import json

import httpx
import pytest

from app.infra.notifications import EmailJsNotifier
from app.infra.notifications.emailjs_notifier import NotificationDeliveryError
from app.protocols.notifier import NotificationKind, NotificationPayload
from config.settings.email import EmailSettings

SETTINGS = EmailSettings(
    service_id="svc",
    provider_template_id="tpl_provider",
    booker_template_id="tpl_booker",
    public_key="pk",
)

PAYLOAD = NotificationPayload(
    provider_name="Dr. Ana",
    booker_name="Bruno",
    date="March 5, 2024",
    time="7:00 AM",
    message="Dr. Ana confirmed your session.",
    meeting_link="https://meet.jit.si/bookit-bk_1",
)


def _client(requests: list[httpx.Request], status_code: int = 200) -> httpx.AsyncClient:
    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, text="OK")

    return httpx.AsyncClient(transport=httpx.MockTransport(_handler))


@pytest.mark.asyncio
async def test_booker_notification_uses_booker_template() -> None:
    requests: list[httpx.Request] = []
    notifier = EmailJsNotifier(SETTINGS, http_client=_client(requests))

    await notifier.notify(NotificationKind.BOOKING_CONFIRMED, "bruno@example.com", PAYLOAD)

    body = json.loads(requests[0].content)
    assert str(requests[0].url) == SETTINGS.api_url
    assert body["service_id"] == "svc"
    assert body["template_id"] == "tpl_booker"
    assert body["user_id"] == "pk"
    params = body["template_params"]
    assert params["to_email"] == "bruno@example.com"
    assert params["meeting_link"] == "https://meet.jit.si/bookit-bk_1"
    assert params["date"] == "March 5, 2024"


@pytest.mark.asyncio
async def test_provider_notification_uses_provider_template() -> None:
    requests: list[httpx.Request] = []
    notifier = EmailJsNotifier(SETTINGS, http_client=_client(requests))

    await notifier.notify(NotificationKind.NEW_BOOKING_REQUEST, "ana@example.com", PAYLOAD)

    assert json.loads(requests[0].content)["template_id"] == "tpl_provider"


@pytest.mark.asyncio
async def test_unconfigured_or_invalid_recipient_is_skipped() -> None:
    requests: list[httpx.Request] = []

    await EmailJsNotifier(EmailSettings(), http_client=_client(requests)).notify(
        NotificationKind.BOOKING_CONFIRMED, "bruno@example.com", PAYLOAD
    )
    await EmailJsNotifier(SETTINGS, http_client=_client(requests)).notify(
        NotificationKind.BOOKING_CONFIRMED, "not-an-email", PAYLOAD
    )

    assert requests == []


@pytest.mark.asyncio
async def test_http_error_raises_delivery_error() -> None:
    requests: list[httpx.Request] = []
    notifier = EmailJsNotifier(SETTINGS, http_client=_client(requests, status_code=500))

    with pytest.raises(NotificationDeliveryError):
        await notifier.notify(NotificationKind.BOOKING_DECLINED, "bruno@example.com", PAYLOAD)
