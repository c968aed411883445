"""Eventos Stripe assinados para testes do webhook."""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from typing import Any

WEBHOOK_SECRET = "whsec_test_secret"

CHECKOUT_METADATA = {
    "providerId": "prov_1",
    "providerName": "Dr. Ana",
    "bookerId": "book_1",
    "bookerName": "Bruno",
    "bookerEmail": "bruno@example.com",
    "startUTC": "2030-03-05T12:00:00Z",
    "endUTC": "2030-03-05T13:00:00Z",
    "sessionMinutes": "60",
    "price": "50",
}


def sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Gera o cabeçalho Stripe-Signature (esquema v1)."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.{payload.decode('utf-8')}".encode()
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={digest}"


def event(event_type: str, data_object: dict[str, Any]) -> bytes:
    return json.dumps(
        {
            "id": "evt_1",
            "object": "event",
            "type": event_type,
            "data": {"object": data_object},
        }
    ).encode("utf-8")


def checkout_completed(
    metadata: dict[str, str] | None = None,
    payment_intent: str = "pi_checkout_1",
) -> bytes:
    return event(
        "checkout.session.completed",
        {
            "id": "cs_1",
            "object": "checkout.session",
            "payment_intent": payment_intent,
            "metadata": CHECKOUT_METADATA if metadata is None else metadata,
        },
    )
