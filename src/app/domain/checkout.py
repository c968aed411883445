"""Metadados do checkout: o que o pagamento carrega até o webhook.

As chaves seguem o camelCase do front-end e são gravadas tanto na sessão
de checkout quanto no PaymentIntent, para o webhook recriar o booking a
partir de qualquer um dos dois.
"""

from __future__ import annotations

from datetime import UTC, datetime

# Chave de metadata -> campo de PaymentCapture
CHECKOUT_METADATA_FIELDS = {
    "providerId": "provider_id",
    "providerName": "provider_name",
    "bookerId": "booker_id",
    "bookerName": "booker_name",
    "bookerEmail": "booker_email",
    "startUTC": "start_utc",
    "endUTC": "end_utc",
    "sessionMinutes": "session_minutes",
    "price": "price",
    "notes": "notes",
}
REQUIRED_CHECKOUT_METADATA = ("providerId", "bookerId", "startUTC", "endUTC")

# Limite do Stripe por valor de metadata
METADATA_VALUE_MAX_LENGTH = 500


def _iso_utc(value: datetime) -> str:
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def build_checkout_metadata(
    *,
    provider_id: str,
    provider_name: str,
    booker_id: str,
    booker_name: str,
    booker_email: str,
    start_utc: datetime,
    end_utc: datetime,
    session_minutes: int,
    price: float,
    notes: str | None = None,
) -> dict[str, str]:
    """Metadados (todos string) lidos de volta por `capture_from_metadata`."""
    metadata = {
        "providerId": provider_id,
        "providerName": provider_name,
        "bookerId": booker_id,
        "bookerName": booker_name,
        "bookerEmail": booker_email,
        "startUTC": _iso_utc(start_utc),
        "endUTC": _iso_utc(end_utc),
        "sessionMinutes": str(session_minutes),
        "price": f"{price:.2f}",
    }
    if notes and notes.strip():
        metadata["notes"] = notes.strip()[:METADATA_VALUE_MAX_LENGTH]
    return {key: value[:METADATA_VALUE_MAX_LENGTH] for key, value in metadata.items()}


__all__ = [
    "CHECKOUT_METADATA_FIELDS",
    "METADATA_VALUE_MAX_LENGTH",
    "REQUIRED_CHECKOUT_METADATA",
    "build_checkout_metadata",
]
