"""Connector de webhooks do Stripe."""

from .webhook import (
    CHECKOUT_COMPLETED,
    ACCOUNT_UPDATED,
    InvalidPayloadError,
    InvalidSignatureError,
    MissingMetadataError,
    WebhookRequestError,
    capture_from_metadata,
    has_booking_metadata,
    parse_stripe_event,
)

__all__ = [
    "ACCOUNT_UPDATED",
    "CHECKOUT_COMPLETED",
    "InvalidPayloadError",
    "InvalidSignatureError",
    "MissingMetadataError",
    "WebhookRequestError",
    "capture_from_metadata",
    "has_booking_metadata",
    "parse_stripe_event",
]
