"""Verificação de assinatura e extração de dados do webhook do Stripe (sem PII)."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import stripe
from pydantic import ValidationError

from app.domain.booking import PaymentCapture
from app.domain.checkout import CHECKOUT_METADATA_FIELDS, REQUIRED_CHECKOUT_METADATA

CHECKOUT_COMPLETED = "checkout.session.completed"
ACCOUNT_UPDATED = "account.updated"

# Janela de replay aceita para o timestamp da assinatura (segundos)
SIGNATURE_TOLERANCE_SECONDS = stripe.Webhook.DEFAULT_TOLERANCE


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura ausente ou inválida."""


class InvalidPayloadError(WebhookRequestError):
    """Payload que não é um evento Stripe válido."""


class MissingMetadataError(WebhookRequestError):
    """Checkout sem os metadados necessários para criar o booking."""


def parse_stripe_event(
    raw_body: bytes,
    signature: str | None,
    secret: str,
    *,
    tolerance: int = SIGNATURE_TOLERANCE_SECONDS,
) -> dict[str, Any]:
    """Valida assinatura e devolve o evento como dict.

    Assinaturas com timestamp fora de `tolerance` segundos são recusadas,
    mesmo com HMAC válido.

    Raises:
        InvalidSignatureError: assinatura ausente, inválida ou expirada
        InvalidPayloadError: corpo não é um evento válido
    """
    if not signature:
        raise InvalidSignatureError("missing_signature")
    try:
        payload = raw_body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidPayloadError("invalid_encoding") from exc

    try:
        stripe.WebhookSignature.verify_header(payload, signature, secret, tolerance=tolerance)
    except stripe.SignatureVerificationError as exc:
        raise InvalidSignatureError("invalid_signature") from exc

    try:
        event = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise InvalidPayloadError("invalid_json") from exc
    if not isinstance(event, dict) or not event.get("type"):
        raise InvalidPayloadError("payload_not_event")
    return event


def has_booking_metadata(metadata: Mapping[str, Any] | None) -> bool:
    return bool(metadata) and all(metadata.get(key) for key in REQUIRED_CHECKOUT_METADATA)


def capture_from_metadata(
    metadata: Mapping[str, Any],
    payment_intent_id: str,
    *,
    default_session_minutes: int = 60,
) -> PaymentCapture:
    """Converte metadados do checkout em PaymentCapture.

    Raises:
        MissingMetadataError: metadados obrigatórios ausentes ou malformados
    """
    if not has_booking_metadata(metadata):
        raise MissingMetadataError("missing_required_metadata")
    if not payment_intent_id:
        raise MissingMetadataError("missing_payment_intent")

    fields: dict[str, Any] = {
        target: metadata[source]
        for source, target in CHECKOUT_METADATA_FIELDS.items()
        if metadata.get(source) not in (None, "")
    }
    fields.setdefault("session_minutes", default_session_minutes)
    try:
        return PaymentCapture(payment_intent_id=payment_intent_id, **fields)
    except ValidationError as exc:
        raise MissingMetadataError("malformed_metadata") from exc
