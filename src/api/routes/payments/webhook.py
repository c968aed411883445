"""Endpoint de webhook do Stripe.

Endpoints:
- POST /webhook/stripe: eventos de pagamento e de contas conectadas

Eventos tratados:
- checkout.session.completed: cria booking pendente (idempotente por payment intent)
- account.updated: conclui onboarding do provider

Demais eventos recebem 200 sem efeito, para o Stripe não reenviar.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.stripe.webhook import (
    ACCOUNT_UPDATED,
    CHECKOUT_COMPLETED,
    InvalidPayloadError,
    InvalidSignatureError,
    MissingMetadataError,
    capture_from_metadata,
    has_booking_metadata,
    parse_stripe_event,
)
from api.routes.responses import error_response
from app.bootstrap import get_booking_lifecycle, get_payment_processor, get_provider_onboarding
from app.domain.errors import BookingError
from app.observability import CORRELATION_HEADER, correlation_scope, get_correlation_id
from app.protocols.payment_processor import PaymentProcessorError
from config.settings import get_booking_settings, get_stripe_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SIGNATURE_HEADER = "stripe-signature"


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> Response:
    """Recebe eventos do Stripe.

    Validações:
    1. Assinatura (Stripe-Signature)
    2. JSON de evento válido
    3. Metadados do checkout (sessão, com fallback no PaymentIntent)
    """
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        settings = get_stripe_settings()
        if not settings.webhook_secret:
            logger.error(
                "stripe_webhook_secret_missing",
                extra={"component": "stripe_webhook", "result": "misconfigured"},
            )
            return Response(
                content="Webhook secret not configured",
                media_type="text/plain",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        raw_body = await request.body()
        try:
            event = parse_stripe_event(
                raw_body,
                request.headers.get(SIGNATURE_HEADER),
                settings.webhook_secret,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={"component": "stripe_webhook", "error": str(exc)},
            )
            return Response(
                content="Invalid signature",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        except InvalidPayloadError as exc:
            logger.warning(
                "webhook_payload_invalid",
                extra={"component": "stripe_webhook", "error": str(exc)},
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        event_type = str(event.get("type"))
        data_object = (event.get("data") or {}).get("object") or {}
        logger.info(
            "webhook_received",
            extra={
                "component": "stripe_webhook",
                "event_type": event_type,
                "payload_size": len(raw_body),
            },
        )

        if event_type == CHECKOUT_COMPLETED:
            return await _handle_checkout_completed(data_object)
        if event_type == ACCOUNT_UPDATED:
            return await _handle_account_updated(data_object)

        return JSONResponse(content={"received": True, "handled": False})


async def _handle_checkout_completed(session: dict[str, Any]) -> Response:
    payment_intent_id = str(session.get("payment_intent") or "")
    metadata = session.get("metadata") or {}

    if not has_booking_metadata(metadata) and payment_intent_id:
        try:
            metadata = await get_payment_processor().payment_metadata(payment_intent_id)
        except PaymentProcessorError as exc:
            logger.warning(
                "webhook_payment_metadata_unavailable",
                extra={"component": "stripe_webhook", "error_type": type(exc).__name__},
            )

    try:
        capture = capture_from_metadata(
            metadata,
            payment_intent_id,
            default_session_minutes=get_booking_settings().default_session_minutes,
        )
    except MissingMetadataError as exc:
        logger.warning(
            "webhook_metadata_missing",
            extra={"component": "stripe_webhook", "error": str(exc)},
        )
        return Response(
            content="Missing required metadata (providerId or bookerId)",
            media_type="text/plain",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        booking = await get_booking_lifecycle().create_from_payment(capture)
    except BookingError as exc:
        return error_response(exc)

    return JSONResponse(
        content={
            "received": True,
            "booking_id": booking.id,
            "correlation_id": get_correlation_id(),
        }
    )


async def _handle_account_updated(account: dict[str, Any]) -> Response:
    account_id = str(account.get("id") or "")
    if not account_id:
        return JSONResponse(content={"received": True, "handled": False})
    updated = await get_provider_onboarding().account_updated(
        account_id,
        details_submitted=bool(account.get("details_submitted")),
        payouts_enabled=bool(account.get("payouts_enabled")),
    )
    return JSONResponse(content={"received": True, "handled": updated})
