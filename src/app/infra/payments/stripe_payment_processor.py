"""Checkout, contas conectadas e reembolsos via Stripe (Connect com destination charges).

O SDK do Stripe é síncrono; as chamadas rodam em asyncio.to_thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import stripe

from app.protocols.payment_processor import (
    CheckoutRequest,
    CheckoutSession,
    PaymentProcessorError,
    PaymentProcessorProtocol,
    RefundResult,
)

if TYPE_CHECKING:
    from config.settings.payments import StripeSettings

logger = logging.getLogger(__name__)


class StripePaymentProcessor(PaymentProcessorProtocol):
    """Cria sessões de checkout e emite reembolsos de PaymentIntents no Stripe.

    `refund_application_fee` devolve a taxa da plataforma e
    `reverse_transfer` estorna o repasse já feito à conta do provider.
    """

    def __init__(self, settings: StripeSettings) -> None:
        self._api_key = settings.secret_key
        stripe.max_network_retries = settings.max_network_retries

    async def refund(
        self,
        payment_intent_id: str,
        *,
        refund_application_fee: bool,
        reverse_transfer: bool,
        idempotency_key: str,
    ) -> RefundResult:
        return await asyncio.to_thread(
            self._refund_sync,
            payment_intent_id,
            refund_application_fee,
            reverse_transfer,
            idempotency_key,
        )

    def _refund_sync(
        self,
        payment_intent_id: str,
        refund_application_fee: bool,
        reverse_transfer: bool,
        idempotency_key: str,
    ) -> RefundResult:
        try:
            refund = stripe.Refund.create(
                payment_intent=payment_intent_id,
                refund_application_fee=refund_application_fee,
                reverse_transfer=reverse_transfer,
                idempotency_key=idempotency_key,
                api_key=self._api_key,
            )
        except stripe.StripeError as exc:
            logger.error(
                "stripe_refund_failed",
                extra={
                    "component": "payment_processor",
                    "action": "refund",
                    "result": "error",
                    "error_type": type(exc).__name__,
                    "stripe_code": getattr(exc, "code", None),
                },
            )
            raise PaymentProcessorError(f"Stripe recusou o reembolso: {exc.user_message or exc}") from exc

        logger.info(
            "stripe_refund_created",
            extra={
                "component": "payment_processor",
                "action": "refund",
                "result": refund.status,
            },
        )
        return RefundResult(
            id=refund.id,
            amount=int(refund.amount or 0),
            status=str(refund.status or ""),
        )

    async def payment_metadata(self, payment_intent_id: str) -> dict[str, str]:
        return await asyncio.to_thread(self._payment_metadata_sync, payment_intent_id)

    def _payment_metadata_sync(self, payment_intent_id: str) -> dict[str, str]:
        try:
            intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=self._api_key)
        except stripe.StripeError as exc:
            logger.error(
                "stripe_payment_intent_retrieve_failed",
                extra={
                    "component": "payment_processor",
                    "action": "retrieve_payment_intent",
                    "result": "error",
                    "error_type": type(exc).__name__,
                },
            )
            raise PaymentProcessorError(f"Falha ao consultar pagamento: {exc}") from exc
        metadata = intent.metadata or {}
        return {str(key): str(value) for key, value in metadata.items()}

    async def account_payouts_enabled(self, account_id: str) -> bool:
        return await asyncio.to_thread(self._account_payouts_enabled_sync, account_id)

    def _account_payouts_enabled_sync(self, account_id: str) -> bool:
        try:
            account = stripe.Account.retrieve(account_id, api_key=self._api_key)
        except stripe.StripeError as exc:
            logger.error(
                "stripe_account_retrieve_failed",
                extra={
                    "component": "payment_processor",
                    "action": "retrieve_account",
                    "result": "error",
                    "error_type": type(exc).__name__,
                },
            )
            raise PaymentProcessorError(f"Falha ao consultar conta conectada: {exc}") from exc
        return bool(getattr(account, "payouts_enabled", False))

    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        return await asyncio.to_thread(self._create_checkout_session_sync, request)

    def _create_checkout_session_sync(self, request: CheckoutRequest) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                payment_method_types=["card"],
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": request.currency,
                            "product_data": {"name": request.product_name},
                            "unit_amount": request.amount_cents,
                        },
                        "quantity": 1,
                    }
                ],
                payment_intent_data={
                    "application_fee_amount": request.application_fee_cents,
                    "transfer_data": {"destination": request.destination_account_id},
                    "metadata": dict(request.metadata),
                },
                metadata=dict(request.metadata),
                success_url=request.success_url,
                cancel_url=request.cancel_url,
                api_key=self._api_key,
            )
        except stripe.StripeError as exc:
            logger.error(
                "stripe_checkout_session_failed",
                extra={
                    "component": "payment_processor",
                    "action": "create_checkout_session",
                    "result": "error",
                    "error_type": type(exc).__name__,
                    "stripe_code": getattr(exc, "code", None),
                },
            )
            raise PaymentProcessorError(
                f"Stripe recusou a sessão de checkout: {exc.user_message or exc}"
            ) from exc

        logger.info(
            "stripe_checkout_session_created",
            extra={
                "component": "payment_processor",
                "action": "create_checkout_session",
                "result": "ok",
            },
        )
        return CheckoutSession(id=session.id, url=str(session.url or ""))
