"""Processadores de pagamento."""

from app.infra.payments.stripe_payment_processor import StripePaymentProcessor

__all__ = ["StripePaymentProcessor"]
