"""Protocolos e contratos do core da aplicação."""

from .clock import ClockProtocol, SystemClock
from .document_store import Document, DocumentStoreError, DocumentStoreProtocol
from .notifier import NotificationKind, NotificationPayload, NotifierProtocol
from .payment_processor import (
    FAILED_REFUND_STATUSES,
    CheckoutRequest,
    CheckoutSession,
    PaymentProcessorError,
    PaymentProcessorProtocol,
    RefundResult,
)

__all__ = [
    "FAILED_REFUND_STATUSES",
    "CheckoutRequest",
    "CheckoutSession",
    "ClockProtocol",
    "Document",
    "DocumentStoreError",
    "DocumentStoreProtocol",
    "NotificationKind",
    "NotificationPayload",
    "NotifierProtocol",
    "PaymentProcessorError",
    "PaymentProcessorProtocol",
    "RefundResult",
    "SystemClock",
]
