"""Emissão de reembolso e campos de bookkeeping gravados no booking.

Chave de idempotência: `{kind}_refund_{booking_id}` na primeira tentativa e
`{kind}_refund_{booking_id}_{n}` a partir da n-ésima tentativa que sucede
uma falha. O Stripe devolve o mesmo erro por 24h para a mesma chave, então
um novo reject/cancel após falha precisa de chave nova. O Stripe recusa
reembolsar um pagamento já reembolsado, o que limita a nova chave a um
único reembolso efetivo.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.errors import RefundFailedError
from app.observability.metrics import record_refund
from app.protocols.payment_processor import PaymentProcessorError

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.booking import Booking, RefundKind
    from app.protocols.payment_processor import PaymentProcessorProtocol, RefundResult

logger = logging.getLogger(__name__)

# (refund_application_fee, reverse_transfer) por tipo de reembolso
REFUND_POLICIES: dict[str, tuple[bool, bool]] = {
    "full": (True, True),
    "partial": (False, True),
}


def refund_idempotency_key(kind: RefundKind, booking_id: str, attempt: int = 0) -> str:
    key = f"{kind}_refund_{booking_id}"
    return f"{key}_{attempt}" if attempt else key


async def issue_refund(
    processor: PaymentProcessorProtocol,
    booking: Booking,
    kind: RefundKind,
) -> RefundResult:
    """Emite o reembolso do pagamento vinculado ao booking.

    Raises:
        RefundFailedError: sem pagamento vinculado, erro do processador ou
            reembolso com status failed/canceled
    """
    if not booking.payment_intent_id:
        raise RefundFailedError("No payment found", booking_id=booking.id)
    return await refund_payment(
        processor,
        booking_id=booking.id,
        payment_intent_id=booking.payment_intent_id,
        kind=kind,
        attempt=booking.refund_attempts,
    )


async def refund_payment(
    processor: PaymentProcessorProtocol,
    *,
    booking_id: str,
    payment_intent_id: str,
    kind: RefundKind,
    attempt: int = 0,
) -> RefundResult:
    """Reembolsa um pagamento capturado, com ou sem booking gravado."""
    refund_application_fee, reverse_transfer = REFUND_POLICIES[kind]
    try:
        result = await processor.refund(
            payment_intent_id,
            refund_application_fee=refund_application_fee,
            reverse_transfer=reverse_transfer,
            idempotency_key=refund_idempotency_key(kind, booking_id, attempt),
        )
    except PaymentProcessorError as exc:
        record_refund(kind, "error", booking_id=booking_id)
        raise RefundFailedError(str(exc), booking_id=booking_id) from exc

    record_refund(kind, result.status, amount=result.amount, booking_id=booking_id)
    if result.failed:
        logger.error(
            "refund_not_completed",
            extra={
                "component": "booking_lifecycle",
                "action": f"{kind}_refund",
                "result": result.status,
                "booking_id": booking_id,
            },
        )
        raise RefundFailedError(
            f"Reembolso retornou status {result.status}",
            booking_id=booking_id,
        )
    return result


def refund_fields(result: RefundResult, kind: RefundKind, now: datetime) -> dict[str, Any]:
    """Campos de reembolso gravados junto com a mudança de status."""
    return {
        "refund_id": result.id,
        "refund_amount": result.amount,
        "refund_status": result.status,
        "refund_type": kind,
        "refunded_at": now,
    }
