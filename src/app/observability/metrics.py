"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e agregadas
posteriormente (ex: log-based metrics do Cloud Logging).

Métricas suportadas:
- Transição: counter de mudanças de status de booking
- Reembolso: counter de reembolsos por tipo e resultado
- Latência: histogram de tempos de execução por componente/operação

Uso:
    from app.observability.metrics import record_latency, record_refund, record_transition

    record_transition("pending", "confirmed", "provider", booking_id=booking.id)
    record_refund("full", "succeeded", amount=5000, booking_id=booking.id)
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_transition(
    from_status: str,
    to_status: str,
    actor: str,
    *,
    booking_id: str | None = None,
) -> None:
    """Registra transição de status de booking.

    Args:
        from_status: Status anterior ("" para criação)
        to_status: Status gravado
        actor: Quem disparou (provider, booker, system)
        booking_id: Booking afetado
    """
    logger.info(
        "metric_booking_transition",
        extra={
            "metric_type": "transition",
            "component": "booking_lifecycle",
            "from_status": from_status,
            "to_status": to_status,
            "actor": actor,
            "booking_id": booking_id,
            "correlation_id": get_correlation_id(),
        },
    )


def record_refund(
    refund_type: str,
    result: str,
    *,
    amount: int | None = None,
    booking_id: str | None = None,
) -> None:
    """Registra emissão de reembolso.

    Args:
        refund_type: "full" ou "partial"
        result: Status do processador ou "error"
        amount: Valor em unidades menores, quando conhecido
        booking_id: Booking afetado
    """
    extra: dict[str, object] = {
        "metric_type": "refund",
        "component": "payment_processor",
        "refund_type": refund_type,
        "result": result,
        "booking_id": booking_id,
        "correlation_id": get_correlation_id(),
    }
    if amount is not None:
        extra["amount"] = amount
    logger.info("metric_refund", extra=extra)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "booking_lifecycle", "slot_finder")
        operation: Nome da operação (ex: "confirm", "available_slots")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (default: contexto atual)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )
