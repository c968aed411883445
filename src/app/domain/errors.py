"""Erros de domínio do ciclo de vida de bookings e disponibilidade.

Cada erro carrega um `code` estável (usado pela API para mapear status
HTTP) e um `reason` legível para quem chamou.
"""

from __future__ import annotations


class BookingError(Exception):
    """Erro base do domínio de agendamentos."""

    code = "booking_error"

    def __init__(self, reason: str, *, booking_id: str | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.booking_id = booking_id

    def to_dict(self) -> dict[str, str]:
        payload = {"error": self.code, "reason": self.reason}
        if self.booking_id:
            payload["booking_id"] = self.booking_id
        return payload


class NotFoundError(BookingError):
    """Booking, provider ou regra inexistente."""

    code = "not_found"


class UnauthorizedError(BookingError):
    """Quem chamou não é a parte esperada da transição."""

    code = "unauthorized"


class InvalidTransitionError(BookingError):
    """Transição não permitida a partir do estado atual."""

    code = "invalid_transition"


class AlreadyRefundedError(BookingError):
    """Booking já possui refund_id; um segundo reembolso nunca é emitido."""

    code = "already_refunded"


class RefundFailedError(BookingError):
    """Processador de pagamento recusou ou falhou o reembolso."""

    code = "refund_failed"


class CancellationWindowClosedError(BookingError):
    """Cancelamento solicitado dentro da janela mínima antes do início."""

    code = "cancellation_window_closed"


class SlotUnavailableError(BookingError):
    """Horário escolhido não está mais livre no momento da criação."""

    code = "slot_unavailable"


class InvalidBookingError(BookingError):
    """Dados de criação inconsistentes (intervalo ou duração)."""

    code = "invalid_booking"


class InvalidAvailabilityError(BookingError):
    """Regra de disponibilidade malformada."""

    code = "invalid_availability"


class ProviderNotReadyError(BookingError):
    """Provider sem conta conectada apta a receber repasses."""

    code = "provider_not_ready"


class CheckoutFailedError(BookingError):
    """Processador de pagamento não criou a sessão de checkout."""

    code = "checkout_failed"


__all__ = [
    "AlreadyRefundedError",
    "BookingError",
    "CancellationWindowClosedError",
    "CheckoutFailedError",
    "InvalidAvailabilityError",
    "InvalidBookingError",
    "InvalidTransitionError",
    "NotFoundError",
    "ProviderNotReadyError",
    "RefundFailedError",
    "SlotUnavailableError",
    "UnauthorizedError",
]
