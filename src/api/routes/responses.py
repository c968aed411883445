"""Respostas HTTP compartilhadas: erros de domínio e identidade do chamador."""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.domain.errors import (
    AlreadyRefundedError,
    BookingError,
    CancellationWindowClosedError,
    CheckoutFailedError,
    InvalidAvailabilityError,
    InvalidBookingError,
    InvalidTransitionError,
    NotFoundError,
    ProviderNotReadyError,
    RefundFailedError,
    SlotUnavailableError,
    UnauthorizedError,
)
from app.observability import get_correlation_id

logger = logging.getLogger(__name__)

# Cabeçalho preenchido pela camada de autenticação à frente do serviço
USER_ID_HEADER = "x-user-id"

ERROR_STATUS: dict[type[BookingError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    AlreadyRefundedError: status.HTTP_409_CONFLICT,
    RefundFailedError: status.HTTP_502_BAD_GATEWAY,
    CancellationWindowClosedError: status.HTTP_409_CONFLICT,
    SlotUnavailableError: status.HTTP_409_CONFLICT,
    InvalidBookingError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidAvailabilityError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ProviderNotReadyError: status.HTTP_400_BAD_REQUEST,
    CheckoutFailedError: status.HTTP_502_BAD_GATEWAY,
}


class MissingCallerError(Exception):
    """Request sem identidade do chamador."""


def caller_id_from(request: Request) -> str:
    """Retorna o id do usuário autenticado.

    Raises:
        MissingCallerError: cabeçalho ausente ou vazio
    """
    caller_id = (request.headers.get(USER_ID_HEADER) or "").strip()
    if not caller_id:
        raise MissingCallerError(USER_ID_HEADER)
    return caller_id


def unauthenticated_response() -> JSONResponse:
    return JSONResponse(
        content={"error": "unauthenticated", "reason": f"Cabeçalho {USER_ID_HEADER} ausente"},
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


def error_response(exc: BookingError) -> JSONResponse:
    """Mapeia erro de domínio para status HTTP e corpo {"error", "reason"}."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(
        "request_rejected",
        extra={
            "component": "api",
            "result": exc.code,
            "booking_id": exc.booking_id,
            "correlation_id": get_correlation_id(),
        },
    )
    return JSONResponse(content=exc.to_dict(), status_code=status_code)


def bad_request_response(reason: str, error: str = "bad_request") -> JSONResponse:
    return JSONResponse(
        content={"error": error, "reason": reason},
        status_code=status.HTTP_400_BAD_REQUEST,
    )
