"""Endpoints de transição e leitura de bookings.

Endpoints:
- GET /bookings/{booking_id}: booking com status efetivo (inclui "expired")
- POST /bookings/{booking_id}/confirm: provider aceita
- POST /bookings/{booking_id}/reject: provider recusa (reembolso integral)
- POST /bookings/{booking_id}/cancel: booker cancela (reembolso parcial)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.routes.responses import (
    MissingCallerError,
    bad_request_response,
    caller_id_from,
    error_response,
    unauthenticated_response,
)
from app.bootstrap import get_booking_lifecycle
from app.domain.errors import BookingError
from app.observability import CORRELATION_HEADER, correlation_scope
from app.protocols.clock import SystemClock

if TYPE_CHECKING:
    from app.domain.booking import Booking

logger = logging.getLogger(__name__)

router = APIRouter()

_clock = SystemClock()


def serialize_booking(booking: Booking) -> dict[str, Any]:
    """Booking em JSON; `status` reflete o estado derivado na leitura."""
    payload = booking.model_dump(mode="json", exclude_none=True)
    payload["status"] = booking.effective_status(_clock.now())
    return payload


async def _read_reason(request: Request) -> str | None:
    raw_body = await request.body()
    if not raw_body:
        return None
    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError as exc:
        raise ValueError("invalid_json") from exc
    if not isinstance(body, dict):
        raise ValueError("payload_not_object")
    reason = body.get("reason")
    if reason is None:
        return None
    return str(reason).strip() or None


@router.get("/{booking_id}")
async def get_booking(booking_id: str, request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            caller_id = caller_id_from(request)
            booking = await get_booking_lifecycle().get_booking(booking_id, caller_id)
        except MissingCallerError:
            return unauthenticated_response()
        except BookingError as exc:
            return error_response(exc)
        return JSONResponse(content=serialize_booking(booking))


@router.post("/{booking_id}/confirm")
async def confirm_booking(booking_id: str, request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            caller_id = caller_id_from(request)
            booking = await get_booking_lifecycle().confirm(booking_id, caller_id)
        except MissingCallerError:
            return unauthenticated_response()
        except BookingError as exc:
            return error_response(exc)
        return JSONResponse(content=serialize_booking(booking))


@router.post("/{booking_id}/reject")
async def reject_booking(booking_id: str, request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            caller_id = caller_id_from(request)
            reason = await _read_reason(request)
            booking = await get_booking_lifecycle().reject(booking_id, caller_id, reason)
        except MissingCallerError:
            return unauthenticated_response()
        except ValueError as exc:
            return bad_request_response(str(exc))
        except BookingError as exc:
            return error_response(exc)
        return JSONResponse(content=serialize_booking(booking))


@router.post("/{booking_id}/cancel")
async def cancel_booking(booking_id: str, request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            caller_id = caller_id_from(request)
            reason = await _read_reason(request)
            booking = await get_booking_lifecycle().cancel(booking_id, caller_id, reason)
        except MissingCallerError:
            return unauthenticated_response()
        except ValueError as exc:
            return bad_request_response(str(exc))
        except BookingError as exc:
            return error_response(exc)
        return JSONResponse(content=serialize_booking(booking))
