"""Endpoints de slots e regras de disponibilidade de providers.

Endpoints:
- GET /providers/{provider_id}/slots?date=YYYY-MM-DD&days=N
- GET /providers/{provider_id}/availability
- POST /providers/{provider_id}/availability/recurring
- POST /providers/{provider_id}/availability/exclusions
- DELETE /providers/{provider_id}/availability/{rule_id}
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.routes.responses import (
    MissingCallerError,
    bad_request_response,
    caller_id_from,
    error_response,
    unauthenticated_response,
)
from app.bootstrap import get_availability_manager, get_slot_finder
from app.domain.errors import BookingError
from app.observability import CORRELATION_HEADER, correlation_scope
from app.protocols.clock import SystemClock
from app.services.time_arithmetic import coerce_date

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_DAYS = 90

_clock = SystemClock()


def _parse_days(raw: str | None) -> int | None:
    if raw is None or raw == "":
        return None
    days = int(raw)
    if not 1 <= days <= MAX_DAYS:
        raise ValueError(f"days deve estar entre 1 e {MAX_DAYS}")
    return days


async def _read_json(request: Request) -> dict[str, Any]:
    raw_body = await request.body()
    try:
        body = json.loads(raw_body or b"{}")
    except json.JSONDecodeError as exc:
        raise ValueError("invalid_json") from exc
    if not isinstance(body, dict):
        raise ValueError("payload_not_object")
    return body


@router.get("/{provider_id}/slots")
async def list_slots(provider_id: str, request: Request) -> JSONResponse:
    """Slots reserváveis por data, a partir de `date` (default: hoje UTC)."""
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            raw_date = request.query_params.get("date")
            start = coerce_date(raw_date) if raw_date else _clock.now().date()
            days = _parse_days(request.query_params.get("days"))
        except ValueError as exc:
            return bad_request_response(str(exc))

        try:
            slots_by_day = await get_slot_finder().available_slots_for_range(
                provider_id, start, days
            )
        except BookingError as exc:
            return error_response(exc)

        return JSONResponse(
            content={
                "provider_id": provider_id,
                "days": {
                    day: [slot.model_dump(mode="json") for slot in slots]
                    for day, slots in slots_by_day.items()
                },
            }
        )


@router.get("/{provider_id}/availability")
async def list_availability(provider_id: str, request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        recurring, exclusions = await get_availability_manager().list_rules(provider_id)
        return JSONResponse(
            content={
                "recurring": [rule.model_dump(mode="json") for rule in recurring],
                "exclusions": [rule.model_dump(mode="json", exclude_none=True) for rule in exclusions],
            }
        )


@router.post("/{provider_id}/availability/recurring")
async def add_recurring_rule(provider_id: str, request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            caller_id = caller_id_from(request)
            body = await _read_json(request)
            rule = await get_availability_manager().add_recurring_rule(
                provider_id,
                caller_id,
                body.get("weekday"),
                body.get("start_time"),
                body.get("end_time"),
            )
        except MissingCallerError:
            return unauthenticated_response()
        except BookingError as exc:
            return error_response(exc)
        except ValueError as exc:
            return bad_request_response(str(exc))
        return JSONResponse(content=rule.model_dump(mode="json"), status_code=status.HTTP_201_CREATED)


@router.post("/{provider_id}/availability/exclusions")
async def add_exclusion(provider_id: str, request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            caller_id = caller_id_from(request)
            body = await _read_json(request)
            rule = await get_availability_manager().add_exclusion(
                provider_id,
                caller_id,
                body.get("date"),
                body.get("reason"),
            )
        except MissingCallerError:
            return unauthenticated_response()
        except BookingError as exc:
            return error_response(exc)
        except ValueError as exc:
            return bad_request_response(str(exc))
        return JSONResponse(
            content=rule.model_dump(mode="json", exclude_none=True),
            status_code=status.HTTP_201_CREATED,
        )


@router.delete("/{provider_id}/availability/{rule_id}")
async def delete_rule(provider_id: str, rule_id: str, request: Request) -> JSONResponse:
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            caller_id = caller_id_from(request)
            await get_availability_manager().delete_rule(rule_id, caller_id)
        except MissingCallerError:
            return unauthenticated_response()
        except BookingError as exc:
            return error_response(exc)
        return JSONResponse(content={"deleted": rule_id})
