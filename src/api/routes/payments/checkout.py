"""Endpoint de início de pagamento.

Endpoints:
- POST /checkout: cria a sessão de checkout do Stripe para um slot

Body: {"provider_id", "start_utc", "end_utc", "notes"?}. O preço e a
duração vêm do perfil do provider, nunca do cliente.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.routes.responses import (
    MissingCallerError,
    bad_request_response,
    caller_id_from,
    error_response,
    unauthenticated_response,
)
from app.bootstrap import get_booking_checkout
from app.domain.errors import BookingError
from app.observability import CORRELATION_HEADER, correlation_scope
from config.settings import get_stripe_settings

logger = logging.getLogger(__name__)

router = APIRouter()

_REQUIRED_FIELDS = ("provider_id", "start_utc", "end_utc")


async def _read_checkout_body(request: Request) -> dict[str, Any]:
    raw_body = await request.body()
    try:
        body = json.loads(raw_body or b"{}")
    except json.JSONDecodeError as exc:
        raise ValueError("invalid_json") from exc
    if not isinstance(body, dict):
        raise ValueError("payload_not_object")
    missing = [name for name in _REQUIRED_FIELDS if not body.get(name)]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")
    return body


def _parse_instant(value: Any, name: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"{name} inválido: {value}") from exc
    if parsed.tzinfo is None:
        raise ValueError(f"{name} deve incluir timezone")
    return parsed


def _return_base_url(request: Request) -> str:
    # URL configurada tem precedência sobre o Origin do navegador
    configured = get_stripe_settings().checkout_return_base_url
    return configured or (request.headers.get("origin") or "").rstrip("/")


@router.post("")
async def start_checkout(request: Request) -> JSONResponse:
    """Devolve a URL de pagamento hospedada pelo Stripe."""
    with correlation_scope(request.headers.get(CORRELATION_HEADER)):
        try:
            caller_id = caller_id_from(request)
            body = await _read_checkout_body(request)
            start_utc = _parse_instant(body["start_utc"], "start_utc")
            end_utc = _parse_instant(body["end_utc"], "end_utc")
            return_base_url = _return_base_url(request)
            if not return_base_url:
                raise ValueError("Cabeçalho Origin ausente")
            notes = body.get("notes")
            session = await get_booking_checkout().start_checkout(
                caller_id,
                str(body["provider_id"]),
                start_utc,
                end_utc,
                return_base_url=return_base_url,
                notes=str(notes) if notes else None,
            )
        except MissingCallerError:
            return unauthenticated_response()
        except BookingError as exc:
            return error_response(exc)
        except ValueError as exc:
            return bad_request_response(str(exc))
        return JSONResponse(content={"url": session.url, "session_id": session.id})
