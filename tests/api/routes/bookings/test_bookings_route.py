"""Testes dos endpoints de bookings (chamada direta das rotas)."""

from __future__ import annotations

from datetime import timedelta

import pytest

import api.routes.bookings.router as bookings_router
from fsm import BookingStatus
from tests.fakes.builders import BOOKER_ID, PROVIDER_ID, BookingWorld, build_world, make_booking
from tests.fakes.http import build_request, json_body


async def _world(monkeypatch) -> BookingWorld:
    world = build_world()
    await world.seed_parties()
    await world.bookings.create(make_booking())
    monkeypatch.setattr(bookings_router, "get_booking_lifecycle", lambda: world.lifecycle)
    monkeypatch.setattr(bookings_router, "_clock", world.clock)
    return world


def _request(path: str, caller: str | None, body: dict | bytes | None = None, method: str = "POST"):
    headers = {"x-correlation-id": "req-1"}
    if caller:
        headers["x-user-id"] = caller
    return build_request(method, path, headers=headers, body=body)


@pytest.mark.asyncio
async def test_get_booking_returns_effective_status(monkeypatch) -> None:
    world = await _world(monkeypatch)

    response = await bookings_router.get_booking("bk_1", _request("/bookings/bk_1", BOOKER_ID, method="GET"))

    assert response.status_code == 200
    assert json_body(response)["status"] == "pending"

    world.clock.advance(days=2)
    response = await bookings_router.get_booking("bk_1", _request("/bookings/bk_1", BOOKER_ID, method="GET"))
    assert json_body(response)["status"] == "expired"


@pytest.mark.asyncio
async def test_missing_caller_is_unauthenticated(monkeypatch) -> None:
    await _world(monkeypatch)

    response = await bookings_router.confirm_booking("bk_1", _request("/bookings/bk_1/confirm", None))

    assert response.status_code == 401
    assert json_body(response)["error"] == "unauthenticated"


@pytest.mark.asyncio
async def test_confirm_returns_confirmed_booking(monkeypatch) -> None:
    await _world(monkeypatch)

    response = await bookings_router.confirm_booking("bk_1", _request("/bookings/bk_1/confirm", PROVIDER_ID))

    payload = json_body(response)
    assert response.status_code == 200
    assert payload["status"] == "confirmed"
    assert payload["meeting_link"] == "https://meet.jit.si/bookit-bk_1"


@pytest.mark.asyncio
async def test_domain_errors_map_to_http_status(monkeypatch) -> None:
    await _world(monkeypatch)

    forbidden = await bookings_router.confirm_booking("bk_1", _request("/bookings/bk_1/confirm", BOOKER_ID))
    missing = await bookings_router.confirm_booking("nope", _request("/bookings/nope/confirm", PROVIDER_ID))
    invalid = await bookings_router.cancel_booking("bk_1", _request("/bookings/bk_1/cancel", BOOKER_ID))

    assert forbidden.status_code == 403
    assert json_body(forbidden)["error"] == "unauthorized"
    assert missing.status_code == 404
    assert invalid.status_code == 409
    assert json_body(invalid)["error"] == "invalid_transition"


@pytest.mark.asyncio
async def test_reject_passes_reason_and_second_reject_conflicts(monkeypatch) -> None:
    await _world(monkeypatch)

    first = await bookings_router.reject_booking(
        "bk_1", _request("/bookings/bk_1/reject", PROVIDER_ID, {"reason": "Sem agenda"})
    )
    second = await bookings_router.reject_booking("bk_1", _request("/bookings/bk_1/reject", PROVIDER_ID))

    assert first.status_code == 200
    assert json_body(first)["cancellation_reason"] == "Sem agenda"
    assert json_body(first)["refund_type"] == "full"
    assert second.status_code == 409
    assert json_body(second)["error"] == "already_refunded"


@pytest.mark.asyncio
async def test_refund_failure_is_bad_gateway(monkeypatch) -> None:
    world = await _world(monkeypatch)

    world.payments.status = "canceled"

    response = await bookings_router.reject_booking("bk_1", _request("/bookings/bk_1/reject", PROVIDER_ID))

    assert response.status_code == 502
    assert (await world.stored("bk_1")).status == BookingStatus.PENDING


@pytest.mark.asyncio
async def test_cancel_inside_cutoff_conflicts(monkeypatch) -> None:
    world = await _world(monkeypatch)

    await world.lifecycle.confirm("bk_1", PROVIDER_ID)
    booking = await world.stored("bk_1")
    world.clock.set(booking.start_utc - timedelta(minutes=30))

    response = await bookings_router.cancel_booking("bk_1", _request("/bookings/bk_1/cancel", BOOKER_ID))

    assert response.status_code == 409
    assert json_body(response)["error"] == "cancellation_window_closed"


@pytest.mark.asyncio
async def test_malformed_body_is_bad_request(monkeypatch) -> None:
    world = await _world(monkeypatch)

    response = await bookings_router.reject_booking(
        "bk_1", _request("/bookings/bk_1/reject", PROVIDER_ID, b"{not json")
    )

    assert response.status_code == 400
    assert world.payments.calls == []
