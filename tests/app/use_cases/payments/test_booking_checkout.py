"""Testes do BookingCheckout (sessão de pagamento de um slot)."""

from __future__ import annotations

from datetime import timedelta

import pytest

from api.connectors.stripe.webhook import capture_from_metadata
from app.domain.errors import (
    CheckoutFailedError,
    InvalidBookingError,
    NotFoundError,
    ProviderNotReadyError,
    SlotUnavailableError,
)
from app.use_cases.payments import BookingCheckout
from app.use_cases.payments.checkout import application_fee_cents, to_cents
from config.settings.payments import StripeSettings
from fsm import BookingStatus
from tests.fakes.builders import (
    BOOKER_ID,
    NOW,
    PROVIDER_ID,
    BookingWorld,
    build_world,
    make_booking,
)

START = NOW + timedelta(days=1)
END = START + timedelta(minutes=60)
ORIGIN = "https://bookit.example"


async def _checkout(**provider_overrides) -> tuple[BookingWorld, BookingCheckout]:
    world = build_world()
    overrides = {
        "stripe_account_id": "acct_1",
        "price_per_session": 50.0,
        "onboarding_complete": True,
        **provider_overrides,
    }
    await world.seed_parties(**overrides)
    checkout = BookingCheckout(
        profiles=world.profiles,
        bookings=world.bookings,
        payment_processor=world.payments,
        clock=world.clock,
        settings=StripeSettings(),
    )
    return world, checkout


async def _start(checkout: BookingCheckout, **kwargs):
    params = {"return_base_url": ORIGIN, **kwargs}
    start = params.pop("start", START)
    end = params.pop("end", END)
    return await checkout.start_checkout(BOOKER_ID, PROVIDER_ID, start, end, **params)


class TestStartCheckout:
    @pytest.mark.asyncio
    async def test_session_charges_provider_price_with_platform_fee(self) -> None:
        world, checkout = await _checkout()

        session = await _start(checkout, notes="Primeira consulta")

        assert session.url == "https://checkout.stripe.test/cs_1"
        request = world.payments.sessions[0]
        assert request.destination_account_id == "acct_1"
        assert request.amount_cents == 5000
        assert request.application_fee_cents == 50
        assert request.currency == "eur"
        assert request.product_name == "Session with Prov_1"
        assert request.success_url == f"{ORIGIN}/book/success?session_id={{CHECKOUT_SESSION_ID}}"
        assert request.cancel_url == f"{ORIGIN}/book/{PROVIDER_ID}"

    @pytest.mark.asyncio
    async def test_metadata_is_readable_by_the_webhook(self) -> None:
        world, checkout = await _checkout()

        await _start(checkout, notes="Primeira consulta")

        capture = capture_from_metadata(world.payments.sessions[0].metadata, "pi_1")
        assert capture.provider_id == PROVIDER_ID
        assert capture.booker_id == BOOKER_ID
        assert capture.booker_email == f"{BOOKER_ID}@example.com"
        assert (capture.start_utc, capture.end_utc) == (START, END)
        assert capture.session_minutes == 60
        assert capture.price == 50.0
        assert capture.notes == "Primeira consulta"

    @pytest.mark.asyncio
    async def test_provider_without_connected_account_is_not_ready(self) -> None:
        world, checkout = await _checkout(stripe_account_id=None)

        with pytest.raises(ProviderNotReadyError, match="has not connected Stripe"):
            await _start(checkout)
        assert world.payments.sessions == []

    @pytest.mark.asyncio
    async def test_payouts_disabled_resets_onboarding_flag(self) -> None:
        world, checkout = await _checkout()
        world.payments.payouts_enabled = False

        with pytest.raises(ProviderNotReadyError):
            await _start(checkout)

        provider = await world.profiles.get(PROVIDER_ID)
        assert provider is not None
        assert provider.onboarding_complete is False
        assert world.payments.sessions == []

    @pytest.mark.asyncio
    async def test_duration_must_match_provider_session(self) -> None:
        world, checkout = await _checkout()

        with pytest.raises(InvalidBookingError):
            await _start(checkout, end=START + timedelta(minutes=90))
        assert world.payments.sessions == []

    @pytest.mark.asyncio
    async def test_provider_without_price_cannot_charge(self) -> None:
        _, checkout = await _checkout(price_per_session=0.0)

        with pytest.raises(InvalidBookingError):
            await _start(checkout)

    @pytest.mark.asyncio
    async def test_taken_slot_is_unavailable(self) -> None:
        world, checkout = await _checkout()
        await world.bookings.create(
            make_booking("held", start=START, status=BookingStatus.CONFIRMED)
        )

        with pytest.raises(SlotUnavailableError):
            await _start(checkout)
        assert world.payments.sessions == []

    @pytest.mark.asyncio
    async def test_unknown_booker_is_not_found(self) -> None:
        _, checkout = await _checkout()

        with pytest.raises(NotFoundError):
            await checkout.start_checkout("ghost", PROVIDER_ID, START, END, return_base_url=ORIGIN)

    @pytest.mark.asyncio
    async def test_processor_failure_becomes_checkout_failed(self) -> None:
        world, checkout = await _checkout()
        world.payments.checkout_error = "api_connection_error"

        with pytest.raises(CheckoutFailedError):
            await _start(checkout)


class TestAmounts:
    @pytest.mark.parametrize(
        ("price", "cents"),
        [(50.0, 5000), (19.99, 1999), (0.015, 2), (12.345, 1235)],
    )
    def test_to_cents_rounds_half_up(self, price: float, cents: int) -> None:
        assert to_cents(price) == cents

    @pytest.mark.parametrize(
        ("amount", "fee"),
        [(5000, 50), (1250, 13), (30, 1), (0, 1)],
    )
    def test_fee_is_one_percent_with_one_cent_floor(self, amount: int, fee: int) -> None:
        assert application_fee_cents(amount, 0.01) == fee
