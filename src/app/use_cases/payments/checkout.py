"""Início do pagamento de um booking via sessão de checkout do Stripe.

O booking só nasce no webhook `checkout.session.completed`; aqui o slot
é validado, o valor e a taxa da plataforma são calculados e os metadados
que o webhook lê de volta são gravados na sessão e no PaymentIntent.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from app.domain.booking import TimeSlot
from app.domain.checkout import build_checkout_metadata
from app.domain.errors import (
    CheckoutFailedError,
    InvalidBookingError,
    NotFoundError,
    ProviderNotReadyError,
    SlotUnavailableError,
)
from app.protocols.clock import SystemClock
from app.protocols.payment_processor import CheckoutRequest, PaymentProcessorError
from app.services.conflict_filter import is_slot_available
from config.settings.payments import StripeSettings

if TYPE_CHECKING:
    from app.domain.user_profile import UserProfile
    from app.infra.stores.booking_store import BookingStore
    from app.infra.stores.profile_store import UserProfileStore
    from app.protocols.clock import ClockProtocol
    from app.protocols.payment_processor import CheckoutSession, PaymentProcessorProtocol

logger = logging.getLogger(__name__)

_CENT = Decimal("1")


def to_cents(amount: float) -> int:
    """Valor em unidades menores, arredondando meio centavo para cima."""
    return int((Decimal(str(amount)) * 100).quantize(_CENT, rounding=ROUND_HALF_UP))


def application_fee_cents(amount_cents: int, rate: float) -> int:
    """Taxa da plataforma: `rate` do valor, nunca menos que 1 centavo."""
    fee = (Decimal(amount_cents) * Decimal(str(rate))).quantize(_CENT, rounding=ROUND_HALF_UP)
    return max(int(fee), 1)


class BookingCheckout:
    """Cria a sessão de checkout de um slot para o booker autenticado."""

    def __init__(
        self,
        *,
        profiles: UserProfileStore,
        bookings: BookingStore,
        payment_processor: PaymentProcessorProtocol,
        clock: ClockProtocol | None = None,
        settings: StripeSettings | None = None,
    ) -> None:
        self._profiles = profiles
        self._bookings = bookings
        self._payments = payment_processor
        self._clock = clock or SystemClock()
        self._settings = settings or StripeSettings()

    async def start_checkout(
        self,
        booker_id: str,
        provider_id: str,
        start_utc: datetime,
        end_utc: datetime,
        *,
        return_base_url: str,
        notes: str | None = None,
    ) -> CheckoutSession:
        """Valida o pedido e devolve a sessão (id + URL de pagamento).

        Raises:
            NotFoundError: booker ou provider sem perfil
            ProviderNotReadyError: provider sem conta conectada ou sem repasses
            InvalidBookingError: intervalo, duração ou preço inválidos
            SlotUnavailableError: slot ocupado ou no passado
            CheckoutFailedError: processador não criou a sessão
        """
        booker = await self._profiles.get(booker_id)
        if booker is None:
            raise NotFoundError("Booker profile not found")
        provider = await self._profiles.get(provider_id)
        if provider is None:
            raise NotFoundError("Provider not found")
        if not provider.stripe_account_id:
            raise ProviderNotReadyError("Provider has not connected Stripe")

        slot = self._validate_slot(provider, start_utc, end_utc)
        if provider.price_per_session <= 0:
            raise InvalidBookingError("Provider não definiu o preço por sessão")

        existing = await self._bookings.list_for_provider(provider_id)
        if not is_slot_available(slot, existing, self._clock.now(), provider_id=provider_id):
            raise SlotUnavailableError("Horário não está mais disponível")

        await self._ensure_payouts_enabled(provider)

        amount = to_cents(provider.price_per_session)
        request = CheckoutRequest(
            destination_account_id=provider.stripe_account_id,
            amount_cents=amount,
            application_fee_cents=application_fee_cents(amount, self._settings.application_fee_rate),
            currency=self._settings.currency,
            product_name=f"Session with {provider.display_name or 'provider'}",
            success_url=f"{return_base_url}/book/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{return_base_url}/book/{provider_id}",
            metadata=build_checkout_metadata(
                provider_id=provider_id,
                provider_name=provider.display_name,
                booker_id=booker_id,
                booker_name=booker.display_name,
                booker_email=booker.email,
                start_utc=slot.start_utc,
                end_utc=slot.end_utc,
                session_minutes=provider.default_session_minutes,
                price=provider.price_per_session,
                notes=notes,
            ),
        )
        try:
            session = await self._payments.create_checkout_session(request)
        except PaymentProcessorError as exc:
            raise CheckoutFailedError(str(exc)) from exc

        logger.info(
            "checkout_session_started",
            extra={
                "component": "checkout",
                "action": "start_checkout",
                "result": "ok",
                "provider_id": provider_id,
                "amount_cents": amount,
            },
        )
        return session

    @staticmethod
    def _validate_slot(provider: UserProfile, start_utc: datetime, end_utc: datetime) -> TimeSlot:
        if start_utc.tzinfo is None or end_utc.tzinfo is None:
            raise InvalidBookingError("Horários devem incluir timezone")
        if start_utc >= end_utc:
            raise InvalidBookingError("Início do slot deve ser anterior ao fim")
        if end_utc - start_utc != timedelta(minutes=provider.default_session_minutes):
            raise InvalidBookingError(
                f"Slot deve durar exatamente {provider.default_session_minutes} minutos"
            )
        return TimeSlot(start_utc=start_utc, end_utc=end_utc)

    async def _ensure_payouts_enabled(self, provider: UserProfile) -> None:
        account_id = provider.stripe_account_id or ""
        try:
            enabled = await self._payments.account_payouts_enabled(account_id)
        except PaymentProcessorError as exc:
            raise CheckoutFailedError(str(exc)) from exc
        if enabled:
            return

        if provider.onboarding_complete:
            await self._profiles.update(
                provider.id,
                {"onboarding_complete": False, "updated_at": self._clock.now()},
            )
        logger.warning(
            "checkout_provider_not_ready",
            extra={"component": "checkout", "action": "start_checkout", "result": "payouts_disabled"},
        )
        raise ProviderNotReadyError(
            "Provider's Stripe account is not yet ready to receive payments"
        )


__all__ = ["BookingCheckout", "application_fee_cents", "to_cents"]
