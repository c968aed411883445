"""Use case do ciclo de vida de bookings.

Grafo de status (ver fsm/):
    pending -> confirmed | rejected
    confirmed -> cancelled

Regras de efeitos colaterais:
- reembolso sempre antes da gravação do status; se falhar, o status não muda
- status e campos de reembolso são gravados numa única escrita
- notificação e conversa falham em silêncio (log) sem desfazer a transição
- refund_id presente bloqueia qualquer novo reembolso
- pagamento capturado que não vira booking pendente é reembolsado antes do erro
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from app.domain.booking import Booking
from app.domain.errors import (
    AlreadyRefundedError,
    CancellationWindowClosedError,
    InvalidBookingError,
    InvalidTransitionError,
    NotFoundError,
    RefundFailedError,
    SlotUnavailableError,
    UnauthorizedError,
)
from app.observability.metrics import record_latency, record_transition
from app.protocols.clock import SystemClock
from app.protocols.notifier import NotificationKind
from app.services.conflict_filter import is_slot_available
from app.use_cases.bookings._notifications import notify_if_opted_in
from app.use_cases.bookings._refunds import issue_refund, refund_fields, refund_payment
from config.logging import log_side_effect_failure
from config.settings.booking import BookingSettings
from fsm import EXPIRED_READ_STATE, BookingStatus, create_fsm

if TYPE_CHECKING:
    from app.domain.booking import PaymentCapture, RefundKind
    from app.domain.user_profile import UserProfile
    from app.infra.stores.booking_store import BookingStore
    from app.infra.stores.conversation_store import ConversationStore
    from app.infra.stores.profile_store import UserProfileStore
    from app.protocols.clock import ClockProtocol
    from app.protocols.notifier import NotifierProtocol
    from app.protocols.payment_processor import PaymentProcessorProtocol
    from fsm import Actor, StateTransition

logger = logging.getLogger(__name__)

SLOT_UNAVAILABLE_REASON = "slot_unavailable"


def booking_id_for_payment(payment_intent_id: str) -> str:
    """Id estável por pagamento: reentregas reusam a mesma chave de reembolso."""
    return uuid.uuid5(uuid.NAMESPACE_URL, f"bookit:{payment_intent_id}").hex


class BookingLifecycle:
    """Criação e transições de bookings com reembolso e notificação."""

    def __init__(
        self,
        *,
        bookings: BookingStore,
        profiles: UserProfileStore,
        conversations: ConversationStore,
        payment_processor: PaymentProcessorProtocol,
        notifier: NotifierProtocol,
        clock: ClockProtocol | None = None,
        settings: BookingSettings | None = None,
    ) -> None:
        self._bookings = bookings
        self._profiles = profiles
        self._conversations = conversations
        self._payments = payment_processor
        self._notifier = notifier
        self._clock = clock or SystemClock()
        self._settings = settings or BookingSettings()

    # ------------------------------------------------------------------
    # Criação
    # ------------------------------------------------------------------

    async def create_from_payment(self, capture: PaymentCapture) -> Booking:
        """Cria booking pendente a partir de um pagamento capturado.

        Idempotente por payment_intent_id: reentrega do webhook devolve o
        booking existente sem novos efeitos.

        Raises:
            InvalidBookingError: intervalo inválido ou incompatível com a duração
                (reembolso integral emitido)
            SlotUnavailableError: slot ocupado ou no passado (reembolso integral emitido)
            RefundFailedError: o reembolso de uma captura recusada falhou; nada
                é gravado e a reentrega tenta de novo
        """
        started = time.perf_counter()
        existing = await self._bookings.find_by_payment_intent(capture.payment_intent_id)
        if existing is not None:
            logger.info(
                "booking_create_duplicate",
                extra={
                    "component": "booking_lifecycle",
                    "action": "create",
                    "result": "duplicate",
                    "booking_id": existing.id,
                },
            )
            return existing

        booking_id = booking_id_for_payment(capture.payment_intent_id)
        try:
            self._validate_capture(capture)
        except InvalidBookingError:
            logger.warning(
                "booking_capture_invalid",
                extra={
                    "component": "booking_lifecycle",
                    "action": "create",
                    "result": "invalid",
                    "booking_id": booking_id,
                },
            )
            await refund_payment(
                self._payments,
                booking_id=booking_id,
                payment_intent_id=capture.payment_intent_id,
                kind="full",
            )
            raise

        now = self._clock.now()
        booking = Booking(
            id=booking_id,
            provider_id=capture.provider_id,
            provider_name=capture.provider_name,
            booker_id=capture.booker_id,
            booker_name=capture.booker_name,
            booker_email=capture.booker_email,
            start_utc=capture.start_utc,
            end_utc=capture.end_utc,
            status=BookingStatus.PENDING,
            session_minutes=capture.session_minutes,
            price_at_booking=capture.price,
            notes=capture.notes,
            payment_intent_id=capture.payment_intent_id,
            created_at=now,
            updated_at=now,
        )

        if self._settings.revalidate_on_create:
            await self._ensure_slot_free(booking, now)

        await self._bookings.create(booking)
        record_transition("", BookingStatus.PENDING.value, "system", booking_id=booking.id)
        logger.info(
            "booking_created",
            extra={
                "component": "booking_lifecycle",
                "action": "create",
                "result": "ok",
                "booking_id": booking.id,
            },
        )

        provider = await self._recipient(booking.provider_id, booking.id)
        await notify_if_opted_in(
            self._notifier,
            NotificationKind.NEW_BOOKING_REQUEST,
            booking,
            provider,
        )
        record_latency("booking_lifecycle", "create", (time.perf_counter() - started) * 1000)
        return booking

    @staticmethod
    def _validate_capture(capture: PaymentCapture) -> None:
        if capture.start_utc >= capture.end_utc:
            raise InvalidBookingError("Início do slot deve ser anterior ao fim")
        if capture.end_utc - capture.start_utc != timedelta(minutes=capture.session_minutes):
            raise InvalidBookingError(
                f"Slot deve durar exatamente {capture.session_minutes} minutos"
            )

    async def _ensure_slot_free(self, booking: Booking, now: datetime) -> None:
        """Revalida o slot; em conflito reembolsa e grava o booking como rejeitado.

        Se o reembolso falhar nada é gravado: a reentrega do webhook encontra
        o slot ainda ocupado e tenta o reembolso de novo.
        """
        current = await self._bookings.list_for_provider(booking.provider_id)
        if is_slot_available(booking.slot, current, now, provider_id=booking.provider_id):
            return

        logger.warning(
            "booking_slot_unavailable",
            extra={
                "component": "booking_lifecycle",
                "action": "create",
                "result": "conflict",
                "booking_id": booking.id,
            },
        )
        refund = await issue_refund(self._payments, booking, "full")
        rejected = booking.model_copy(
            update={
                "status": BookingStatus.REJECTED,
                "cancellation_reason": SLOT_UNAVAILABLE_REASON,
                **refund_fields(refund, "full", now),
            }
        )
        await self._bookings.create(rejected)
        record_transition("", BookingStatus.REJECTED.value, "system", booking_id=rejected.id)
        raise SlotUnavailableError(
            "Horário não está mais disponível; pagamento reembolsado",
            booking_id=rejected.id,
        )

    # ------------------------------------------------------------------
    # Transições
    # ------------------------------------------------------------------

    async def confirm(self, booking_id: str, caller_id: str) -> Booking:
        """Provider aceita um booking pendente.

        Gera o link da reunião, grava status + link, garante a conversa do
        booking e notifica o booker com o link.
        """
        booking = await self._load(booking_id)
        self._authorize(booking, caller_id, "provider")
        now = self._clock.now()
        if booking.effective_status(now) == EXPIRED_READ_STATE:
            raise InvalidTransitionError(
                "Booking expirado: o horário já começou", booking_id=booking.id
            )
        transition = self._transition(booking, BookingStatus.CONFIRMED, "provider", "confirm")

        updates: dict[str, Any] = {
            "status": BookingStatus.CONFIRMED,
            "meeting_link": booking.meeting_link
            or f"{self._settings.meeting_link_base_url}{booking.id}",
            "updated_at": now,
        }
        await self._bookings.update(booking.id, updates)
        confirmed = booking.model_copy(update=updates)
        self._log_transition(transition, confirmed.id)

        try:
            await self._conversations.get_or_create(confirmed)
        except Exception as exc:
            log_side_effect_failure(
                logger,
                "conversations",
                "conversation_failed",
                exc,
                booking_id=booking.id,
            )

        booker = await self._recipient(confirmed.booker_id, confirmed.id)
        await notify_if_opted_in(
            self._notifier,
            NotificationKind.BOOKING_CONFIRMED,
            confirmed,
            booker,
            fallback_email=confirmed.booker_email,
        )
        return confirmed

    async def reject(
        self,
        booking_id: str,
        caller_id: str,
        reason: str | None = None,
    ) -> Booking:
        """Provider recusa um booking pendente com reembolso integral.

        Ordem das verificações: autorização, reembolso prévio, transição,
        vínculo com pagamento.
        """
        booking = await self._load(booking_id)
        self._authorize(booking, caller_id, "provider")
        self._ensure_not_refunded(booking)
        transition = self._transition(booking, BookingStatus.REJECTED, "provider", "reject")

        updates = await self._refund_updates(booking, "full")
        updates["status"] = BookingStatus.REJECTED
        if reason:
            updates["cancellation_reason"] = reason
        await self._bookings.update(booking.id, updates)
        rejected = booking.model_copy(update=updates)
        self._log_transition(transition, rejected.id)

        booker = await self._recipient(rejected.booker_id, rejected.id)
        await notify_if_opted_in(
            self._notifier,
            NotificationKind.BOOKING_DECLINED,
            rejected,
            booker,
            fallback_email=rejected.booker_email,
            reason=reason,
        )
        return rejected

    async def cancel(
        self,
        booking_id: str,
        caller_id: str,
        reason: str | None = None,
    ) -> Booking:
        """Booker cancela um booking confirmado com reembolso parcial.

        Permitido apenas até `cancellation_cutoff_minutes` antes do início.
        """
        booking = await self._load(booking_id)
        self._authorize(booking, caller_id, "booker")
        self._ensure_not_refunded(booking)
        transition = self._transition(booking, BookingStatus.CANCELLED, "booker", "cancel")

        now = self._clock.now()
        cutoff = booking.start_utc - timedelta(minutes=self._settings.cancellation_cutoff_minutes)
        if not now < cutoff:
            raise CancellationWindowClosedError(
                "Cancelamento permitido somente até "
                f"{self._settings.cancellation_cutoff_minutes} minutos antes do início",
                booking_id=booking.id,
            )

        updates = await self._refund_updates(booking, "partial")
        updates.update(
            {
                "status": BookingStatus.CANCELLED,
                "cancelled_by": "booker",
                "cancelled_at": now,
            }
        )
        if reason:
            updates["cancellation_reason"] = reason
        await self._bookings.update(booking.id, updates)
        cancelled = booking.model_copy(update=updates)
        self._log_transition(transition, cancelled.id)

        provider = await self._recipient(cancelled.provider_id, cancelled.id)
        await notify_if_opted_in(
            self._notifier,
            NotificationKind.BOOKING_CANCELLED,
            cancelled,
            provider,
            reason=reason,
        )
        return cancelled

    async def get_booking(self, booking_id: str, caller_id: str) -> Booking:
        """Retorna o booking para uma das partes."""
        booking = await self._load(booking_id)
        if caller_id not in (booking.provider_id, booking.booker_id):
            raise UnauthorizedError(
                "Somente provider ou booker podem ver o booking", booking_id=booking.id
            )
        return booking

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, booking_id: str) -> Booking:
        booking = await self._bookings.get(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} não encontrado", booking_id=booking_id)
        return booking

    @staticmethod
    def _authorize(booking: Booking, caller_id: str, role: Actor) -> None:
        expected = booking.provider_id if role == "provider" else booking.booker_id
        if caller_id != expected:
            raise UnauthorizedError(
                f"Somente o {role} do booking pode executar esta ação",
                booking_id=booking.id,
            )

    @staticmethod
    def _ensure_not_refunded(booking: Booking) -> None:
        if booking.is_refunded:
            raise AlreadyRefundedError(
                f"Booking já reembolsado ({booking.refund_id})", booking_id=booking.id
            )

    def _transition(
        self,
        booking: Booking,
        target: BookingStatus,
        actor: Actor,
        trigger: str,
    ) -> StateTransition:
        result = create_fsm(booking.id, booking.status).transition(
            target, trigger, actor, at=self._clock.now()
        )
        if result.transition is None:
            raise InvalidTransitionError(
                result.error_reason or "Transição inválida", booking_id=booking.id
            )
        return result.transition

    async def _refund_updates(self, booking: Booking, kind: RefundKind) -> dict[str, Any]:
        try:
            result = await issue_refund(self._payments, booking, kind)
        except RefundFailedError:
            await self._count_refund_attempt(booking)
            raise
        now = self._clock.now()
        return {**refund_fields(result, kind, now), "updated_at": now}

    async def _count_refund_attempt(self, booking: Booking) -> None:
        # Próxima tentativa usa chave de idempotência nova
        try:
            await self._bookings.update(
                booking.id,
                {"refund_attempts": booking.refund_attempts + 1, "updated_at": self._clock.now()},
            )
        except Exception as exc:
            log_side_effect_failure(
                logger,
                "bookings",
                "refund_attempt_not_recorded",
                exc,
                booking_id=booking.id,
            )

    async def _recipient(self, user_id: str, booking_id: str) -> UserProfile | None:
        """Perfil do destinatário; falha de leitura não desfaz a transição."""
        try:
            return await self._profiles.get(user_id)
        except Exception as exc:
            log_side_effect_failure(
                logger,
                "profiles",
                "recipient_lookup_failed",
                exc,
                booking_id=booking_id,
            )
            return None

    @staticmethod
    def _log_transition(transition: StateTransition, booking_id: str) -> None:
        record_transition(
            transition.from_state.value,
            transition.to_state.value,
            transition.actor,
            booking_id=booking_id,
        )
        logger.info(
            f"booking_{transition.to_state.value}",
            extra={
                "component": "booking_lifecycle",
                "action": transition.trigger,
                "result": "ok",
                "booking_id": booking_id,
                "transition": transition.to_log_dict(),
            },
        )


__all__ = ["SLOT_UNAVAILABLE_REASON", "BookingLifecycle", "booking_id_for_payment"]
