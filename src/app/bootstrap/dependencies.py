"""Factories de implementações concretas.

Centraliza a criação de stores, adapters e use cases a partir das
configurações de ambiente.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.bootstrap.clients import create_firestore_client
from app.infra.notifications import EmailJsNotifier
from app.infra.payments import StripePaymentProcessor
from app.infra.stores import (
    AvailabilityStore,
    BookingStore,
    ConversationStore,
    FirestoreDocumentStore,
    MemoryDocumentStore,
    UserProfileStore,
)
from app.protocols.clock import SystemClock
from app.protocols.document_store import DocumentStoreProtocol
from app.use_cases.availability import AvailabilityManager, SlotFinder
from app.use_cases.bookings import BookingLifecycle
from app.use_cases.payments import BookingCheckout, ProviderOnboarding
from config.settings import (
    get_base_settings,
    get_booking_settings,
    get_email_settings,
    get_firestore_settings,
    get_stripe_settings,
)

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Document store
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_document_store() -> DocumentStoreProtocol:
    """Cria document store baseado em DOCUMENT_STORE_BACKEND.

    - "memory": MemoryDocumentStore (dev only)
    - "firestore": FirestoreDocumentStore (staging/production)
    """
    backend = get_firestore_settings().backend

    if backend == "firestore":
        store: DocumentStoreProtocol = FirestoreDocumentStore(create_firestore_client())
        logger.info("document_store_created", extra={"backend": "firestore"})
        return store

    if backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        logger.info("document_store_created", extra={"backend": "memory"})
        return MemoryDocumentStore()

    msg = f"DOCUMENT_STORE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_booking_store() -> BookingStore:
    return BookingStore(create_document_store(), get_firestore_settings().collection_bookings)


def create_profile_store() -> UserProfileStore:
    return UserProfileStore(create_document_store(), get_firestore_settings().collection_users)


def create_availability_store() -> AvailabilityStore:
    return AvailabilityStore(
        create_document_store(), get_firestore_settings().collection_availability
    )


def create_conversation_store() -> ConversationStore:
    return ConversationStore(
        create_document_store(), get_firestore_settings().collection_conversations
    )


# ──────────────────────────────────────────────────────────────────────────────
# Adapters externos
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_payment_processor() -> StripePaymentProcessor:
    return StripePaymentProcessor(get_stripe_settings())


@lru_cache(maxsize=1)
def create_notifier() -> EmailJsNotifier:
    return EmailJsNotifier(get_email_settings())


# ──────────────────────────────────────────────────────────────────────────────
# Use cases
# ──────────────────────────────────────────────────────────────────────────────


def create_booking_lifecycle() -> BookingLifecycle:
    return BookingLifecycle(
        bookings=create_booking_store(),
        profiles=create_profile_store(),
        conversations=create_conversation_store(),
        payment_processor=create_payment_processor(),
        notifier=create_notifier(),
        clock=SystemClock(),
        settings=get_booking_settings(),
    )


def create_slot_finder() -> SlotFinder:
    return SlotFinder(
        profiles=create_profile_store(),
        availability=create_availability_store(),
        bookings=create_booking_store(),
        clock=SystemClock(),
        settings=get_booking_settings(),
    )


def create_availability_manager() -> AvailabilityManager:
    return AvailabilityManager(create_availability_store())


def create_provider_onboarding() -> ProviderOnboarding:
    return ProviderOnboarding(create_profile_store(), clock=SystemClock())


def create_booking_checkout() -> BookingCheckout:
    return BookingCheckout(
        profiles=create_profile_store(),
        bookings=create_booking_store(),
        payment_processor=create_payment_processor(),
        clock=SystemClock(),
        settings=get_stripe_settings(),
    )
