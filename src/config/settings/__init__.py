"""Agregador de settings do BookIt.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Booking settings
from config.settings.booking import (
    BookingSettings,
    get_booking_settings,
)

# Email settings
from config.settings.email import (
    EMAILJS_API_URL,
    EmailSettings,
    get_email_settings,
)

# Infrastructure settings
from config.settings.infra import (
    DocumentStoreBackend,
    FirestoreSettings,
    get_firestore_settings,
)

# Payment settings
from config.settings.payments import (
    StripeSettings,
    get_stripe_settings,
)

__all__ = [
    # Constants
    "EMAILJS_API_URL",
    # Base
    "BaseSettings",
    # Booking
    "BookingSettings",
    "DocumentStoreBackend",
    # Email
    "EmailSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    # Payments
    "StripeSettings",
    "get_base_settings",
    "get_booking_settings",
    "get_email_settings",
    "get_firestore_settings",
    "get_stripe_settings",
]
