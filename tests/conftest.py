"""Configuração do pytest para o projeto BookIt."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_cached_settings():
    """Settings e singletons lidos de env não vazam entre testes."""
    from app import bootstrap
    from app.bootstrap import dependencies
    from config import settings

    cached = (
        settings.get_base_settings,
        settings.get_booking_settings,
        settings.get_email_settings,
        settings.get_firestore_settings,
        settings.get_stripe_settings,
        bootstrap.get_booking_lifecycle,
        bootstrap.get_slot_finder,
        bootstrap.get_availability_manager,
        bootstrap.get_provider_onboarding,
        bootstrap.get_payment_processor,
        bootstrap.get_booking_checkout,
        dependencies.create_document_store,
        dependencies.create_payment_processor,
        dependencies.create_notifier,
    )
    for getter in cached:
        getter.cache_clear()
    yield
    for getter in cached:
        getter.cache_clear()
