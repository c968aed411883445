"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_booking_lifecycle

    # Na inicialização do serviço
    initialize_app()

    # Obter use cases
    lifecycle = get_booking_lifecycle()
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_booking_settings,
    get_email_settings,
    get_firestore_settings,
    get_stripe_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "bookit_scheduling"

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    configure_logging(
        level=get_base_settings().log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> list[str]:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Returns:
        Lista de erros encontrados (vazia = OK).
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"booking: {error}" for error in get_booking_settings().validate_settings())
    errors.extend(
        f"firestore: {error}"
        for error in get_firestore_settings().validate(base.gcp_project)
    )
    errors.extend(f"stripe: {error}" for error in get_stripe_settings().validate())
    errors.extend(f"email: {error}" for error in get_email_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return errors

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")
    return errors


# ──────────────────────────────────────────────────────────────────────────────
# Use case getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_booking_lifecycle():
    """Obtém BookingLifecycle (singleton)."""
    from app.bootstrap.dependencies import create_booking_lifecycle
    return create_booking_lifecycle()


@lru_cache(maxsize=1)
def get_slot_finder():
    """Obtém SlotFinder (singleton)."""
    from app.bootstrap.dependencies import create_slot_finder
    return create_slot_finder()


@lru_cache(maxsize=1)
def get_availability_manager():
    """Obtém AvailabilityManager (singleton)."""
    from app.bootstrap.dependencies import create_availability_manager
    return create_availability_manager()


@lru_cache(maxsize=1)
def get_provider_onboarding():
    """Obtém ProviderOnboarding (singleton)."""
    from app.bootstrap.dependencies import create_provider_onboarding
    return create_provider_onboarding()


@lru_cache(maxsize=1)
def get_payment_processor():
    """Obtém o processador de pagamentos (singleton)."""
    from app.bootstrap.dependencies import create_payment_processor
    return create_payment_processor()


@lru_cache(maxsize=1)
def get_booking_checkout():
    """Obtém BookingCheckout (singleton)."""
    from app.bootstrap.dependencies import create_booking_checkout
    return create_booking_checkout()
