"""Settings específicas do Stripe (checkout, reembolsos e webhook)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class StripeSettings:
    """Configurações do processador de pagamentos Stripe.

    Attributes:
        secret_key: Chave secreta da API
        webhook_secret: Segredo de assinatura do endpoint de webhook
        request_timeout_seconds: Timeout das chamadas à API
        max_network_retries: Retries automáticos do SDK
        currency: Moeda das sessões de checkout
        application_fee_rate: Fração do valor retida pela plataforma
        checkout_return_base_url: Origem do front-end para success/cancel URLs
            (vazio: usa o cabeçalho Origin da requisição)
    """

    secret_key: str = ""
    webhook_secret: str = ""
    request_timeout_seconds: float = 30.0
    max_network_retries: int = 2
    currency: str = "eur"
    application_fee_rate: float = 0.01
    checkout_return_base_url: str = ""

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Stripe."""
        errors: list[str] = []
        if not self.secret_key:
            errors.append("STRIPE_SECRET_KEY não configurado")
        if not self.webhook_secret:
            errors.append("STRIPE_WEBHOOK_SECRET não configurado")
        if len(self.currency) != 3:
            errors.append(f"STRIPE_CURRENCY inválida: {self.currency}")
        if not 0 <= self.application_fee_rate < 1:
            errors.append(f"STRIPE_APPLICATION_FEE_RATE fora de [0, 1): {self.application_fee_rate}")
        return errors


def _load_stripe_from_env() -> StripeSettings:
    """Carrega StripeSettings de variáveis de ambiente."""
    return StripeSettings(
        secret_key=os.getenv("STRIPE_SECRET_KEY", ""),
        webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET", ""),
        request_timeout_seconds=float(os.getenv("STRIPE_REQUEST_TIMEOUT_SECONDS", "30")),
        max_network_retries=int(os.getenv("STRIPE_MAX_NETWORK_RETRIES", "2")),
        currency=os.getenv("STRIPE_CURRENCY", "eur").lower(),
        application_fee_rate=float(os.getenv("STRIPE_APPLICATION_FEE_RATE", "0.01")),
        checkout_return_base_url=os.getenv("CHECKOUT_RETURN_BASE_URL", "").rstrip("/"),
    )


@lru_cache(maxsize=1)
def get_stripe_settings() -> StripeSettings:
    """Retorna instância cacheada de StripeSettings."""
    return _load_stripe_from_env()
