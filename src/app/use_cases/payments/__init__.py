"""Use cases de pagamento: checkout e eventos do processador."""

from .checkout import BookingCheckout
from .onboarding import ProviderOnboarding

__all__ = ["BookingCheckout", "ProviderOnboarding"]
