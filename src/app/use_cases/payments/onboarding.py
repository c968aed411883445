"""Conclusão do onboarding de providers na conta conectada do Stripe."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.clock import SystemClock

if TYPE_CHECKING:
    from app.infra.stores.profile_store import UserProfileStore
    from app.protocols.clock import ClockProtocol

logger = logging.getLogger(__name__)


class ProviderOnboarding:
    """Marca o provider como apto a receber pagamentos."""

    def __init__(self, profiles: UserProfileStore, clock: ClockProtocol | None = None) -> None:
        self._profiles = profiles
        self._clock = clock or SystemClock()

    async def account_updated(
        self,
        account_id: str,
        *,
        details_submitted: bool,
        payouts_enabled: bool,
    ) -> bool:
        """Atualiza `onboarding_complete` quando a conta pode receber repasses.

        Returns:
            True se algum perfil foi atualizado
        """
        profile = await self._profiles.find_by_stripe_account(account_id)
        if profile is None:
            logger.warning(
                "onboarding_account_unknown",
                extra={"component": "onboarding", "action": "account_updated", "result": "not_found"},
            )
            return False
        if not (details_submitted and payouts_enabled):
            logger.info(
                "onboarding_incomplete",
                extra={"component": "onboarding", "action": "account_updated", "result": "pending"},
            )
            return False
        if profile.onboarding_complete:
            return False
        await self._profiles.update(
            profile.id,
            {"onboarding_complete": True, "updated_at": self._clock.now()},
        )
        logger.info(
            "onboarding_completed",
            extra={"component": "onboarding", "action": "account_updated", "result": "ok"},
        )
        return True
