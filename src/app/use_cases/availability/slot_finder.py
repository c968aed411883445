"""Busca de slots reserváveis: regras -> candidatos -> filtro de conflitos."""

from __future__ import annotations

import time
from datetime import date
from typing import TYPE_CHECKING

from app.domain.errors import NotFoundError
from app.observability.metrics import record_latency
from app.protocols.clock import SystemClock
from app.services.availability_resolver import candidate_slots_for_range
from app.services.conflict_filter import available_slots
from config.settings.booking import BookingSettings

if TYPE_CHECKING:
    from app.domain.booking import TimeSlot
    from app.domain.user_profile import UserProfile
    from app.infra.stores.availability_store import AvailabilityStore
    from app.infra.stores.booking_store import BookingStore
    from app.infra.stores.profile_store import UserProfileStore
    from app.protocols.clock import ClockProtocol


class SlotFinder:
    """Combina perfil, regras e bookings de um provider para ofertar slots."""

    def __init__(
        self,
        *,
        profiles: UserProfileStore,
        availability: AvailabilityStore,
        bookings: BookingStore,
        clock: ClockProtocol | None = None,
        settings: BookingSettings | None = None,
    ) -> None:
        self._profiles = profiles
        self._availability = availability
        self._bookings = bookings
        self._clock = clock or SystemClock()
        self._settings = settings or BookingSettings()

    async def available_slots(self, provider_id: str, day: date | str) -> list[TimeSlot]:
        """Slots livres do provider na data (no calendário do provider)."""
        result = await self.available_slots_for_range(provider_id, day, 1)
        return next(iter(result.values()))

    async def available_slots_for_range(
        self,
        provider_id: str,
        start_date: date | str,
        days: int | None = None,
    ) -> dict[str, list[TimeSlot]]:
        """Slots livres para `days` datas a partir de `start_date`, por data ISO."""
        started = time.perf_counter()
        profile = await self._load_provider(provider_id)
        rules, exclusions = await self._availability.list_for_provider(provider_id)
        bookings = await self._bookings.list_for_provider(provider_id)
        now = self._clock.now()

        candidates = candidate_slots_for_range(
            rules,
            exclusions,
            start_date,
            days or self._settings.slot_days_ahead,
            profile.default_session_minutes,
            profile.buffer_minutes,
            profile.timezone,
            provider_id=provider_id,
        )
        session_minutes = profile.default_session_minutes
        result = {
            day: available_slots(
                # Virada de DST estica o slot em UTC; o booking exige a duração exata
                [slot for slot in slots if slot.duration_minutes == session_minutes],
                bookings,
                now,
                provider_id=provider_id,
            )
            for day, slots in candidates.items()
        }
        record_latency("slot_finder", "available_slots", (time.perf_counter() - started) * 1000)
        return result

    async def _load_provider(self, provider_id: str) -> UserProfile:
        profile = await self._profiles.get(provider_id)
        if profile is None:
            raise NotFoundError(f"Provider {provider_id} não encontrado")
        return profile


__all__ = ["SlotFinder"]
