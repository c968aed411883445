"""Settings do ciclo de vida de bookings e da oferta de slots.

Centralizar a leitura de env aqui evita espalhar parse de configuracao
pelos casos de uso.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


class BookingSettings(BaseModel):
    """Configuracoes usadas por BookingLifecycle e SlotFinder."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    cancellation_cutoff_minutes: int = Field(
        default=60,
        ge=0,
        description="Antecedencia minima (min) para o booker cancelar.",
    )
    meeting_link_base_url: str = Field(
        default="https://meet.jit.si/bookit-",
        description="Prefixo do link de reuniao; o id do booking e anexado.",
    )
    revalidate_on_create: bool = Field(
        default=True,
        description="Revalida o slot contra bookings existentes antes de gravar.",
    )
    default_session_minutes: int = Field(
        default=60,
        ge=1,
        description="Duracao de sessao quando o checkout nao informa session_minutes.",
    )
    slot_days_ahead: int = Field(
        default=14,
        ge=1,
        le=90,
        description="Quantidade padrao de dias ofertados na busca de slots.",
    )

    def validate_settings(self) -> list[str]:
        """Valida combinacoes que o schema sozinho nao cobre."""
        errors: list[str] = []
        if not self.meeting_link_base_url.startswith("https://"):
            errors.append("BOOKING_MEETING_LINK_BASE_URL deve usar https")
        return errors


def _parse_bool(value: str) -> bool:
    """Converte texto de env em bool com o mesmo padrao dos outros settings."""
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_booking_from_env() -> BookingSettings:
    """Carrega BookingSettings a partir de variaveis de ambiente."""
    return BookingSettings(
        cancellation_cutoff_minutes=int(
            os.getenv("BOOKING_CANCELLATION_CUTOFF_MINUTES", "60")
        ),
        meeting_link_base_url=os.getenv(
            "BOOKING_MEETING_LINK_BASE_URL", "https://meet.jit.si/bookit-"
        ),
        revalidate_on_create=_parse_bool(os.getenv("BOOKING_REVALIDATE_ON_CREATE", "true")),
        default_session_minutes=int(os.getenv("BOOKING_DEFAULT_SESSION_MINUTES", "60")),
        slot_days_ahead=int(os.getenv("BOOKING_SLOT_DAYS_AHEAD", "14")),
    )


@lru_cache(maxsize=1)
def get_booking_settings() -> BookingSettings:
    """Retorna instancia cacheada de BookingSettings."""
    return _load_booking_from_env()


__all__ = ["BookingSettings", "get_booking_settings"]
