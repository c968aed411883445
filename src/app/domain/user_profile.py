"""UserProfile: perfil de provider/booker persistido na collection `users`.

O mesmo documento atende providers (timezone, duração de sessão, buffer,
preço) e bookers (email, preferências de notificação). A identidade vem
do provedor de autenticação; aqui ficam só os dados do agendamento.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain._datetime import ensure_utc, utcnow

DEFAULT_SESSION_MINUTES = 60
DEFAULT_BUFFER_MINUTES = 15


class NotificationSettings(BaseModel):
    """Flags de opt-in de email, lidas no momento de cada transição."""

    model_config = ConfigDict(extra="ignore")

    new_booking_request: bool = False
    booking_confirmed: bool = False
    booking_declined: bool = False
    booking_cancelled: bool = False


class UserProfile(BaseModel):
    """Perfil de usuário (provider e/ou booker)."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    email: str = ""
    display_name: str = ""
    timezone: str = Field(default="UTC", description="Timezone IANA do usuário.")
    default_session_minutes: int = Field(default=DEFAULT_SESSION_MINUTES, ge=1)
    buffer_minutes: int = Field(default=DEFAULT_BUFFER_MINUTES, ge=0)
    price_per_session: float = Field(default=0.0, ge=0)
    notification_settings: NotificationSettings = Field(default_factory=NotificationSettings)
    stripe_account_id: str | None = None
    onboarding_complete: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Timezone IANA inválida: {value}") from exc
        return value

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _normalize_utc(cls, value: Any) -> Any:
        return ensure_utc(value)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_document(cls, data: dict[str, Any], *, doc_id: str | None = None) -> UserProfile:
        payload = dict(data)
        if doc_id and not payload.get("id"):
            payload["id"] = doc_id
        return cls(**payload)


__all__ = [
    "DEFAULT_BUFFER_MINUTES",
    "DEFAULT_SESSION_MINUTES",
    "NotificationSettings",
    "UserProfile",
]
