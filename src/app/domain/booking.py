"""Modelos de domínio de bookings e slots.

O Booking é a fonte de verdade do vínculo com o pagamento
(`payment_intent_id`) e do estado de reembolso: o processador de
pagamento nunca é consultado para decidir status.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from app.domain._datetime import ensure_utc, utcnow
from fsm.states.booking import BookingStatus, effective_status

CancelledBy = Literal["provider", "booker"]
RefundKind = Literal["full", "partial"]

_DATETIME_FIELDS = (
    "start_utc",
    "end_utc",
    "cancelled_at",
    "refunded_at",
    "created_at",
    "updated_at",
)


class TimeSlot(BaseModel):
    """Intervalo [start_utc, end_utc) em UTC."""

    model_config = ConfigDict(frozen=True)

    start_utc: datetime = Field(..., description="Início do slot (UTC).")
    end_utc: datetime = Field(..., description="Fim do slot (UTC), exclusivo.")

    @field_validator("start_utc", "end_utc", mode="before")
    @classmethod
    def _normalize_utc(cls, value: Any) -> Any:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_order(self) -> TimeSlot:
        if self.start_utc >= self.end_utc:
            raise ValueError("start_utc deve ser anterior a end_utc")
        return self

    @property
    def duration_minutes(self) -> int:
        return int((self.end_utc - self.start_utc) / timedelta(minutes=1))


class PaymentCapture(BaseModel):
    """Dados de um pagamento capturado que originam um booking pendente."""

    model_config = ConfigDict(extra="ignore")

    payment_intent_id: str = Field(..., min_length=1)
    provider_id: str = Field(..., min_length=1)
    provider_name: str = ""
    booker_id: str = Field(..., min_length=1)
    booker_name: str = ""
    booker_email: str = ""
    start_utc: datetime
    end_utc: datetime
    session_minutes: int = Field(default=60, ge=1)
    price: float = Field(default=0.0, ge=0)
    notes: str | None = None

    @field_validator("start_utc", "end_utc", mode="before")
    @classmethod
    def _normalize_utc(cls, value: Any) -> Any:
        return ensure_utc(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _blank_notes_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Booking(BaseModel):
    """Reserva de um slot entre provider e booker."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    provider_id: str
    provider_name: str = ""
    booker_id: str
    booker_name: str = ""
    booker_email: str = ""
    start_utc: datetime
    end_utc: datetime
    status: BookingStatus = BookingStatus.PENDING
    session_minutes: int = Field(..., ge=1)
    price_at_booking: float | None = None
    notes: str | None = None
    payment_intent_id: str | None = None
    meeting_link: str | None = None

    cancelled_at: datetime | None = None
    cancelled_by: CancelledBy | None = None
    cancellation_reason: str | None = None

    refund_id: str | None = None
    refund_amount: int | None = None
    refund_status: str | None = None
    refund_type: RefundKind | None = None
    refunded_at: datetime | None = None
    refund_attempts: int = Field(default=0, ge=0)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator(*_DATETIME_FIELDS, mode="before")
    @classmethod
    def _normalize_utc(cls, value: Any) -> Any:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_interval(self) -> Booking:
        if self.start_utc >= self.end_utc:
            raise ValueError("start_utc deve ser anterior a end_utc")
        if self.end_utc - self.start_utc != timedelta(minutes=self.session_minutes):
            raise ValueError("end_utc - start_utc deve ser igual a session_minutes")
        return self

    @field_serializer("status")
    def _serialize_status(self, status: BookingStatus) -> str:
        return status.value

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(start_utc=self.start_utc, end_utc=self.end_utc)

    @property
    def is_refunded(self) -> bool:
        return bool(self.refund_id)

    def effective_status(self, now: datetime) -> str:
        """Status para exibição: PENDING com início no passado vira "expired"."""
        return effective_status(self.status, self.start_utc, now)

    def to_document(self) -> dict[str, Any]:
        """Converte para dict compatível com o document store (sem None)."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_document(cls, data: dict[str, Any], *, doc_id: str | None = None) -> Booking:
        """Cria instância a partir de documento persistido."""
        payload = dict(data)
        if doc_id and not payload.get("id"):
            payload["id"] = doc_id
        return cls(**payload)


__all__ = [
    "Booking",
    "CancelledBy",
    "PaymentCapture",
    "RefundKind",
    "TimeSlot",
]
