"""Conversation: canal de mensagens criado na primeira confirmação.

Existe no máximo uma por booking; a busca por `booking_id` é a fonte
de verdade para decidir se já existe.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain._datetime import ensure_utc, utcnow


class Conversation(BaseModel):
    """Conversa entre provider e booker vinculada a um booking."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    booking_id: str = Field(..., min_length=1)
    provider_id: str
    booker_id: str
    provider_name: str = ""
    booker_name: str = ""
    participant_ids: list[str] = Field(default_factory=list)
    unread_count: dict[str, int] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _normalize_utc(cls, value: Any) -> Any:
        return ensure_utc(value)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_document(cls, data: dict[str, Any], *, doc_id: str | None = None) -> Conversation:
        payload = dict(data)
        if doc_id and not payload.get("id"):
            payload["id"] = doc_id
        return cls(**payload)


__all__ = ["Conversation"]
