"""Regras de disponibilidade de um provider (collection `availability`).

Dois tipos de documento compartilham a collection, discriminados por
`type`:
- recurring: bloco semanal {weekday, start_time, end_time} em horário local
- exclusion: data única sem nenhuma disponibilidade

Não existe update in-place: alterar uma regra é apagar e recriar.
"""

from __future__ import annotations

import re
from datetime import date as date_type
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.domain._datetime import ensure_utc, utcnow

# "HH:mm" com zero à esquerda; "24:00" representa o fim do dia
_TIME_OF_DAY_REGEX = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$|^24:00$")

# 0 = domingo ... 6 = sábado
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class RecurringRule(BaseModel):
    """Bloco semanal recorrente em horário local do provider."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    provider_id: str = Field(..., min_length=1)
    type: Literal["recurring"] = "recurring"
    weekday: int = Field(..., ge=0, le=6, description="0 = domingo, 6 = sábado.")
    start_time: str = Field(..., description="Início local (HH:mm).")
    end_time: str = Field(..., description="Fim local (HH:mm), exclusivo.")
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_of_day(cls, value: str) -> str:
        if not _TIME_OF_DAY_REGEX.match(value):
            raise ValueError(f"Horário deve estar no formato HH:mm: {value!r}")
        return value

    @field_validator("created_at", mode="before")
    @classmethod
    def _normalize_utc(cls, value: Any) -> Any:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_order(self) -> RecurringRule:
        # Comparação textual vale para HH:mm com zero à esquerda
        if self.start_time >= self.end_time:
            raise ValueError("start_time deve ser anterior a end_time")
        return self

    def to_document(self) -> dict[str, Any]:
        return self.model_dump()


class ExclusionRule(BaseModel):
    """Data sem disponibilidade; sobrepõe qualquer regra recorrente."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    provider_id: str = Field(..., min_length=1)
    type: Literal["exclusion"] = "exclusion"
    date: str = Field(..., description="Data no calendário do provider (YYYY-MM-DD).")
    reason: str | None = None
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value: Any) -> str:
        if isinstance(value, datetime):
            value = value.date()
        if isinstance(value, date_type):
            return value.isoformat()
        try:
            return date_type.fromisoformat(str(value)).isoformat()
        except ValueError as exc:
            raise ValueError(f"Data deve estar no formato YYYY-MM-DD: {value!r}") from exc

    @field_validator("created_at", mode="before")
    @classmethod
    def _normalize_utc(cls, value: Any) -> Any:
        return ensure_utc(value)

    @property
    def day(self) -> date_type:
        return date_type.fromisoformat(self.date)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


AvailabilityRule = RecurringRule | ExclusionRule


def availability_rule_from_document(
    data: dict[str, Any],
    *,
    doc_id: str | None = None,
) -> AvailabilityRule:
    """Cria a regra correta a partir do campo `type` do documento."""
    payload = dict(data)
    if doc_id and not payload.get("id"):
        payload["id"] = doc_id
    rule_type = payload.get("type")
    if rule_type == "recurring":
        return RecurringRule(**payload)
    if rule_type == "exclusion":
        return ExclusionRule(**payload)
    raise ValueError(f"Tipo de regra de disponibilidade desconhecido: {rule_type!r}")


__all__ = [
    "WEEKDAY_NAMES",
    "AvailabilityRule",
    "ExclusionRule",
    "RecurringRule",
    "availability_rule_from_document",
]
