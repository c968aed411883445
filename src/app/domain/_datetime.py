"""Normalização de datetimes persistidos (sempre aware em UTC)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def utcnow() -> datetime:
    return datetime.now(UTC)


def ensure_utc(value: Any) -> Any:
    """Converte ISO string ou datetime naive/aware para datetime aware em UTC.

    Documentos antigos podem ter datas como string ISO; datetimes naive
    são interpretados como UTC.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    return value
