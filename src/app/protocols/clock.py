"""Contrato de relógio (injetável para testes)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockProtocol(Protocol):
    def now(self) -> datetime:
        """Instante atual, aware em UTC."""
        ...


class SystemClock:
    """Relógio do sistema."""

    def now(self) -> datetime:
        return datetime.now(UTC)
