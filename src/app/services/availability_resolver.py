"""Resolução de slots candidatos a partir das regras de disponibilidade.

Função pura: não consulta bookings nem relógio. Ver conflict_filter para
a etapa seguinte.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta
from typing import TYPE_CHECKING

from app.services.time_arithmetic import coerce_date, parse_time_of_day, tile_slots, weekday_of

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from app.domain.availability import ExclusionRule, RecurringRule
    from app.domain.booking import TimeSlot


def _owned(rules: Iterable, provider_id: str | None) -> list:
    if provider_id is None:
        return list(rules)
    return [rule for rule in rules if rule.provider_id == provider_id]


def candidate_slots(
    rules: Iterable[RecurringRule],
    exclusions: Iterable[ExclusionRule],
    day: date | str,
    session_minutes: int,
    buffer_minutes: int,
    timezone: str | ZoneInfo,
    *,
    provider_id: str | None = None,
) -> list[TimeSlot]:
    """Retorna os slots candidatos de um provider para a data.

    Exclusão na data anula qualquer regra recorrente. Regras do dia da
    semana são ladrilhadas em ordem de horário de início e concatenadas
    sem deduplicação.
    """
    target = coerce_date(day)
    if any(exclusion.day == target for exclusion in _owned(exclusions, provider_id)):
        return []

    weekday = weekday_of(target)
    matching = [rule for rule in _owned(rules, provider_id) if rule.weekday == weekday]
    matching.sort(key=lambda rule: parse_time_of_day(rule.start_time))

    slots: list[TimeSlot] = []
    for rule in matching:
        slots.extend(
            tile_slots(
                target,
                rule.start_time,
                rule.end_time,
                session_minutes,
                buffer_minutes,
                timezone,
            )
        )
    return slots


def candidate_slots_for_range(
    rules: Iterable[RecurringRule],
    exclusions: Iterable[ExclusionRule],
    start_date: date | str,
    days: int,
    session_minutes: int,
    buffer_minutes: int,
    timezone: str | ZoneInfo,
    *,
    provider_id: str | None = None,
) -> dict[str, list[TimeSlot]]:
    """Slots candidatos para `days` datas consecutivas, indexados por data ISO."""
    if days < 1:
        raise ValueError("days deve ser >= 1")
    rules = _owned(rules, provider_id)
    exclusions = _owned(exclusions, provider_id)
    first = coerce_date(start_date)
    result: dict[str, list[TimeSlot]] = {}
    for offset in range(days):
        day = first + timedelta(days=offset)
        result[day.isoformat()] = candidate_slots(
            rules, exclusions, day, session_minutes, buffer_minutes, timezone
        )
    return result


__all__ = ["candidate_slots", "candidate_slots_for_range"]
