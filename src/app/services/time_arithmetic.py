"""Aritmética de horário local ↔ UTC para geração de slots.

Regras:
- horários de parede "HH:mm" são interpretados no timezone IANA do provider
- cada extremidade do slot é convertida de forma independente, então um
  slot que cruza uma transição de DST tem duração em UTC diferente da nominal
- horários inexistentes (gap de primavera) e ambíguos (volta do outono)
  resolvem com fold=0, ou seja, o offset vigente antes da transição
- "24:00" representa o fim do dia (meia-noite do dia seguinte)
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from app.domain.booking import TimeSlot

_TIME_OF_DAY_REGEX = re.compile(r"^(\d{2}):(\d{2})$")
MINUTES_PER_DAY = 24 * 60


def parse_time_of_day(value: str) -> int:
    """Converte "HH:mm" em minutos desde a meia-noite (0..1440)."""
    match = _TIME_OF_DAY_REGEX.match(value or "")
    if not match:
        raise ValueError(f"Horário deve estar no formato HH:mm: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    total = hours * 60 + minutes
    if minutes > 59 or total > MINUTES_PER_DAY:
        raise ValueError(f"Horário fora do intervalo 00:00-24:00: {value!r}")
    return total


def coerce_date(value: date | str) -> date:
    """Aceita date ou string ISO (YYYY-MM-DD)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Data deve estar no formato YYYY-MM-DD: {value!r}") from exc


def _zone(timezone: str | ZoneInfo) -> ZoneInfo:
    if isinstance(timezone, ZoneInfo):
        return timezone
    return ZoneInfo(timezone)


def _wall_clock_to_utc(day: date, minutes: int, zone: ZoneInfo) -> datetime:
    # fold=0 é o default de datetime; gaps e ambiguidades usam o offset anterior
    wall = datetime.combine(day, time(0, 0)) + timedelta(minutes=minutes)
    return wall.replace(tzinfo=zone).astimezone(UTC)


def local_time_to_utc(day: date | str, time_of_day: str, timezone: str | ZoneInfo) -> datetime:
    """Converte data + "HH:mm" no timezone informado para datetime aware em UTC."""
    return _wall_clock_to_utc(coerce_date(day), parse_time_of_day(time_of_day), _zone(timezone))


def tile_slots(
    day: date | str,
    start_time: str,
    end_time: str,
    duration_minutes: int,
    buffer_minutes: int,
    timezone: str | ZoneInfo,
) -> list[TimeSlot]:
    """Divide a janela [start_time, end_time) em slots de duração fixa.

    Cada slot começa `duration + buffer` minutos após o anterior e a
    geração para no primeiro slot cujo fim ultrapassaria `end_time`.
    Janela menor que a duração não gera slots.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes deve ser positivo")
    if buffer_minutes < 0:
        raise ValueError("buffer_minutes não pode ser negativo")

    target = coerce_date(day)
    zone = _zone(timezone)
    window_start = parse_time_of_day(start_time)
    window_end = parse_time_of_day(end_time)
    step = duration_minutes + buffer_minutes

    slots: list[TimeSlot] = []
    cursor = window_start
    while cursor + duration_minutes <= window_end:
        start_utc = _wall_clock_to_utc(target, cursor, zone)
        end_utc = _wall_clock_to_utc(target, cursor + duration_minutes, zone)
        # Slot inteiro dentro de um gap de DST colapsa; não é reservável
        if start_utc < end_utc:
            slots.append(TimeSlot(start_utc=start_utc, end_utc=end_utc))
        cursor += step
    return slots


def weekday_of(day: date | str) -> int:
    """Dia da semana da data de calendário: 0 = domingo ... 6 = sábado."""
    return coerce_date(day).isoweekday() % 7


def to_local(moment: datetime, timezone: str | ZoneInfo) -> datetime:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(_zone(timezone))


def format_date_in_timezone(moment: datetime, timezone: str | ZoneInfo) -> str:
    """Formata como "March 10, 2024" no timezone informado."""
    local = to_local(moment, timezone)
    return f"{local:%B} {local.day}, {local.year}"


def format_time_in_timezone(moment: datetime, timezone: str | ZoneInfo) -> str:
    """Formata como "9:05 AM" no timezone informado."""
    local = to_local(moment, timezone)
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


__all__ = [
    "MINUTES_PER_DAY",
    "coerce_date",
    "format_date_in_timezone",
    "format_time_in_timezone",
    "local_time_to_utc",
    "parse_time_of_day",
    "tile_slots",
    "to_local",
    "weekday_of",
]
