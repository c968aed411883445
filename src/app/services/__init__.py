"""Serviços de aplicação.

Funções puras de geração e filtragem de slots (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.availability_resolver import candidate_slots, candidate_slots_for_range
from app.services.conflict_filter import available_slots, is_slot_available, overlaps
from app.services.time_arithmetic import (
    local_time_to_utc,
    parse_time_of_day,
    tile_slots,
    weekday_of,
)

__all__ = [
    "available_slots",
    "candidate_slots",
    "candidate_slots_for_range",
    "is_slot_available",
    "local_time_to_utc",
    "overlaps",
    "parse_time_of_day",
    "tile_slots",
    "weekday_of",
]
