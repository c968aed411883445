"""Use cases de disponibilidade de providers."""

from .manager import AvailabilityManager
from .slot_finder import SlotFinder

__all__ = [
    "AvailabilityManager",
    "SlotFinder",
]
