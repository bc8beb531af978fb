# booking_api/services/scheduling/__init__.py
"""
Scheduling engine.

One rules module (rules.py) shared by the availability check, the alternative
search, the booking re-check and the dashboard grid.
"""

from .config import DEFAULT_DURATION_MINUTES, SchedulingConfig, get_scheduling_config
from .evaluator import AvailabilityEvaluator
from .alternatives import AlternativeFinder
from .grid import build_day_grid
from .locks import get_booking_locks
from .types import BlockReason, CandidateInterval, ReservationStatus, Weekday

__all__ = [
    "DEFAULT_DURATION_MINUTES",
    "SchedulingConfig",
    "get_scheduling_config",
    "AvailabilityEvaluator",
    "AlternativeFinder",
    "build_day_grid",
    "get_booking_locks",
    "BlockReason",
    "CandidateInterval",
    "ReservationStatus",
    "Weekday",
]
