# booking_api/services/scheduling/config.py
"""
Scheduling configuration consumed by the rules engine.
"""

from dataclasses import dataclass
from functools import lru_cache

from ...config import settings

# Occupancy assumed for a reservation stored without an end time.
# Part of the public contract: /check reports it as default_duration_minutes.
DEFAULT_DURATION_MINUTES = 60


@dataclass(frozen=True)
class SchedulingConfig:
    """
    Configuration for availability checks and alternative search.

    Attributes:
        default_duration_minutes: Occupancy of reservations without end time
            and duration of requests that do not name one
        opening_time / closing_time: Nominal opening window scanned for
            same-day alternatives (tenants may override it)
        alternative_step_minutes: Alignment of alternative start times (15/30/60)
        alternatives_limit: Max entries per alternatives list
        next_days_horizon: How many following days are searched
        grid_step_minutes: Tick width of the dashboard grid (15/30/60)
        default_party_size: Party size of bookings that do not name one
        booking_lock_timeout: Seconds to wait for the per-day booking lock
    """
    default_duration_minutes: int = DEFAULT_DURATION_MINUTES
    opening_time: str = "09:00"
    closing_time: str = "18:00"
    alternative_step_minutes: int = 30
    alternatives_limit: int = 5
    next_days_horizon: int = 7
    grid_step_minutes: int = 15
    default_party_size: int = 2
    booking_lock_timeout: float = 10.0

    def __post_init__(self):
        """Validate configuration."""
        for name in ("alternative_step_minutes", "grid_step_minutes"):
            value = getattr(self, name)
            if value not in (15, 30, 60):
                raise ValueError(f"{name} must be 15, 30, or 60, got {value}")
        if self.default_duration_minutes <= 0:
            raise ValueError("default_duration_minutes must be positive")
        if self.alternatives_limit < 0 or self.next_days_horizon < 0:
            raise ValueError("alternatives_limit and next_days_horizon must not be negative")


@lru_cache
def get_scheduling_config() -> SchedulingConfig:
    """Get scheduling configuration (singleton, built from settings)."""
    return SchedulingConfig(
        default_duration_minutes=settings.default_duration_minutes,
        opening_time=settings.opening_time,
        closing_time=settings.closing_time,
        alternative_step_minutes=settings.alternative_step_minutes,
        alternatives_limit=settings.alternatives_limit,
        next_days_horizon=settings.next_days_horizon,
        grid_step_minutes=settings.grid_step_minutes,
        default_party_size=settings.default_party_size,
        booking_lock_timeout=settings.booking_lock_timeout_seconds,
    )
