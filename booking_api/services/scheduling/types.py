# booking_api/services/scheduling/types.py
"""
Value types shared by the scheduling engine.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum

from .timeutils import format_range, to_time_string


class Weekday(IntEnum):
    """Weekday numbering of stored shift / closed-day rows (Sunday = 0)."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, value: date) -> "Weekday":
        return cls(value.isoweekday() % 7)


class ReservationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"

    @property
    def occupies_time(self) -> bool:
        return self is not ReservationStatus.CANCELLED


# Allowed status transitions; statuses missing as keys are terminal.
STATUS_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({
        ReservationStatus.CONFIRMED,
        ReservationStatus.CANCELLED,
    }),
    ReservationStatus.CONFIRMED: frozenset({
        ReservationStatus.COMPLETED,
        ReservationStatus.CANCELLED,
        ReservationStatus.NO_SHOW,
    }),
}


class BlockReason(str, Enum):
    NONE = "NONE"
    CLOSED_DAY = "CLOSED_DAY"
    STAFF_OFF = "STAFF_OFF"
    EXCEPTION = "EXCEPTION"
    RESERVATION_CONFLICT = "RESERVATION_CONFLICT"


@dataclass(frozen=True)
class StaffRef:
    id: int
    name: str
    color: str = ""
    sort_order: int = 0


@dataclass(frozen=True)
class ShiftWindow:
    start: int  # minutes
    end: int

    def contains(self, start: int, end: int) -> bool:
        return self.start <= start and end <= self.end


@dataclass(frozen=True)
class BlockedWindow:
    staff_id: int
    start: int
    end: int
    reason: str | None = None


@dataclass(frozen=True)
class BookedInterval:
    """A non-cancelled reservation with its effective occupied interval."""
    reservation_id: int
    customer_name: str
    staff_id: int | None
    start: int
    end: int
    status: ReservationStatus

    @property
    def customer_label(self) -> str:
        """Privacy-reduced name: "Anna Maria Meier" → "Anna M."."""
        parts = self.customer_name.split()
        if not parts:
            return ""
        if len(parts) == 1:
            return parts[0]
        return f"{parts[0]} {parts[-1][0].upper()}."

    def summary(self) -> dict:
        return {
            "id": self.reservation_id,
            "customer": self.customer_label,
            "staff_member_id": self.staff_id,
            "start_time": to_time_string(self.start),
            "time_range": format_range(self.start, self.end),
        }


@dataclass(frozen=True)
class CandidateInterval:
    date: date
    start: int  # minutes
    duration: int  # minutes
    staff_id: int | None = None

    @property
    def end(self) -> int:
        return self.start + self.duration

    @property
    def time(self) -> str:
        return to_time_string(self.start)

    def moved(self, **changes) -> "CandidateInterval":
        values = {
            "date": self.date,
            "start": self.start,
            "duration": self.duration,
            "staff_id": self.staff_id,
        }
        values.update(changes)
        return CandidateInterval(**values)


@dataclass
class AvailabilityResult:
    candidate: CandidateInterval
    available: bool
    block_reason: BlockReason = BlockReason.NONE
    conflicts: list[BookedInterval] = field(default_factory=list)

    @property
    def first_conflict(self) -> BookedInterval | None:
        return self.conflicts[0] if self.conflicts else None


@dataclass
class DaySchedule:
    """
    Everything the rules need to judge candidates on one date of one tenant.

    Loaded once per (request, date); never cached across requests.
    """
    date: date
    closed: bool
    staff: dict[int, StaffRef]
    windows: dict[int, ShiftWindow | None]
    configured: set[int]
    exceptions: list[BlockedWindow]
    reservations: list[BookedInterval]

    @property
    def weekday(self) -> Weekday:
        return Weekday.of(self.date)


@dataclass
class Alternatives:
    same_day_times: list[str] = field(default_factory=list)
    same_time_employees: list[str] = field(default_factory=list)
    next_days: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "same_day_times": list(self.same_day_times),
            "same_time_employees": list(self.same_time_employees),
            "next_days": list(self.next_days),
        }
