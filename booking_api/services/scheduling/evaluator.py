# booking_api/services/scheduling/evaluator.py
"""
Availability evaluator.

Combines resolver output and reservation index output into a DaySchedule and
judges candidate intervals with the shared rules.

An evaluator instance belongs to one request: day snapshots are memoized on
the instance so that alternative searches do not reload the same date, and
are dropped with it.
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from ...errors import ValidationError
from . import rules
from .config import SchedulingConfig, get_scheduling_config
from .reservation_index import ReservationIndex
from .resolver import ScheduleResolver
from .timeutils import MINUTES_PER_DAY, to_minutes
from .types import AvailabilityResult, CandidateInterval, DaySchedule, StaffRef, Weekday

logger = logging.getLogger(__name__)


class AvailabilityEvaluator:
    def __init__(self, db: Session, tenant_id: int, config: SchedulingConfig | None = None):
        self.config = config or get_scheduling_config()
        self.tenant_id = tenant_id
        self.resolver = ScheduleResolver(db, tenant_id, self.config)
        self.index = ReservationIndex(db, tenant_id, self.config)
        self._days: dict[date, DaySchedule] = {}
        self._roster: list[StaffRef] | None = None

    # ── Roster (memoized per request) ────────────────────────────────────

    def roster(self) -> list[StaffRef]:
        if self._roster is None:
            self._roster = self.resolver.active_staff()
        return self._roster

    def resolve_staff(self, name: str | None) -> StaffRef | None:
        if name is None or not name.strip():
            return None
        return self.resolver.find_staff(name)

    # ── Snapshots ────────────────────────────────────────────────────────

    def load_day(self, target_date: date) -> DaySchedule:
        day = self._days.get(target_date)
        if day is not None:
            return day

        weekday = Weekday.of(target_date)
        staff = {s.id: s for s in self.roster()}
        staff_ids = list(staff)
        windows, configured = self.resolver.working_windows(weekday, staff_ids)

        day = DaySchedule(
            date=target_date,
            closed=self.resolver.is_weekday_closed(weekday),
            staff=staff,
            windows=windows,
            configured=configured,
            exceptions=self.resolver.exceptions_for(target_date, staff_ids),
            reservations=self.index.reservations_for(target_date),
        )
        self._days[target_date] = day
        return day

    # ── Candidates ───────────────────────────────────────────────────────

    def build_candidate(
        self,
        target_date: date,
        time: str,
        duration: int | None = None,
        staff: StaffRef | None = None,
    ) -> CandidateInterval:
        if duration is None:
            duration = self.config.default_duration_minutes
        candidate = CandidateInterval(
            date=target_date,
            start=to_minutes(time),
            duration=duration,
            staff_id=staff.id if staff else None,
        )
        validate_candidate(candidate)
        return candidate

    def check(self, candidate: CandidateInterval) -> AvailabilityResult:
        """
        Is the candidate free?

        Raises StaffNotFoundError when the candidate names a staff member that
        does not exist or is inactive.
        """
        validate_candidate(candidate)
        if candidate.staff_id is not None:
            if candidate.staff_id not in {s.id for s in self.roster()}:
                # raises with the roster attached
                self.resolver.get_staff(candidate.staff_id)

        result = rules.evaluate(self.load_day(candidate.date), candidate)
        logger.debug(
            f"Tenant {self.tenant_id}: {candidate.date} {candidate.time}+{candidate.duration}m "
            f"staff={candidate.staff_id} → {result.block_reason.value}"
        )
        return result


def validate_candidate(candidate: CandidateInterval) -> None:
    if candidate.duration <= 0:
        raise ValidationError(f"Duration must be positive, got {candidate.duration}")
    if candidate.start < 0 or candidate.end > MINUTES_PER_DAY:
        raise ValidationError("Appointments must not cross midnight")
