# booking_api/services/scheduling/alternatives.py
"""
Alternative search for a blocked candidate.

Three independent lists, each capped at config.alternatives_limit:
- same_day_times:      other aligned start times of the same day, closest first
- same_time_employees: other active staff free at the identical interval
                       (only when the request named a staff member)
- next_days:           identical interval on each of the following days

Every entry is produced by AvailabilityEvaluator.check(), so an alternative
can never contradict the primary availability answer.
"""

from .evaluator import AvailabilityEvaluator
from .timeutils import add_days, to_time_string
from .types import Alternatives, CandidateInterval


class AlternativeFinder:
    def __init__(self, evaluator: AvailabilityEvaluator):
        self.evaluator = evaluator
        self.config = evaluator.config

    def find(self, candidate: CandidateInterval) -> Alternatives:
        return Alternatives(
            same_day_times=self.same_day_times(candidate),
            same_time_employees=self.same_time_employees(candidate),
            next_days=self.next_days(candidate),
        )

    # ── Axis 1: other times, same day ────────────────────────────────────

    def aligned_starts(self, candidate: CandidateInterval) -> list[int]:
        """Aligned starts inside the opening window that fit the duration."""
        window = self.evaluator.resolver.opening_window()
        step = self.config.alternative_step_minutes

        first = -(-window.start // step) * step  # round up to the grid
        starts = []
        t = first
        while t + candidate.duration <= window.end:
            starts.append(t)
            t += step
        return starts

    def free_start_times(self, candidate: CandidateInterval) -> list[str]:
        """All free aligned starts of the candidate's day, in time order."""
        return [
            to_time_string(start)
            for start in self.aligned_starts(candidate)
            if self.evaluator.check(candidate.moved(start=start)).available
        ]

    def same_day_times(self, candidate: CandidateInterval) -> list[str]:
        limit = self.config.alternatives_limit
        starts = [s for s in self.aligned_starts(candidate) if s != candidate.start]
        # closest to the requested time first; earlier wins ties
        starts.sort(key=lambda s: (abs(s - candidate.start), s))

        found: list[str] = []
        for start in starts:
            if len(found) >= limit:
                break
            if self.evaluator.check(candidate.moved(start=start)).available:
                found.append(to_time_string(start))
        return found

    # ── Axis 2: other staff, same time ───────────────────────────────────

    def same_time_employees(self, candidate: CandidateInterval) -> list[str]:
        if candidate.staff_id is None:
            return []

        limit = self.config.alternatives_limit
        names: list[str] = []
        for staff in self.evaluator.roster():
            if len(names) >= limit:
                break
            if staff.id == candidate.staff_id:
                continue
            if self.evaluator.check(candidate.moved(staff_id=staff.id)).available:
                names.append(staff.name)
        return names

    # ── Axis 3: same time, following days ────────────────────────────────

    def next_days(self, candidate: CandidateInterval) -> list[dict]:
        limit = self.config.alternatives_limit
        found: list[dict] = []
        for offset in range(1, self.config.next_days_horizon + 1):
            if len(found) >= limit:
                break
            day = add_days(candidate.date, offset)
            if self.evaluator.check(candidate.moved(date=day)).available:
                found.append({
                    "date": day.isoformat(),
                    "display_date": day.strftime("%d.%m.%Y"),
                    "time": candidate.time,
                })
        return found
