# booking_api/services/scheduling/rules.py
"""
Scheduling rules: pure functions over a DaySchedule snapshot.

This is the only place where the gating rules live. The availability check,
the alternative search, the free-slot listing and the dashboard grid all call
evaluate(); none of them re-implements a rule.

Rule order (first failing rule wins, later rules are not evaluated):
    1. business-wide closed weekday          → CLOSED_DAY
    2. candidate outside the staff shift     → STAFF_OFF
    3. candidate overlaps a shift exception  → EXCEPTION
    4. candidate overlaps a reservation      → RESERVATION_CONFLICT

Without a staff member only rules 1 and 4 apply, and rule 4 looks at every
reservation of the day regardless of staff.
"""

from .timeutils import overlaps
from .types import (
    AvailabilityResult,
    BlockReason,
    BookedInterval,
    CandidateInterval,
    DaySchedule,
)


def staff_block_reason(day: DaySchedule, staff_id: int, start: int, end: int) -> BlockReason:
    """Closed-day → working window → exception. NONE if all three pass."""
    if day.closed:
        return BlockReason.CLOSED_DAY

    window = day.windows.get(staff_id)
    if window is None or not window.contains(start, end):
        return BlockReason.STAFF_OFF

    if exception_blocks(day, staff_id, start, end):
        return BlockReason.EXCEPTION

    return BlockReason.NONE


def exception_blocks(day: DaySchedule, staff_id: int, start: int, end: int) -> bool:
    return any(
        exc.staff_id == staff_id and overlaps(start, end, exc.start, exc.end)
        for exc in day.exceptions
    )


def find_conflicts(
    reservations: list[BookedInterval],
    start: int,
    end: int,
    staff_id: int | None = None,
) -> list[BookedInterval]:
    """
    Reservations overlapping [start, end), ordered by start time.

    staff_id=None → every reservation counts (unfiltered reservation table).
    """
    hits = [
        res for res in reservations
        if (staff_id is None or res.staff_id == staff_id)
        and overlaps(start, end, res.start, res.end)
    ]
    hits.sort(key=lambda r: (r.start, r.reservation_id))
    return hits


def evaluate(day: DaySchedule, candidate: CandidateInterval) -> AvailabilityResult:
    """Judge one candidate interval against the day snapshot."""
    start, end = candidate.start, candidate.end

    if candidate.staff_id is not None:
        reason = staff_block_reason(day, candidate.staff_id, start, end)
    elif day.closed:
        reason = BlockReason.CLOSED_DAY
    else:
        reason = BlockReason.NONE

    if reason is not BlockReason.NONE:
        return AvailabilityResult(candidate, available=False, block_reason=reason)

    conflicts = find_conflicts(day.reservations, start, end, candidate.staff_id)
    if conflicts:
        return AvailabilityResult(
            candidate,
            available=False,
            block_reason=BlockReason.RESERVATION_CONFLICT,
            conflicts=conflicts,
        )

    return AvailabilityResult(candidate, available=True)
