# booking_api/services/scheduling/grid.py
"""
Dashboard availability grid.

Expands one date into fixed-width ticks per active staff member and labels
each tick with the BlockReason returned by rules.evaluate(): the grid has no
rules of its own.
"""

from datetime import date

from . import rules
from .evaluator import AvailabilityEvaluator
from .timeutils import to_end_time_string, to_time_string
from .types import CandidateInterval, DaySchedule, ShiftWindow


def grid_bounds(day: DaySchedule, default: ShiftWindow, step: int) -> tuple[int, int]:
    """
    Union of all shift windows of the day, snapped to the tick grid.

    Nobody working: the tenant opening window.
    """
    windows = [w for w in day.windows.values() if w is not None]
    if not windows:
        return (default.start // step) * step, default.end

    start = min(w.start for w in windows)
    end = max(w.end for w in windows)
    return (start // step) * step, end


def build_day_grid(evaluator: AvailabilityEvaluator, target_date: date) -> dict:
    """
    Returns:
        Dict for GridResponse: ticks plus one row of classified slots per
        active staff member.
    """
    config = evaluator.config
    step = config.grid_step_minutes
    day = evaluator.load_day(target_date)

    start, end = grid_bounds(day, evaluator.resolver.opening_window(), step)
    ticks = list(range(start, end, step))

    staff_rows = []
    for staff in evaluator.roster():
        window = day.windows.get(staff.id)
        slots = []
        for tick in ticks:
            candidate = CandidateInterval(target_date, tick, step, staff.id)
            result = rules.evaluate(day, candidate)
            conflict = result.first_conflict
            slots.append({
                "time": to_time_string(tick),
                "available": result.available,
                "block_reason": result.block_reason.value,
                "customer_name": conflict.customer_name if conflict else None,
                "reservation_id": conflict.reservation_id if conflict else None,
            })

        staff_rows.append({
            "id": staff.id,
            "name": staff.name,
            "color": staff.color,
            "shift": {
                "start": to_time_string(window.start),
                "end": to_end_time_string(window.end),
            } if window else None,
            "shift_configured": staff.id in day.configured,
            "slots": slots,
            "available_count": sum(1 for s in slots if s["available"]),
        })

    return {
        "date": target_date,
        "weekday": int(day.weekday),
        "closed_day": day.closed,
        "step_minutes": step,
        "times": [to_time_string(t) for t in ticks],
        "staff": staff_rows,
    }
