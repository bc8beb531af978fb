# booking_api/services/scheduling/resolver.py
"""
Roster & schedule resolver.

Answers, for one tenant:
- which staff members are active
- is staff X working on a weekday, and during which window
- does a shift exception block staff X at date/time
- is a weekday a business-wide closed day

Read-only: staff, shifts, exceptions and closed days are owned by other parts
of the product.
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from ...errors import MalformedTimeError, StaffNotFoundError
from ...models.generated import (
    ClosedDays,
    ShiftExceptions,
    StaffMembers,
    StaffShifts,
    Tenants,
)
from .config import SchedulingConfig, get_scheduling_config
from .timeutils import overlaps, to_end_minutes, to_minutes
from .types import BlockedWindow, ShiftWindow, StaffRef, Weekday

logger = logging.getLogger(__name__)


class ScheduleResolver:
    def __init__(self, db: Session, tenant_id: int, config: SchedulingConfig | None = None):
        self.db = db
        self.tenant_id = tenant_id
        self.config = config or get_scheduling_config()

    # ── Roster ───────────────────────────────────────────────────────────

    def active_staff(self) -> list[StaffRef]:
        rows = (
            self.db.query(StaffMembers)
            .filter(
                StaffMembers.tenant_id == self.tenant_id,
                StaffMembers.is_active == 1,
            )
            .order_by(StaffMembers.sort_order, StaffMembers.name, StaffMembers.id)
            .all()
        )
        return [
            StaffRef(id=s.id, name=s.name, color=s.color or "", sort_order=s.sort_order or 0)
            for s in rows
        ]

    def roster_names(self) -> list[str]:
        return [s.name for s in self.active_staff()]

    def get_staff(self, staff_id: int) -> StaffRef:
        """Active staff member by id; StaffNotFoundError otherwise."""
        for staff in self.active_staff():
            if staff.id == staff_id:
                return staff
        raise StaffNotFoundError(str(staff_id), self.roster_names())

    def find_staff(self, name: str) -> StaffRef:
        """
        Resolve a spoken/typed staff name.

        Case-insensitive exact match first, then a unique partial match
        ("lisa" → "Lisa Maier"). Ambiguous or unknown → StaffNotFoundError.
        """
        roster = self.active_staff()
        needle = name.strip().lower()

        if needle:
            exact = [s for s in roster if s.name.lower() == needle]
            if exact:
                return exact[0]

            partial = [s for s in roster if needle in s.name.lower()]
            if len(partial) == 1:
                return partial[0]

        logger.info(f"Staff '{name}' not found for tenant {self.tenant_id}")
        raise StaffNotFoundError(name, [s.name for s in roster])

    # ── Business-wide rules ──────────────────────────────────────────────

    def is_weekday_closed(self, weekday: Weekday) -> bool:
        row = (
            self.db.query(ClosedDays.id)
            .filter(
                ClosedDays.tenant_id == self.tenant_id,
                ClosedDays.weekday == int(weekday),
            )
            .first()
        )
        return row is not None

    def opening_window(self) -> ShiftWindow:
        """
        Nominal opening hours: tenant override, else configured default.

        An unreadable tenant window is logged and replaced by the default.
        """
        default = ShiftWindow(to_minutes(self.config.opening_time), to_end_minutes(self.config.closing_time))
        tenant = self.db.get(Tenants, self.tenant_id)
        if tenant is None or not (tenant.opening_time or tenant.closing_time):
            return default

        window = _parse_window(
            tenant.opening_time or self.config.opening_time,
            tenant.closing_time or self.config.closing_time,
        )
        if window is None:
            logger.warning(
                f"Ignoring invalid opening hours of tenant {self.tenant_id} "
                f"({tenant.opening_time}-{tenant.closing_time})"
            )
            return default
        return window

    # ── Shifts ───────────────────────────────────────────────────────────

    def working_window(self, staff_id: int, weekday: Weekday) -> ShiftWindow | None:
        """None when there is no shift row or the row says is_working = 0."""
        windows, _ = self.working_windows(weekday, [staff_id])
        return windows.get(staff_id)

    def working_windows(
        self,
        weekday: Weekday,
        staff_ids: list[int],
    ) -> tuple[dict[int, ShiftWindow | None], set[int]]:
        """
        Shift windows of several staff members for one weekday.

        Returns (windows, configured): configured holds the staff ids that
        have a shift row at all, so "explicitly off" can be told apart from
        "never configured".
        """
        windows: dict[int, ShiftWindow | None] = {sid: None for sid in staff_ids}
        configured: set[int] = set()
        if not staff_ids:
            return windows, configured

        rows = (
            self.db.query(StaffShifts)
            .filter(
                StaffShifts.tenant_id == self.tenant_id,
                StaffShifts.day_of_week == int(weekday),
                StaffShifts.staff_member_id.in_(staff_ids),
            )
            .all()
        )
        for row in rows:
            configured.add(row.staff_member_id)
            if not row.is_working:
                continue
            window = _parse_window(row.start_time, row.end_time)
            if window is None:
                logger.warning(
                    f"Ignoring invalid shift {row.id} "
                    f"({row.start_time}-{row.end_time}) of staff {row.staff_member_id}"
                )
                continue
            windows[row.staff_member_id] = window

        return windows, configured

    # ── Exceptions (Freistellungen) ──────────────────────────────────────

    def exceptions_for(self, target_date: date, staff_ids: list[int] | None = None) -> list[BlockedWindow]:
        query = self.db.query(ShiftExceptions).filter(
            ShiftExceptions.tenant_id == self.tenant_id,
            ShiftExceptions.exception_date == target_date.isoformat(),
        )
        if staff_ids is not None:
            query = query.filter(ShiftExceptions.staff_member_id.in_(staff_ids))

        blocked = []
        for row in query.all():
            window = _parse_window(row.start_time, row.end_time)
            if window is None:
                logger.warning(f"Ignoring invalid shift exception {row.id} ({row.start_time}-{row.end_time})")
                continue
            blocked.append(BlockedWindow(row.staff_member_id, window.start, window.end, row.reason))
        return blocked

    def is_exception_blocking(self, staff_id: int, target_date: date, start: int, end: int) -> bool:
        return any(
            overlaps(start, end, exc.start, exc.end)
            for exc in self.exceptions_for(target_date, [staff_id])
        )


def _parse_window(start_time: str, end_time: str) -> ShiftWindow | None:
    """Stored "HH:MM" pair → window; None for malformed or empty windows."""
    try:
        start, end = to_minutes(start_time), to_end_minutes(end_time)
    except MalformedTimeError:
        return None
    if end <= start:
        return None
    return ShiftWindow(start, end)
