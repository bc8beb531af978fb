# booking_api/services/scheduling/reservation_index.py
"""
Reservation index: existing non-cancelled reservations of a date with their
effective occupied interval.

Effective end = end_time when stored, otherwise start + default duration
(DEFAULT_DURATION_MINUTES unless configured otherwise).
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from ...errors import MalformedTimeError
from ...models.generated import Reservations
from .config import SchedulingConfig, get_scheduling_config
from .timeutils import MINUTES_PER_DAY, to_end_minutes, to_minutes
from .types import BookedInterval, ReservationStatus

logger = logging.getLogger(__name__)


class ReservationIndex:
    def __init__(self, db: Session, tenant_id: int, config: SchedulingConfig | None = None):
        self.db = db
        self.tenant_id = tenant_id
        self.config = config or get_scheduling_config()

    def reservations_for(self, target_date: date, staff_id: int | None = None) -> list[BookedInterval]:
        """
        Occupying reservations of target_date, ordered by start.

        staff_id=None → no staff filtering at all (also unassigned reservations).
        """
        query = self.db.query(Reservations).filter(
            Reservations.tenant_id == self.tenant_id,
            Reservations.reservation_date == target_date.isoformat(),
            Reservations.status != ReservationStatus.CANCELLED.value,
        )
        if staff_id is not None:
            query = query.filter(Reservations.staff_member_id == staff_id)

        intervals = []
        for row in query.all():
            interval = self.to_interval(row)
            if interval is not None:
                intervals.append(interval)

        intervals.sort(key=lambda r: (r.start, r.reservation_id))
        return intervals

    def to_interval(self, row: Reservations) -> BookedInterval | None:
        try:
            start = to_minutes(row.reservation_time)
            if row.end_time:
                end = to_end_minutes(row.end_time)
            else:
                end = min(start + self.config.default_duration_minutes, MINUTES_PER_DAY)
            status = ReservationStatus(row.status)
        except (MalformedTimeError, ValueError):
            logger.warning(
                f"Skipping reservation {row.id} with unreadable time/status "
                f"({row.reservation_time}-{row.end_time}, {row.status})"
            )
            return None

        if end <= start:
            # end_time before start: treat like a missing end time
            end = min(start + self.config.default_duration_minutes, MINUTES_PER_DAY)

        return BookedInterval(
            reservation_id=row.id,
            customer_name=row.customer_name or "",
            staff_id=row.staff_member_id,
            start=start,
            end=end,
            status=status,
        )
