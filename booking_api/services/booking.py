# booking_api/services/booking.py
"""
Booking transactor.

Flow:
1. Validate required fields, normalize date/time
2. Resolve staff name → staff id, product → price/duration
3. Under the per-(tenant, date) booking lock:
   re-check availability with a fresh snapshot, insert, commit
4. Best-effort side effects (notification row in the same commit via
   savepoint, Redis event after the commit)

The lock turns the check-then-insert into a critical section: two
concurrent bookings of the same slot cannot both pass the re-check.
"""

import logging
from dataclasses import dataclass

from redis import Redis
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import (
    InvalidStatusTransitionError,
    PersistenceError,
    ReservationNotFoundError,
    SlotConflictError,
    ValidationError,
)
from ..models.generated import Products, Reservations
from ..schemas.reservations import BookingRequest
from .events import emit_event, record_booking_notification, reservation_event_payload
from .messages import availability_message, booked_message
from .scheduling.alternatives import AlternativeFinder
from .scheduling.config import SchedulingConfig, get_scheduling_config
from .scheduling.evaluator import AvailabilityEvaluator
from .scheduling.timeutils import normalize_time, parse_date, to_end_time_string
from .scheduling.types import (
    STATUS_TRANSITIONS,
    AvailabilityResult,
    ReservationStatus,
    StaffRef,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("customer_name", "reservation_date", "reservation_time")


@dataclass
class BookingOutcome:
    reservation: Reservations
    staff: StaffRef | None
    result: AvailabilityResult

    @property
    def message(self) -> str:
        return booked_message(self.result, self.staff.name if self.staff else None)


class BookingService:
    def __init__(
        self,
        db: Session,
        tenant_id: int,
        locks,
        redis: Redis | None = None,
        config: SchedulingConfig | None = None,
    ):
        self.db = db
        self.tenant_id = tenant_id
        self.locks = locks
        self.redis = redis
        self.config = config or get_scheduling_config()

    # ── Booking ──────────────────────────────────────────────────────────

    def book(self, request: BookingRequest) -> BookingOutcome:
        missing = [
            name for name in REQUIRED_FIELDS
            if not (getattr(request, name) or "").strip()
        ]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                fields=missing,
            )

        target_date = parse_date(request.reservation_date)
        time = normalize_time(request.reservation_time)

        evaluator = AvailabilityEvaluator(self.db, self.tenant_id, self.config)
        staff = evaluator.resolve_staff(request.employee)
        product = self._resolve_product(request)

        duration = request.duration
        if duration is None and product is not None:
            duration = product.duration_minutes
        candidate = evaluator.build_candidate(target_date, time, duration, staff)

        price = request.price_paid
        if price is None and product is not None:
            price = product.price

        staff_name = staff.name if staff else None

        with self.locks.hold(self.tenant_id, target_date):
            # fresh snapshot: reservations may have landed since the caller's /check
            checker = AvailabilityEvaluator(self.db, self.tenant_id, self.config)
            result = checker.check(candidate)

            if not result.available:
                alternatives = AlternativeFinder(checker).find(candidate)
                logger.warning(
                    f"Booking rejected for tenant {self.tenant_id}: {target_date} {time} "
                    f"staff={staff_name} ({result.block_reason.value})"
                )
                raise SlotConflictError(
                    availability_message(result, staff_name),
                    alternatives=alternatives.to_dict(),
                    conflicts=[c.summary() for c in result.conflicts],
                    block_reason=result.block_reason.value,
                )

            reservation = Reservations(
                tenant_id=self.tenant_id,
                customer_name=request.customer_name.strip(),
                customer_phone=_clean(request.customer_phone),
                customer_email=_clean(request.customer_email),
                reservation_date=target_date.isoformat(),
                reservation_time=time,
                end_time=to_end_time_string(candidate.end),
                party_size=request.party_size or self.config.default_party_size,
                status=ReservationStatus.CONFIRMED.value,
                staff_member_id=staff.id if staff else None,
                product_id=product.id if product else None,
                price_paid=price,
                notes=_clean(request.notes),
                source=_clean(request.source) or "api",
            )
            self._commit_booking(reservation, staff_name)

        logger.info(
            f"Reservation {reservation.id} booked for tenant {self.tenant_id}: "
            f"{reservation.reservation_date} {reservation.reservation_time}-{reservation.end_time} "
            f"staff={staff_name}"
        )
        emit_event(self.redis, "reservation_created", reservation_event_payload(reservation, staff_name))
        return BookingOutcome(reservation=reservation, staff=staff, result=result)

    def _commit_booking(self, reservation: Reservations, staff_name: str | None) -> None:
        try:
            self.db.add(reservation)
            self.db.flush()
            record_booking_notification(self.db, reservation, staff_name)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Failed to save reservation for tenant {self.tenant_id}")
            raise PersistenceError("Reservation could not be saved") from e
        self.db.refresh(reservation)

    def _resolve_product(self, request: BookingRequest) -> Products | None:
        if request.product_id is None and not (request.product_name or "").strip():
            return None

        products = (
            self.db.query(Products)
            .filter(Products.tenant_id == self.tenant_id, Products.is_active == 1)
            .order_by(Products.id)
            .all()
        )
        if request.product_id is not None:
            match = next((p for p in products if p.id == request.product_id), None)
            wanted = str(request.product_id)
        else:
            wanted = request.product_name.strip()
            match = next((p for p in products if p.name.lower() == wanted.lower()), None)

        if match is None:
            raise ValidationError(
                f'Product "{wanted}" not found',
                available_products=[p.name for p in products],
            )
        return match

    # ── Status transitions ───────────────────────────────────────────────

    def update_status(self, reservation_id: int, new_status: ReservationStatus) -> Reservations:
        reservation = (
            self.db.query(Reservations)
            .filter(
                Reservations.id == reservation_id,
                Reservations.tenant_id == self.tenant_id,
            )
            .first()
        )
        if reservation is None:
            raise ReservationNotFoundError(f"Reservation {reservation_id} not found")

        current = ReservationStatus(reservation.status)
        if new_status is current:
            return reservation
        if new_status not in STATUS_TRANSITIONS.get(current, frozenset()):
            raise InvalidStatusTransitionError(
                f"Cannot change status from {current.value} to {new_status.value}",
                current_status=current.value,
            )

        reservation.status = new_status.value
        reservation.updated_at = func.current_timestamp()
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Failed to update status of reservation {reservation_id}")
            raise PersistenceError("Reservation status could not be saved") from e
        self.db.refresh(reservation)

        logger.info(f"Reservation {reservation_id}: {current.value} → {new_status.value}")
        emit_event(self.redis, "reservation_status_changed", {
            "tenant_id": self.tenant_id,
            "reservation_id": reservation_id,
            "previous_status": current.value,
            "status": new_status.value,
        })
        return reservation


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
