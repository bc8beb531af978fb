# booking_api/routers/reservations.py
# POST/PATCH /reservations = book (re-checked, 409 on conflict)
# PATCH /reservations/{id}/status = status transition, DELETE = not offered

from fastapi import APIRouter, Depends, Query, status
from redis import Redis
from sqlalchemy.orm import Session

from ..auth import get_current_tenant
from ..database import get_db
from ..models.generated import Tenants
from ..redis_client import get_redis
from ..schemas.reservations import (
    BookingRequest,
    BookingResponse,
    OccupiedReservation,
    ReservationRead,
    StatusUpdate,
)
from ..services.booking import BookingService
from ..services.scheduling import AvailabilityEvaluator, get_booking_locks
from ..services.scheduling.timeutils import parse_date

router = APIRouter(prefix="/reservations", tags=["reservations"])


def get_booking_service(
    tenant: Tenants = Depends(get_current_tenant),
    db: Session = Depends(get_db),
    locks=Depends(get_booking_locks),
    redis: Redis | None = Depends(get_redis),
) -> BookingService:
    return BookingService(db, tenant.id, locks, redis)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
@router.patch("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: BookingRequest,
    service: BookingService = Depends(get_booking_service),
):
    outcome = service.book(data)
    return BookingResponse(
        reservation_id=outcome.reservation.id,
        reservation=ReservationRead.model_validate(outcome.reservation),
        staff_member=outcome.staff.name if outcome.staff else None,
        message=outcome.message,
    )


@router.get("", response_model=list[OccupiedReservation])
def list_reservations(
    date: str = Query(..., description="DD.MM.YYYY"),
    employee: str | None = None,
    tenant: Tenants = Depends(get_current_tenant),
    db: Session = Depends(get_db),
):
    """Reservations occupying time on a date (cancelled ones excluded)."""
    target_date = parse_date(date)
    evaluator = AvailabilityEvaluator(db, tenant.id)
    staff = evaluator.resolve_staff(employee)
    intervals = evaluator.index.reservations_for(target_date, staff.id if staff else None)
    return [{**r.summary(), "status": r.status} for r in intervals]


@router.patch("/{id}/status", response_model=ReservationRead)
def update_reservation_status(
    id: int,
    data: StatusUpdate,
    service: BookingService = Depends(get_booking_service),
):
    return service.update_status(id, data.status)
