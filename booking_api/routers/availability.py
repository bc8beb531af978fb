# booking_api/routers/availability.py
"""
Availability API endpoints.

GET /check - Is date/time/duration/staff free? Alternatives when not
GET /slots - All free start times of a day
GET /grid  - Per-staff classified grid for the dashboard
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import get_current_tenant
from ..database import get_db
from ..models.generated import Tenants
from ..schemas.availability import (
    AvailabilityResponse,
    GridResponse,
    SlotsResponse,
)
from ..services.messages import availability_message, slots_message
from ..services.scheduling import AlternativeFinder, AvailabilityEvaluator, build_day_grid
from ..services.scheduling.timeutils import format_date_de, parse_date, to_end_time_string
from ..services.scheduling.types import CandidateInterval, StaffRef
from ..services.scheduling.evaluator import validate_candidate


router = APIRouter(tags=["availability"])


def requested_slot(candidate: CandidateInterval, staff: StaffRef | None) -> dict:
    return {
        "date": candidate.date,
        "display_date": format_date_de(candidate.date),
        "time": candidate.time,
        "end_time": to_end_time_string(candidate.end),
        "duration": candidate.duration,
        "employee": staff.name if staff else None,
        "employee_id": staff.id if staff else None,
    }


@router.get("/check", response_model=AvailabilityResponse, response_model_exclude_none=True)
def check_availability(
    date: str = Query(..., description="DD.MM.YYYY"),
    time: str = Query(..., description="HH:MM"),
    employee: str | None = None,
    duration: int | None = Query(None, gt=0, le=24 * 60),
    tenant: Tenants = Depends(get_current_tenant),
    db: Session = Depends(get_db),
):
    """Check one slot; a blocked slot is a normal 200 answer with alternatives."""
    target_date = parse_date(date)
    evaluator = AvailabilityEvaluator(db, tenant.id)
    staff = evaluator.resolve_staff(employee)
    candidate = evaluator.build_candidate(target_date, time, duration, staff)

    result = evaluator.check(candidate)
    staff_name = staff.name if staff else None

    response = {
        "available": result.available,
        "requested": requested_slot(candidate, staff),
        "default_duration_minutes": evaluator.config.default_duration_minutes,
        "block_reason": result.block_reason,
        "message": availability_message(result, staff_name),
    }
    if not result.available:
        response["conflicting_reservations"] = [c.summary() for c in result.conflicts]
        response["alternatives"] = AlternativeFinder(evaluator).find(candidate).to_dict()

    return AvailabilityResponse(**response)


@router.get("/slots", response_model=SlotsResponse)
def list_free_slots(
    date: str = Query(..., description="DD.MM.YYYY"),
    employee: str | None = None,
    duration: int | None = Query(None, gt=0, le=24 * 60),
    tenant: Tenants = Depends(get_current_tenant),
    db: Session = Depends(get_db),
):
    """All free aligned start times of a day within the opening hours."""
    target_date = parse_date(date)
    evaluator = AvailabilityEvaluator(db, tenant.id)
    staff = evaluator.resolve_staff(employee)

    candidate = CandidateInterval(
        date=target_date,
        start=0,
        duration=duration or evaluator.config.default_duration_minutes,
        staff_id=staff.id if staff else None,
    )
    validate_candidate(candidate)
    slots = AlternativeFinder(evaluator).free_start_times(candidate)
    staff_name = staff.name if staff else None

    return SlotsResponse(
        date=target_date,
        display_date=format_date_de(target_date),
        duration=candidate.duration,
        employee=staff_name,
        closed_day=evaluator.load_day(target_date).closed,
        available_slots=slots,
        total_slots=len(slots),
        message=slots_message(len(slots), staff_name),
    )


@router.get("/grid", response_model=GridResponse)
def get_grid(
    date: str = Query(..., description="DD.MM.YYYY"),
    tenant: Tenants = Depends(get_current_tenant),
    db: Session = Depends(get_db),
):
    """Availability grid of all active staff for one day."""
    target_date = parse_date(date)
    evaluator = AvailabilityEvaluator(db, tenant.id)
    return GridResponse(**build_day_grid(evaluator, target_date))
