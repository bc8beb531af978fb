# booking_api/routers/staff.py
# Read-only: staff, shifts and exceptions are maintained in the dashboard

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_tenant
from ..database import get_db
from ..models.generated import Tenants
from ..schemas.staff import StaffRead
from ..services.scheduling.resolver import ScheduleResolver

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("", response_model=list[StaffRead])
def list_staff(
    tenant: Tenants = Depends(get_current_tenant),
    db: Session = Depends(get_db),
):
    """Active roster in display order."""
    return ScheduleResolver(db, tenant.id).active_staff()
