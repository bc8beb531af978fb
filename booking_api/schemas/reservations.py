# booking_api/schemas/reservations.py

from typing import Optional
from pydantic import BaseModel, Field

from ..services.scheduling.types import ReservationStatus


class BookingRequest(BaseModel):
    # presence of the three required fields is checked by the booking
    # service so that every caller gets the same VALIDATION_ERROR body
    customer_name: Optional[str] = None
    reservation_date: Optional[str] = Field(None, description="DD.MM.YYYY or YYYY-MM-DD")
    reservation_time: Optional[str] = Field(None, description="H:MM or HH:MM")

    duration: Optional[int] = Field(None, gt=0, le=24 * 60, description="Minutes, default 60")
    employee: Optional[str] = Field(None, description="Staff member name")
    party_size: Optional[int] = Field(None, ge=1)

    product_id: Optional[int] = None
    product_name: Optional[str] = None
    price_paid: Optional[float] = Field(None, ge=0)

    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    notes: Optional[str] = None
    source: Optional[str] = None

    model_config = {"extra": "ignore"}


class ReservationRead(BaseModel):
    id: int

    customer_name: str
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None

    reservation_date: str
    reservation_time: str
    end_time: Optional[str] = None

    party_size: int
    status: str
    source: str

    staff_member_id: Optional[int] = None
    product_id: Optional[int] = None
    price_paid: Optional[float] = None
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    success: bool = True
    booked: bool = True
    reservation_id: int
    reservation: ReservationRead
    staff_member: Optional[str] = None
    message: str


class StatusUpdate(BaseModel):
    status: ReservationStatus


class OccupiedReservation(BaseModel):
    id: int
    customer: str
    staff_member_id: Optional[int] = None
    start_time: str
    time_range: str
    status: ReservationStatus
