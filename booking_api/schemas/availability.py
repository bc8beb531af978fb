# booking_api/schemas/availability.py
"""
Pydantic schemas for availability API.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from ..services.scheduling.types import BlockReason


class RequestedSlot(BaseModel):
    """The request as understood (normalized) by the server."""
    date: date
    display_date: str = Field(description="German date label, e.g. 'Dienstag, 20.10.2026'")
    time: str
    end_time: str
    duration: int
    employee: Optional[str] = None
    employee_id: Optional[int] = None


class ConflictSummary(BaseModel):
    id: int
    customer: str = Field(description="First name + last initial")
    staff_member_id: Optional[int] = None
    start_time: str
    time_range: str


class NextDayOption(BaseModel):
    date: date
    display_date: str
    time: str


class AlternativesOut(BaseModel):
    same_day_times: list[str] = []
    same_time_employees: list[str] = []
    next_days: list[NextDayOption] = []


class AvailabilityResponse(BaseModel):
    available: bool
    requested: RequestedSlot
    default_duration_minutes: int = Field(
        description="Occupancy assumed for reservations stored without end time",
    )
    block_reason: BlockReason = BlockReason.NONE
    conflicting_reservations: list[ConflictSummary] = []
    alternatives: Optional[AlternativesOut] = None
    message: str


class SlotsResponse(BaseModel):
    """All free start times of a day."""
    date: date
    display_date: str
    duration: int
    employee: Optional[str] = None
    closed_day: bool
    available_slots: list[str]
    total_slots: int
    message: str


class GridSlot(BaseModel):
    time: str
    available: bool
    block_reason: BlockReason
    customer_name: Optional[str] = None
    reservation_id: Optional[int] = None


class GridShift(BaseModel):
    start: str
    end: str


class GridStaffRow(BaseModel):
    id: int
    name: str
    color: str
    shift: Optional[GridShift] = None
    shift_configured: bool
    slots: list[GridSlot]
    available_count: int


class GridResponse(BaseModel):
    """Per-staff availability grid for the dashboard."""
    date: date
    weekday: int = Field(description="0 = Sunday … 6 = Saturday")
    closed_day: bool
    step_minutes: int
    times: list[str]
    staff: list[GridStaffRow]
