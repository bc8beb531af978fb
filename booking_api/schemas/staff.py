# booking_api/schemas/staff.py

from pydantic import BaseModel


class StaffRead(BaseModel):
    id: int
    name: str
    color: str
    sort_order: int

    model_config = {"from_attributes": True}
