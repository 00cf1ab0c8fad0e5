from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import date

CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"


class CapacityExceededDetails(BaseModel):
    template_id: str
    template_name: str
    day_of_week: Optional[int] = None
    start_time: Optional[int] = None
    occurrence_date_key: str
    capacity: int
    current_count: int
    projected_count: int

class CapacityError(BaseModel):
    code: Literal["CAPACITY_EXCEEDED"] = CAPACITY_EXCEEDED
    details: CapacityExceededDetails

class CapacityCheckResult(BaseModel):
    ok: bool
    error: Optional[CapacityError] = None

class CapacityCheckRequest(BaseModel):
    class_id: str = Field(min_length=1)  # class instance id or class template id
    additional_seats: int = Field(default=1, ge=1)
    allow_overload: bool = False
    occurrence_date: Optional[date] = None

class CapacitySnapshot(BaseModel):
    template_id: str
    occurrence_date_key: str
    capacity: Optional[int] = None  # None means no limit
    current_count: int
