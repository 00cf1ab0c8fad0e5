from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime, timezone
from enum import Enum
import uuid


class EnrolmentStatus(str, Enum):
    active = "ACTIVE"
    paused = "PAUSED"
    cancelled = "CANCELLED"

class Enrolment(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    student_id: str
    template_id: str
    plan_id: str
    start_date: date
    end_date: Optional[date] = None  # open-ended
    status: EnrolmentStatus = EnrolmentStatus.active
    # Weekly plans track paid-through dates, block plans track class credits
    paid_through_date: Optional[date] = None
    credits_remaining: Optional[int] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
