from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime, timezone
from enum import Enum
import uuid


class BillingType(str, Enum):
    per_week = "PER_WEEK"
    per_class = "PER_CLASS"

class EnrolmentType(str, Enum):
    class_ = "CLASS"
    block = "BLOCK"

class EnrolmentPlan(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    price_cents: int
    level_id: str
    billing_type: BillingType
    enrolment_type: EnrolmentType = EnrolmentType.class_
    is_saturday_only: bool = False
    block_class_count: Optional[int] = None  # PER_CLASS only
    sessions_per_week: Optional[int] = None
    duration_weeks: Optional[int] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
