from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Literal
from datetime import datetime
from studio.modules.plans.models import EnrolmentPlan

SelectionDay = Optional[Literal["weekday", "saturday", "mixed"]]


class ScheduleOccurrence(BaseModel):
    template_id: Optional[str] = None
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)  # Monday=0
    start_time: Optional[datetime] = None
    level_id: Optional[str] = None
    is_saturday: Optional[bool] = None

class SelectionDayRequest(BaseModel):
    occurrences: Dict[str, ScheduleOccurrence] = {}

class SelectionDayResponse(BaseModel):
    selection_day: SelectionDay = None

class CompatiblePlansRequest(BaseModel):
    level_id: str = Field(min_length=1)
    occurrences: Dict[str, ScheduleOccurrence] = {}

class CompatiblePlansResponse(BaseModel):
    selection_day: SelectionDay = None
    plans: List[EnrolmentPlan] = []
