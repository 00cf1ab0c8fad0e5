from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date
from enum import Enum
import uuid


class Level(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    default_capacity: Optional[int] = None

class ClassTemplate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: Optional[str] = None
    level_id: Optional[str] = None
    day_of_week: Optional[int] = None  # Monday=0 .. Sunday=6
    start_time: Optional[int] = None  # minutes after midnight
    start_date: date
    end_date: Optional[date] = None
    capacity: Optional[int] = None
    active: bool = True

class ClassInstanceStatus(str, Enum):
    scheduled = "scheduled"
    cancelled = "cancelled"

class ClassInstance(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    template_id: str
    occurrence_date: date
    capacity: Optional[int] = None  # overrides the template for this date
    status: ClassInstanceStatus = ClassInstanceStatus.scheduled
