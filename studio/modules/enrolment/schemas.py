from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from studio.modules.enrolment.models import Enrolment, EnrolmentStatus
from studio.modules.classes.models import ClassTemplate
from studio.modules.classes.schemas import CapacityError
from studio.modules.plans.models import EnrolmentPlan
from studio.modules.plans.schemas import SelectionRequirement


class EnrolmentSelectionCreate(BaseModel):
    student_id: str = Field(min_length=1)
    plan_id: str = Field(min_length=1)
    template_ids: List[str] = Field(min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[EnrolmentStatus] = None
    allow_overload: bool = False

class EnrolmentActionResult(BaseModel):
    ok: bool
    enrolments: List[Enrolment] = []
    requirement: Optional[SelectionRequirement] = None
    error: Optional[CapacityError] = None

class EnrolmentWindow(BaseModel):
    template_id: str
    start_date: date
    end_date: Optional[date] = None
    template_name: Optional[str] = None
    enrolment_id: Optional[str] = None

class MergeCandidate(BaseModel):
    enrolment_id: str
    plan: Optional[EnrolmentPlan] = None
    templates: List[ClassTemplate] = []

class MergeCheckRequest(BaseModel):
    enrolment_ids: List[str] = Field(min_length=1)

class MergeCheckResponse(BaseModel):
    blocked_reason: Optional[str] = None
    eligible_plans: List[EnrolmentPlan] = []
