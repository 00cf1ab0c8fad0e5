from pydantic import BaseModel, Field
from typing import Optional
from studio.modules.plans.models import BillingType, EnrolmentType


class SelectionRequirement(BaseModel):
    required_count: int
    max_count: int
    helper: str

class BlockPricing(BaseModel):
    per_class_price_cents: int
    total_cents: int

class BlockPricingRequest(BaseModel):
    custom_block_length: Optional[int] = Field(default=None, gt=0)

class EnrolmentPlanCreate(BaseModel):
    name: str = Field(min_length=1)
    price_cents: int = Field(gt=0)
    level_id: str = Field(min_length=1)
    billing_type: BillingType
    enrolment_type: EnrolmentType = EnrolmentType.class_
    duration_weeks: Optional[int] = Field(default=None, gt=0)
    block_class_count: Optional[int] = Field(default=None, gt=0)
    sessions_per_week: Optional[int] = Field(default=None, gt=0)
    is_saturday_only: bool = False
