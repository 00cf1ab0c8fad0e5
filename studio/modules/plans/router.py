from fastapi import APIRouter, Depends
from typing import List, Optional
from studio.modules.plans.dependencies import get_plan_service
from studio.modules.plans.models import EnrolmentPlan
from studio.modules.plans.schemas import (
    BlockPricing,
    BlockPricingRequest,
    EnrolmentPlanCreate,
    SelectionRequirement,
)
from studio.modules.plans.service import PlanService

plan_router = APIRouter(prefix="/enrolment-plans", tags=["Enrolment Plans"])

@plan_router.get("/", response_model=List[EnrolmentPlan])
async def list_plans(
    level_id: Optional[str] = None,
    plan_service: PlanService = Depends(get_plan_service)
):
    return await plan_service.list_plans(level_id)

@plan_router.post("/", response_model=EnrolmentPlan)
async def create_plan(
    data: EnrolmentPlanCreate,
    plan_service: PlanService = Depends(get_plan_service)
):
    return await plan_service.create_plan(data)

# No plan picked yet: the dialogs render a disabled state from this sentinel
@plan_router.get("/selection-requirement", response_model=SelectionRequirement)
async def get_default_selection_requirement(
    plan_id: Optional[str] = None,
    plan_service: PlanService = Depends(get_plan_service)
):
    return await plan_service.get_selection_requirement(plan_id)

@plan_router.get("/{plan_id}", response_model=EnrolmentPlan)
async def get_plan(
    plan_id: str,
    plan_service: PlanService = Depends(get_plan_service)
):
    return await plan_service.get_plan(plan_id)

@plan_router.get("/{plan_id}/selection-requirement", response_model=SelectionRequirement)
async def get_selection_requirement(
    plan_id: str,
    plan_service: PlanService = Depends(get_plan_service)
):
    return await plan_service.get_selection_requirement(plan_id)

@plan_router.post("/{plan_id}/block-pricing", response_model=BlockPricing)
async def price_block(
    plan_id: str,
    request: BlockPricingRequest,
    plan_service: PlanService = Depends(get_plan_service)
):
    return await plan_service.price_block(plan_id, request.custom_block_length)
