from fastapi import HTTPException
from typing import List, Optional
import logging
from studio.modules.plans.repository import PlanRepository
from studio.modules.plans.models import BillingType, EnrolmentPlan
from studio.modules.plans.schemas import BlockPricing, EnrolmentPlanCreate, SelectionRequirement
from studio.modules.plans import rules

log = logging.getLogger(__name__)


class PlanService:
    def __init__(self, plan_repo: PlanRepository):
        self.plan_repo = plan_repo

    async def list_plans(self, level_id: Optional[str] = None) -> List[EnrolmentPlan]:
        query = {"level_id": level_id} if level_id else {}
        plans = await self.plan_repo.find_plans(query)
        return [EnrolmentPlan(**plan) for plan in plans]

    async def get_plan(self, plan_id: str) -> EnrolmentPlan:
        plan = await self.plan_repo.find_plan_by_id(plan_id)
        if not plan:
            raise HTTPException(status_code=404, detail="Enrolment plan not found")
        return EnrolmentPlan(**plan)

    async def create_plan(self, data: EnrolmentPlanCreate) -> EnrolmentPlan:
        is_weekly = data.billing_type == BillingType.per_week
        if is_weekly and not data.duration_weeks:
            raise HTTPException(status_code=400, detail="Weekly plans must include duration_weeks")
        if not is_weekly and not data.block_class_count:
            raise HTTPException(status_code=400, detail="Per-class plans must include the number of classes")

        plan = EnrolmentPlan(
            name=data.name,
            price_cents=data.price_cents,
            level_id=data.level_id,
            billing_type=data.billing_type,
            enrolment_type=data.enrolment_type,
            duration_weeks=data.duration_weeks if is_weekly else None,
            block_class_count=None if is_weekly else data.block_class_count,
            sessions_per_week=data.sessions_per_week,
            is_saturday_only=data.is_saturday_only,
        )
        await self.plan_repo.add_plan(plan)
        log.info("Created enrolment plan %s (%s) for level %s", plan.id, plan.billing_type.value, plan.level_id)
        return plan

    async def get_selection_requirement(self, plan_id: Optional[str]) -> SelectionRequirement:
        if not plan_id:
            return rules.get_selection_requirement(None)
        plan = await self.get_plan(plan_id)
        return rules.get_selection_requirement(plan)

    async def price_block(self, plan_id: str, custom_block_length: Optional[int] = None) -> BlockPricing:
        plan = await self.get_plan(plan_id)
        if plan.billing_type != BillingType.per_class:
            raise HTTPException(status_code=400, detail="Block pricing only applies to per-class plans")

        block_length = rules.resolve_block_length(plan.block_class_count)
        if block_length <= 0:
            raise HTTPException(status_code=400, detail="Per-class plans require a positive class count")
        if custom_block_length is not None and custom_block_length < block_length:
            raise HTTPException(
                status_code=400,
                detail=f"Custom block length must be at least {block_length} classes"
            )

        return rules.calculate_block_pricing(
            price_cents=plan.price_cents,
            block_length=block_length,
            custom_block_length=custom_block_length,
        )
