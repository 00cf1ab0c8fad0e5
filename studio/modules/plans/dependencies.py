from fastapi import Depends
from studio.modules.plans.repository import PlanRepository
from studio.modules.plans.service import PlanService

def get_plan_service(
    plan_repo: PlanRepository = Depends(),
) -> PlanService:
    return PlanService(plan_repo)
