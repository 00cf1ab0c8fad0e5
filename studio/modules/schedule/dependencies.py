from fastapi import Depends
from studio.modules.plans.repository import PlanRepository
from studio.modules.schedule.service import ScheduleService

def get_schedule_service(
    plan_repo: PlanRepository = Depends(),
) -> ScheduleService:
    return ScheduleService(plan_repo)
