from typing import Dict
from studio.modules.plans.repository import PlanRepository
from studio.modules.plans.models import EnrolmentPlan
from studio.modules.schedule.schemas import CompatiblePlansResponse, ScheduleOccurrence, SelectionDayResponse
from studio.modules.schedule import rules


class ScheduleService:
    def __init__(self, plan_repo: PlanRepository):
        self.plan_repo = plan_repo

    async def classify_selection(self, occurrences: Dict[str, ScheduleOccurrence]) -> SelectionDayResponse:
        return SelectionDayResponse(selection_day=rules.resolve_selection_day(occurrences))

    async def get_compatible_plans(self, level_id: str, occurrences: Dict[str, ScheduleOccurrence]) -> CompatiblePlansResponse:
        selection_day = rules.resolve_selection_day(occurrences)
        if selection_day == "mixed":
            return CompatiblePlansResponse(selection_day=selection_day, plans=[])

        plans = await self.plan_repo.find_plans({"level_id": level_id})
        compatible = rules.filter_compatible_plans(
            [EnrolmentPlan(**plan) for plan in plans],
            level_id,
            selection_day,
        )
        return CompatiblePlansResponse(selection_day=selection_day, plans=compatible)
