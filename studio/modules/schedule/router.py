from fastapi import APIRouter, Depends
from studio.modules.schedule.dependencies import get_schedule_service
from studio.modules.schedule.schemas import (
    CompatiblePlansRequest,
    CompatiblePlansResponse,
    SelectionDayRequest,
    SelectionDayResponse,
)
from studio.modules.schedule.service import ScheduleService

schedule_router = APIRouter(prefix="/schedule", tags=["Schedule"])

@schedule_router.post("/selection-day", response_model=SelectionDayResponse)
async def classify_selection(
    request: SelectionDayRequest,
    schedule_service: ScheduleService = Depends(get_schedule_service)
):
    return await schedule_service.classify_selection(request.occurrences)

@schedule_router.post("/compatible-plans", response_model=CompatiblePlansResponse)
async def get_compatible_plans(
    request: CompatiblePlansRequest,
    schedule_service: ScheduleService = Depends(get_schedule_service)
):
    return await schedule_service.get_compatible_plans(request.level_id, request.occurrences)
