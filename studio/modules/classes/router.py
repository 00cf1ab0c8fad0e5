from fastapi import APIRouter, Depends
from datetime import date
from studio.modules.classes.dependencies import get_class_service
from studio.modules.classes.schemas import CapacityCheckRequest, CapacityCheckResult, CapacitySnapshot
from studio.modules.classes.service import ClassService

class_router = APIRouter(prefix="/classes", tags=["Classes"])

@class_router.post("/capacity-check", response_model=CapacityCheckResult)
async def check_capacity(
    request: CapacityCheckRequest,
    class_service: ClassService = Depends(get_class_service)
):
    return await class_service.check_class_capacity(request)

@class_router.get("/{template_id}/capacity", response_model=CapacitySnapshot)
async def get_occupancy(
    template_id: str,
    occurrence_date: date,
    class_service: ClassService = Depends(get_class_service)
):
    return await class_service.get_occupancy(template_id, occurrence_date)
