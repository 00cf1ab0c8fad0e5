from fastapi import APIRouter, Depends
from studio.modules.enrolment.dependencies import get_enrolment_service
from studio.modules.enrolment.schemas import (
    EnrolmentActionResult,
    EnrolmentSelectionCreate,
    MergeCheckRequest,
    MergeCheckResponse,
)
from studio.modules.enrolment.service import EnrolmentService

enrolment_router = APIRouter(prefix="/enrolments", tags=["Enrolment"])

# Capacity conflicts come back as ok=false so the caller can ask for an override
@enrolment_router.post("/selection", response_model=EnrolmentActionResult)
async def create_enrolments_from_selection(
    payload: EnrolmentSelectionCreate,
    enrolment_service: EnrolmentService = Depends(get_enrolment_service)
):
    return await enrolment_service.create_enrolments_from_selection(payload)

@enrolment_router.post("/merge-check", response_model=MergeCheckResponse)
async def check_merge(
    request: MergeCheckRequest,
    enrolment_service: EnrolmentService = Depends(get_enrolment_service)
):
    return await enrolment_service.check_merge(request)
