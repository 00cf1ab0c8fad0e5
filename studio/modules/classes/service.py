from fastapi import HTTPException
from typing import Iterable, Optional
from datetime import date
import logging
from studio.modules.classes.repository import ClassRepository
from studio.modules.enrolment.repository import EnrolmentRepository
from studio.modules.classes.models import ClassInstance, ClassTemplate, Level
from studio.modules.classes.schemas import (
    CapacityCheckRequest,
    CapacityCheckResult,
    CapacityExceededDetails,
    CapacitySnapshot,
)
from studio.modules.classes import capacity
from studio.modules.plans.models import EnrolmentPlan

log = logging.getLogger(__name__)


class ClassService:
    def __init__(self,
                 class_repo: ClassRepository,
                 enrolment_repo: EnrolmentRepository
                 ):
        self.class_repo = class_repo
        self.enrolment_repo = enrolment_repo

    async def get_template(self, template_id: str) -> ClassTemplate:
        template = await self.class_repo.find_template_by_id(template_id)
        if not template:
            raise HTTPException(status_code=404, detail="Class template not found")
        return ClassTemplate(**template)

    async def _resolve_capacity(self, template: ClassTemplate, occurrence_date: date):
        date_key = capacity.format_date_key(occurrence_date)
        instance = await self.class_repo.find_instance(template.id, date_key)
        level = await self.class_repo.find_level_by_id(template.level_id) if template.level_id else None
        limit = capacity.resolve_effective_capacity(
            instance=ClassInstance(**instance) if instance else None,
            template=template,
            level=Level(**level) if level else None,
        )
        roster = await self.enrolment_repo.find_enrolment_ids_for_occurrence(template.id, date_key)
        return limit, roster

    async def get_occupancy(self, template_id: str, occurrence_date: date) -> CapacitySnapshot:
        template = await self.get_template(template_id)
        limit, roster = await self._resolve_capacity(template, occurrence_date)
        return CapacitySnapshot(
            template_id=template.id,
            occurrence_date_key=capacity.format_date_key(occurrence_date),
            capacity=limit,
            current_count=len(roster),
        )

    async def get_capacity_snapshot(
        self,
        template_id: str,
        occurrence_date: date,
        additional_seats: int = 1,
        existing_enrolment_id: Optional[str] = None,
    ) -> Optional[CapacityExceededDetails]:
        template = await self.get_template(template_id)
        limit, roster = await self._resolve_capacity(template, occurrence_date)
        if limit is None:
            return None

        # Moving an enrolment within a class does not take another seat
        already_included = existing_enrolment_id is not None and existing_enrolment_id in roster
        return capacity.build_capacity_details(
            template=template,
            occurrence_date=occurrence_date,
            capacity=limit,
            current_count=len(roster),
            additional_seats=0 if already_included else additional_seats,
        )

    async def get_capacity_issue_for_occurrences(
        self,
        template_id: str,
        occurrence_dates: Iterable[date],
        additional_seats: int = 1,
        existing_enrolment_id: Optional[str] = None,
    ) -> Optional[CapacityExceededDetails]:
        for occurrence_date in sorted(occurrence_dates):
            snapshot = await self.get_capacity_snapshot(
                template_id,
                occurrence_date,
                additional_seats=additional_seats,
                existing_enrolment_id=existing_enrolment_id,
            )
            if capacity.is_over_capacity(snapshot):
                return snapshot
        return None

    async def get_capacity_issue_for_window(
        self,
        template: ClassTemplate,
        plan: EnrolmentPlan,
        window_start: date,
        window_end: Optional[date],
        additional_seats: int = 1,
        existing_enrolment_id: Optional[str] = None,
    ) -> Optional[CapacityExceededDetails]:
        occurrences = capacity.list_capacity_occurrences_for_template(template, plan, window_start, window_end)
        if not occurrences:
            return None
        return await self.get_capacity_issue_for_occurrences(
            template.id,
            occurrences,
            additional_seats=additional_seats,
            existing_enrolment_id=existing_enrolment_id,
        )

    async def check_class_capacity(self, request: CapacityCheckRequest) -> CapacityCheckResult:
        instance = await self.class_repo.find_instance_by_id(request.class_id)
        if instance:
            instance = ClassInstance(**instance)
            template_id = instance.template_id
            occurrence_date = instance.occurrence_date
        else:
            template = await self.class_repo.find_template_by_id(request.class_id)
            if not template:
                raise HTTPException(status_code=404, detail="Class not found")
            template = ClassTemplate(**template)
            template_id = template.id
            occurrence_date = request.occurrence_date or capacity.resolve_occurrence_date_on_or_after(
                template, date.today()
            )
            if occurrence_date is None:
                return CapacityCheckResult(ok=True)

        details = await self.get_capacity_snapshot(
            template_id,
            occurrence_date,
            additional_seats=request.additional_seats,
        )
        result = capacity.check_capacity(details, allow_overload=request.allow_overload)
        if request.allow_overload and capacity.is_over_capacity(details):
            log.warning(
                "Capacity override for template %s on %s (%s/%s)",
                template_id, details.occurrence_date_key, details.projected_count, details.capacity
            )
        return result
