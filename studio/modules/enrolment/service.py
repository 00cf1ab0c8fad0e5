from fastapi import HTTPException
from datetime import date
import logging
from studio.modules.enrolment.repository import EnrolmentRepository
from studio.modules.plans.repository import PlanRepository
from studio.modules.students.repository import StudentRepository
from studio.modules.classes.repository import ClassRepository
from studio.modules.classes.service import ClassService
from studio.modules.classes.capacity import check_capacity
from studio.modules.classes.models import ClassTemplate
from studio.modules.enrolment.models import Enrolment, EnrolmentStatus
from studio.modules.enrolment.schemas import (
    EnrolmentActionResult,
    EnrolmentSelectionCreate,
    EnrolmentWindow,
    MergeCandidate,
    MergeCheckRequest,
    MergeCheckResponse,
)
from studio.modules.enrolment.validation import (
    EnrolmentValidationError,
    validate_no_duplicate_enrolments,
    validate_selection,
)
from studio.modules.enrolment.merge import eligible_merge_plans, merge_blocked_reason
from studio.modules.plans.models import BillingType, EnrolmentPlan
from studio.modules.plans.rules import (
    get_selection_requirement,
    initial_accounting_for_plan,
    resolve_planned_end_date,
)
from studio.modules.schedule.rules import plan_matches_selection_day, resolve_selection_day
from studio.modules.schedule.schemas import ScheduleOccurrence
from studio.modules.students.models import Student

log = logging.getLogger(__name__)


class EnrolmentService:
    def __init__(self,
                 enrolment_repo: EnrolmentRepository,
                 plan_repo: PlanRepository,
                 student_repo: StudentRepository,
                 class_repo: ClassRepository,
                 class_service: ClassService
                 ):
        self.enrolment_repo = enrolment_repo
        self.plan_repo = plan_repo
        self.student_repo = student_repo
        self.class_repo = class_repo
        self.class_service = class_service

    async def create_enrolments_from_selection(self, payload: EnrolmentSelectionCreate) -> EnrolmentActionResult:
        start_date = payload.start_date or date.today()
        template_ids = list(dict.fromkeys(payload.template_ids))

        plan = await self.plan_repo.find_plan_by_id(payload.plan_id)
        if not plan:
            raise HTTPException(status_code=404, detail="Enrolment plan not found")
        plan = EnrolmentPlan(**plan)

        student = await self.student_repo.find_student_by_id(payload.student_id)
        if not student:
            raise HTTPException(status_code=404, detail="Student not found")
        student = Student(**student)

        templates = [ClassTemplate(**t) for t in await self.class_repo.find_templates_by_ids(template_ids)]

        if student.level_id and plan.level_id != student.level_id:
            raise HTTPException(status_code=400, detail="Plan level must match the student level")
        if plan.billing_type == BillingType.per_week and not plan.duration_weeks:
            raise HTTPException(status_code=400, detail="Weekly plans require duration_weeks")
        if plan.billing_type == BillingType.per_class and plan.block_class_count is not None and plan.block_class_count <= 0:
            raise HTTPException(status_code=400, detail="Per-class plans require a positive class count")
        if len(templates) != len(template_ids):
            raise HTTPException(status_code=400, detail="Some selected classes could not be found")

        selection_check = validate_selection(plan, template_ids, templates)
        if not selection_check.ok:
            raise HTTPException(status_code=400, detail=selection_check.message)

        selection_day = resolve_selection_day({
            template.id: ScheduleOccurrence(template_id=template.id, day_of_week=template.day_of_week)
            for template in templates
        })
        if selection_day == "mixed":
            raise HTTPException(status_code=400, detail="Select either Saturday classes or weekday classes, not both")
        if not plan_matches_selection_day(plan, selection_day):
            raise HTTPException(status_code=400, detail=f"{plan.name} cannot be used for {selection_day} classes")

        windows = []
        for template in templates:
            aligned_start = max(start_date, template.start_date)
            if template.end_date and aligned_start > template.end_date:
                raise HTTPException(
                    status_code=400,
                    detail=f"Start date is after the class template ends for {template.name or 'class'}"
                )
            end_date = resolve_planned_end_date(plan, aligned_start, payload.end_date, template.end_date)
            if end_date and end_date < aligned_start:
                raise HTTPException(status_code=400, detail="End date must be on or after the start date")
            if end_date and template.end_date and end_date > template.end_date:
                end_date = template.end_date
            windows.append(EnrolmentWindow(
                template_id=template.id,
                template_name=template.name,
                start_date=aligned_start,
                end_date=end_date,
            ))

        existing = await self.enrolment_repo.find_student_enrolments_for_templates(student.id, template_ids)
        try:
            validate_no_duplicate_enrolments(windows, [Enrolment(**row) for row in existing])
        except EnrolmentValidationError as e:
            raise HTTPException(status_code=409, detail=str(e))

        templates_by_id = {template.id: template for template in templates}
        for window in windows:
            issue = await self.class_service.get_capacity_issue_for_window(
                templates_by_id[window.template_id],
                plan,
                window.start_date,
                window.end_date,
            )
            result = check_capacity(issue, allow_overload=payload.allow_overload)
            if not result.ok:
                log.info(
                    "Enrolment for student %s blocked: %s full on %s",
                    student.id, issue.template_id, issue.occurrence_date_key
                )
                return EnrolmentActionResult(ok=False, error=result.error)
            if issue:
                log.warning(
                    "Overloading %s on %s for student %s (%s/%s)",
                    issue.template_id, issue.occurrence_date_key, student.id,
                    issue.projected_count, issue.capacity
                )

        status = payload.status or EnrolmentStatus.active
        enrolments = [
            Enrolment(
                student_id=student.id,
                template_id=window.template_id,
                plan_id=plan.id,
                start_date=window.start_date,
                end_date=window.end_date,
                status=status,
                **initial_accounting_for_plan(plan, window.start_date),
            )
            for window in windows
        ]
        await self.enrolment_repo.add_enrolments(enrolments)
        log.info("Created %s enrolment(s) for student %s on plan %s", len(enrolments), student.id, plan.id)

        return EnrolmentActionResult(
            ok=True,
            enrolments=enrolments,
            requirement=get_selection_requirement(plan),
        )

    async def check_merge(self, request: MergeCheckRequest) -> MergeCheckResponse:
        rows = await self.enrolment_repo.find_enrolments_by_ids(request.enrolment_ids)
        if len(rows) != len(set(request.enrolment_ids)):
            raise HTTPException(status_code=404, detail="Enrolment not found")
        enrolments = [Enrolment(**row) for row in rows]

        plans = {
            plan["id"]: EnrolmentPlan(**plan)
            for plan in await self.plan_repo.find_plans_by_ids({e.plan_id for e in enrolments})
        }
        templates = {
            template["id"]: ClassTemplate(**template)
            for template in await self.class_repo.find_templates_by_ids({e.template_id for e in enrolments})
        }

        candidates = [
            MergeCandidate(
                enrolment_id=enrolment.id,
                plan=plans.get(enrolment.plan_id),
                templates=[templates[enrolment.template_id]] if enrolment.template_id in templates else [],
            )
            for enrolment in enrolments
        ]
        available = [EnrolmentPlan(**plan) for plan in await self.plan_repo.find_plans()]

        reason = merge_blocked_reason(candidates, available)
        return MergeCheckResponse(
            blocked_reason=reason,
            eligible_plans=[] if reason else eligible_merge_plans(candidates, available),
        )
