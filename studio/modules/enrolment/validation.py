"""Checks run on an enrolment selection before anything is written."""

from collections import namedtuple
from datetime import date
from typing import Iterable, Optional, Sequence, Set
from studio.modules.classes.models import ClassTemplate
from studio.modules.enrolment.models import Enrolment, EnrolmentStatus
from studio.modules.enrolment.schemas import EnrolmentWindow
from studio.modules.plans.models import EnrolmentPlan
from studio.modules.plans.rules import get_selection_requirement

RuleResult = namedtuple("RuleResult", ["ok", "message"])

DUPLICATE_ENROLMENT = "DUPLICATE_ENROLMENT"

BLOCKING_STATUSES = (EnrolmentStatus.active, EnrolmentStatus.paused)


class EnrolmentValidationError(Exception):
    def __init__(self, code: str, template_id: str, message: str, conflicting_enrolment_id: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.details = {
            "code": code,
            "template_id": template_id,
            "message": message,
            "conflicting_enrolment_id": conflicting_enrolment_id,
        }


def _classes(count: int) -> str:
    return "1 class" if count == 1 else f"{count} classes"


def validate_selection(
    plan: EnrolmentPlan,
    template_ids: Sequence[str],
    templates: Iterable[ClassTemplate],
) -> RuleResult:
    requirement = get_selection_requirement(plan)
    selected = list(dict.fromkeys(template_ids))

    if len(selected) < requirement.required_count:
        return RuleResult(False, f"This plan requires {_classes(requirement.required_count)}; {len(selected)} selected.")
    if len(selected) > requirement.max_count:
        return RuleResult(False, f"This plan allows at most {_classes(requirement.max_count)}; {len(selected)} selected.")

    by_id = {template.id: template for template in templates}
    for template_id in selected:
        template = by_id.get(template_id)
        if template is None:
            return RuleResult(False, "Some selected classes could not be found.")
        if not template.active:
            return RuleResult(False, f"{template.name or 'Selected class'} is no longer active.")
        if template.level_id != plan.level_id:
            return RuleResult(False, "Selected classes must match the plan level.")

    return RuleResult(True, None)


def overlaps(a_start: date, a_end: Optional[date], b_start: date, b_end: Optional[date]) -> bool:
    a_end_safe = a_end or date.max
    b_end_safe = b_end or date.max
    return a_start <= b_end_safe and b_start <= a_end_safe


def validate_no_duplicate_enrolments(
    candidate_windows: Iterable[EnrolmentWindow],
    existing_enrolments: Iterable[Enrolment],
    ignore_enrolment_ids: Optional[Set[str]] = None,
    treat_paused_as_active: bool = True,
):
    ignore_ids = ignore_enrolment_ids or set()
    blocking = BLOCKING_STATUSES if treat_paused_as_active else (EnrolmentStatus.active,)
    existing = [
        row for row in existing_enrolments
        if row.status in blocking and row.id not in ignore_ids
    ]

    for window in candidate_windows:
        conflict = next(
            (
                row for row in existing
                if row.template_id == window.template_id
                and overlaps(window.start_date, window.end_date, row.start_date, row.end_date)
            ),
            None
        )
        if conflict:
            raise EnrolmentValidationError(
                code=DUPLICATE_ENROLMENT,
                template_id=window.template_id,
                conflicting_enrolment_id=conflict.id,
                message=f"Student is already enrolled in {window.template_name or 'this class'} for the selected dates.",
            )
