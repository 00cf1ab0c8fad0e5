"""Rules for merging several enrolments of one student into a single plan."""

from typing import Dict, Iterable, List, Optional, Sequence
from studio.modules.classes.models import ClassTemplate
from studio.modules.enrolment.schemas import MergeCandidate
from studio.modules.plans.models import EnrolmentPlan
from studio.modules.plans.rules import get_selection_requirement
from studio.modules.schedule.rules import plan_matches_selection_day, resolve_selection_day
from studio.modules.schedule.schemas import ScheduleOccurrence


def collect_merge_templates(candidates: Iterable[MergeCandidate]) -> List[ClassTemplate]:
    templates: Dict[str, ClassTemplate] = {}
    for candidate in candidates:
        for template in candidate.templates:
            templates.setdefault(template.id, template)
    return list(templates.values())


def _selection_day(templates: Sequence[ClassTemplate]):
    return resolve_selection_day({
        template.id: ScheduleOccurrence(template_id=template.id, day_of_week=template.day_of_week)
        for template in templates
    })


def eligible_merge_plans(candidates: Sequence[MergeCandidate], plans: Iterable[EnrolmentPlan]) -> List[EnrolmentPlan]:
    templates = collect_merge_templates(candidates)
    billing_type = candidates[0].plan.billing_type if candidates and candidates[0].plan else None
    level_id = templates[0].level_id if templates else None
    selection_day = _selection_day(templates)
    if billing_type is None or level_id is None or selection_day == "mixed":
        return []

    return [
        plan for plan in plans
        if plan.level_id == level_id
        and plan.billing_type == billing_type
        and plan_matches_selection_day(plan, selection_day)
        and get_selection_requirement(plan).required_count == len(templates)
    ]


def merge_blocked_reason(candidates: Sequence[MergeCandidate], plans: Iterable[EnrolmentPlan]) -> Optional[str]:
    if len(candidates) < 2:
        return "Select at least two enrolments to merge."
    billing_type = candidates[0].plan.billing_type if candidates[0].plan else None
    if billing_type is None:
        return "Selected enrolments must have a billing plan."
    if any(candidate.plan is None or candidate.plan.billing_type != billing_type for candidate in candidates):
        return "Selected enrolments must share the same billing type."

    templates = collect_merge_templates(candidates)
    level_id = templates[0].level_id if templates else None
    if not level_id:
        return "Selected enrolments must have assigned classes."
    if any(template.level_id != level_id for template in templates):
        return "Selected enrolments must be within the same level."
    if _selection_day(templates) == "mixed":
        return "Selected enrolments must be either all Saturday or all weekday classes."
    if not eligible_merge_plans(candidates, plans):
        return "No matching enrolment plan can cover the merged classes."
    return None
