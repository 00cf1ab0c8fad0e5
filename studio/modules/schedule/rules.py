"""
Selection-day rules.

A schedule selection is classified as Saturday, weekday or mixed. A
single enrolment cannot straddle Saturday-only and weekday plans, so the
classification decides which plans a selection may use.
"""

from datetime import date
from typing import Iterable, List, Mapping, Optional
from studio.modules.plans.models import BillingType, EnrolmentPlan
from studio.modules.schedule.schemas import ScheduleOccurrence, SelectionDay

SATURDAY_INDEX = 5  # Monday=0


def day_of_week_from_date(value: date) -> int:
    return value.weekday()


def resolve_occurrence_day_of_week(occurrence: ScheduleOccurrence) -> Optional[int]:
    if occurrence.day_of_week is not None:
        return occurrence.day_of_week
    if occurrence.start_time is not None:
        return day_of_week_from_date(occurrence.start_time)
    return None


def is_saturday_occurrence(occurrence: ScheduleOccurrence) -> bool:
    if occurrence.is_saturday is not None:
        return occurrence.is_saturday
    return resolve_occurrence_day_of_week(occurrence) == SATURDAY_INDEX


def resolve_selection_day(selection: Mapping[str, ScheduleOccurrence]) -> SelectionDay:
    entries = list(selection.values())
    if not entries:
        return None
    has_saturday = any(is_saturday_occurrence(entry) for entry in entries)
    has_weekday = any(not is_saturday_occurrence(entry) for entry in entries)
    if has_saturday and has_weekday:
        return "mixed"
    return "saturday" if has_saturday else "weekday"


def plan_matches_selection_day(plan: EnrolmentPlan, selection_day: SelectionDay) -> bool:
    # Weekly plans attend any class at the level, Saturday or not
    if selection_day == "mixed":
        return False
    if selection_day is None or plan.billing_type == BillingType.per_week:
        return True
    if selection_day == "saturday":
        return plan.is_saturday_only
    return not plan.is_saturday_only


def filter_compatible_plans(
    plans: Iterable[EnrolmentPlan],
    level_id: Optional[str],
    selection_day: SelectionDay,
) -> List[EnrolmentPlan]:
    return [
        plan for plan in plans
        if (level_id is None or plan.level_id == level_id)
        and plan_matches_selection_day(plan, selection_day)
    ]
