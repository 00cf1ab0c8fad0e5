"""
Class capacity rules.

A class's seat limit comes from, in order: the dated instance, its
template, the level default. With none of those set the class is
unlimited. Going over the limit is a soft failure: callers get the
counts back and an admin may confirm the overload.
"""

from datetime import date, timedelta
from typing import List, Optional
from studio.core.config import CAPACITY_HORIZON_WEEKS
from studio.modules.classes.models import ClassInstance, ClassTemplate, Level
from studio.modules.classes.schemas import (
    CapacityCheckResult,
    CapacityError,
    CapacityExceededDetails,
)
from studio.modules.plans.models import EnrolmentPlan


def format_date_key(value: date) -> str:
    return value.isoformat()


def build_capacity_error_message(details: CapacityExceededDetails) -> str:
    return (
        f"{details.template_name} on {details.occurrence_date_key} is at capacity "
        f"({details.current_count}/{details.capacity}). "
        f"Enrolling would bring it to {details.projected_count}."
    )


class CapacityExceededError(Exception):
    def __init__(self, details: CapacityExceededDetails):
        super().__init__(build_capacity_error_message(details))
        self.details = details


def resolve_effective_capacity(
    instance: Optional[ClassInstance] = None,
    template: Optional[ClassTemplate] = None,
    level: Optional[Level] = None,
) -> Optional[int]:
    if instance is not None and instance.capacity is not None:
        return instance.capacity
    if template is not None and template.capacity is not None:
        return template.capacity
    if level is not None and level.default_capacity is not None:
        return level.default_capacity
    return None


def build_capacity_details(
    template: ClassTemplate,
    occurrence_date: date,
    capacity: int,
    current_count: int,
    additional_seats: int = 1,
) -> CapacityExceededDetails:
    return CapacityExceededDetails(
        template_id=template.id,
        template_name=template.name or "Class",
        day_of_week=template.day_of_week,
        start_time=template.start_time,
        occurrence_date_key=format_date_key(occurrence_date),
        capacity=capacity,
        current_count=current_count,
        projected_count=current_count + additional_seats,
    )


def is_over_capacity(details: Optional[CapacityExceededDetails]) -> bool:
    return details is not None and details.projected_count > details.capacity


def check_capacity(
    details: Optional[CapacityExceededDetails],
    allow_overload: bool = False,
) -> CapacityCheckResult:
    if allow_overload or not is_over_capacity(details):
        return CapacityCheckResult(ok=True)
    return CapacityCheckResult(ok=False, error=CapacityError(details=details))


def assert_capacity_available(details: Optional[CapacityExceededDetails], allow_overload: bool = False):
    if is_over_capacity(details) and not allow_overload:
        raise CapacityExceededError(details)


def resolve_occurrence_date_on_or_after(template: ClassTemplate, start_date: date) -> Optional[date]:
    if template.day_of_week is None:
        return None
    cursor = max(template.start_date, start_date)
    if template.end_date and cursor > template.end_date:
        return None
    cursor += timedelta(days=(template.day_of_week - cursor.weekday()) % 7)
    if template.end_date and cursor > template.end_date:
        return None
    return cursor


def resolve_capacity_check_end_date(
    plan: EnrolmentPlan,
    start_date: date,
    window_end_date: Optional[date],
    template_end_date: Optional[date],
) -> date:
    end_date = window_end_date

    # Open-ended windows are checked over a bounded horizon
    if end_date is None:
        weeks = plan.duration_weeks if plan.duration_weeks and plan.duration_weeks > 0 else CAPACITY_HORIZON_WEEKS
        end_date = start_date + timedelta(weeks=weeks)

    if template_end_date and end_date > template_end_date:
        end_date = template_end_date

    return end_date


def list_capacity_occurrences_for_template(
    template: ClassTemplate,
    plan: EnrolmentPlan,
    window_start: date,
    window_end: Optional[date],
) -> List[date]:
    end_date = resolve_capacity_check_end_date(plan, window_start, window_end, template.end_date)
    cursor = resolve_occurrence_date_on_or_after(template, window_start)
    dates = []
    while cursor is not None and cursor <= end_date:
        dates.append(cursor)
        cursor += timedelta(days=7)
    return dates
