"""
Enrolment plan rules.

Pure functions used by the enrolment flows before anything is written:
how many class templates a plan needs, what a block of classes costs,
and how a new enrolment's dates and accounting are seeded.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union, Dict, Any
from studio.modules.plans.models import BillingType, EnrolmentPlan
from studio.modules.plans.schemas import SelectionRequirement, BlockPricing


NO_PLAN_HELPER = "select a plan"


def sessions_per_week(plan: EnrolmentPlan) -> int:
    if plan.sessions_per_week and plan.sessions_per_week > 0:
        return plan.sessions_per_week
    return 1

def normalize_plan(plan: EnrolmentPlan) -> EnrolmentPlan:
    return plan.model_copy(update={"sessions_per_week": sessions_per_week(plan)})

def resolve_block_length(block_class_count: Optional[int]) -> int:
    return block_class_count if block_class_count is not None else 1


def get_selection_requirement(plan: Optional[EnrolmentPlan]) -> SelectionRequirement:
    """
    Number of class templates an enrolment on ``plan`` must select.

    Weekly plans attend any matching class at the student's level, so the
    count is the weekly cadence no matter which templates are picked.
    Block plans need exactly their block class count.
    """
    if plan is None:
        return SelectionRequirement(required_count=1, max_count=1, helper=NO_PLAN_HELPER)

    if plan.billing_type == BillingType.per_week:
        count = sessions_per_week(plan)
        if count > 1:
            helper = (
                f"Weekly plans cover {count} classes per week. "
                f"Select any {count} matching classes at the student's level."
            )
        else:
            helper = "Weekly plans cover any class at the student's level. Select any matching class."
        return SelectionRequirement(required_count=count, max_count=count, helper=helper)

    count = resolve_block_length(plan.block_class_count)
    helper = "Select 1 class for this plan." if count == 1 else f"Select {count} classes for this plan."
    return SelectionRequirement(required_count=count, max_count=count, helper=helper)


def calculate_block_pricing(
    price_cents: int,
    block_length: int,
    custom_block_length: Optional[int] = None,
) -> BlockPricing:
    """
    Per-class and total price for a block plan.

    A custom length at or above the plan's block length extends the block
    at the same per-class rate. Shorter custom lengths are refused by the
    caller, here they fall back to the base price.
    """
    if block_length <= 0:
        raise ValueError("Block length must be greater than zero")

    per_class = int(
        (Decimal(price_cents) / Decimal(block_length)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )
    if custom_block_length is not None and custom_block_length >= block_length:
        total = per_class * custom_block_length
    else:
        total = price_cents
    return BlockPricing(per_class_price_cents=per_class, total_cents=total)


def normalize_start_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        raise ValueError("Invalid start date") from None


def resolve_planned_end_date(
    plan: EnrolmentPlan,
    start_date: Union[date, datetime, str],
    explicit_end_date: Optional[date] = None,
    template_end_date: Optional[date] = None,
) -> Optional[date]:
    start = normalize_start_date(start_date)
    if explicit_end_date:
        return normalize_start_date(explicit_end_date)

    # Weekly plans run until cancelled
    if plan.billing_type == BillingType.per_week:
        return None

    if not plan.duration_weeks or plan.duration_weeks <= 0:
        return None

    base_end = start + timedelta(weeks=plan.duration_weeks)
    if template_end_date and template_end_date < base_end:
        return template_end_date
    return base_end


def initial_accounting_for_plan(plan: EnrolmentPlan, start_date: Union[date, datetime, str]) -> Dict[str, Any]:
    if plan.billing_type == BillingType.per_week:
        return {"paid_through_date": normalize_start_date(start_date), "credits_remaining": None}
    return {"paid_through_date": None, "credits_remaining": 0}
