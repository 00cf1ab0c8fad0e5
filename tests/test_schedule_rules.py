"""Tests for selection-day classification and plan compatibility."""

from datetime import datetime

from studio.modules.schedule.rules import (
    SATURDAY_INDEX,
    day_of_week_from_date,
    filter_compatible_plans,
    is_saturday_occurrence,
    plan_matches_selection_day,
    resolve_occurrence_day_of_week,
    resolve_selection_day,
)
from studio.modules.schedule.schemas import ScheduleOccurrence

from conftest import LEVEL_ID, block_plan, weekly_plan


def occ(day=None, **kwargs):
    return ScheduleOccurrence(day_of_week=day, **kwargs)


class TestDayResolution:
    def test_monday_is_zero(self):
        assert day_of_week_from_date(datetime(2025, 2, 3)) == 0
        assert day_of_week_from_date(datetime(2025, 2, 8)) == SATURDAY_INDEX

    def test_template_day_wins_over_start_time(self):
        occurrence = occ(2, start_time=datetime(2025, 2, 8, 9, 0))
        assert resolve_occurrence_day_of_week(occurrence) == 2

    def test_falls_back_to_start_time(self):
        assert resolve_occurrence_day_of_week(occ(start_time=datetime(2025, 2, 8, 9, 0))) == SATURDAY_INDEX

    def test_unknown_day(self):
        assert resolve_occurrence_day_of_week(occ()) is None
        assert not is_saturday_occurrence(occ())

    def test_explicit_saturday_flag(self):
        assert is_saturday_occurrence(occ(is_saturday=True))
        assert not is_saturday_occurrence(occ(SATURDAY_INDEX, is_saturday=False))


class TestSelectionDay:
    def test_empty_selection(self):
        assert resolve_selection_day({}) is None

    def test_single_saturday(self):
        assert resolve_selection_day({"t1": occ(SATURDAY_INDEX)}) == "saturday"

    def test_weekdays_only(self):
        assert resolve_selection_day({"t1": occ(0), "t2": occ(3)}) == "weekday"

    def test_saturday_and_weekday_is_mixed(self):
        assert resolve_selection_day({"t1": occ(SATURDAY_INDEX), "t2": occ(1)}) == "mixed"

    def test_sunday_counts_as_weekday(self):
        assert resolve_selection_day({"t1": occ(6)}) == "weekday"


class TestPlanCompatibility:
    def test_weekly_plans_match_any_day_type(self):
        plan = weekly_plan(is_saturday_only=True)
        assert plan_matches_selection_day(plan, "saturday")
        assert plan_matches_selection_day(plan, "weekday")
        assert plan_matches_selection_day(weekly_plan(), "saturday")

    def test_block_plans_follow_saturday_flag(self):
        saturday = block_plan(is_saturday_only=True)
        weekday = block_plan()
        assert plan_matches_selection_day(saturday, "saturday")
        assert not plan_matches_selection_day(saturday, "weekday")
        assert plan_matches_selection_day(weekday, "weekday")
        assert not plan_matches_selection_day(weekday, "saturday")

    def test_mixed_matches_nothing(self):
        assert not plan_matches_selection_day(weekly_plan(), "mixed")
        assert not plan_matches_selection_day(block_plan(), "mixed")

    def test_empty_selection_matches_everything(self):
        assert plan_matches_selection_day(block_plan(is_saturday_only=True), None)

    def test_filter_by_level_and_day(self):
        plans = [
            weekly_plan(),
            block_plan(),
            block_plan(id="sat", is_saturday_only=True),
            block_plan(id="other-level", level_id="level-2", is_saturday_only=True),
        ]
        ids = [plan.id for plan in filter_compatible_plans(plans, LEVEL_ID, "saturday")]
        assert ids == ["weekly", "sat"]
