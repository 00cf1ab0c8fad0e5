"""Capacity checks against stored classes, instances and enrolments."""

from datetime import date

import pytest
from fastapi import HTTPException

from studio.modules.classes.models import Level
from studio.modules.classes.schemas import CapacityCheckRequest
from studio.modules.classes.service import ClassService

from conftest import LEVEL_ID, MONDAY, FakeClassRepository, FakeEnrolmentRepository, roster, template


async def test_instance_capacity_overrides_template(class_service, enrolment_repo):
    enrolment_repo.enrolments.extend(roster("mon", 2))

    result = await class_service.check_class_capacity(CapacityCheckRequest(class_id="mon-feb-3"))

    assert not result.ok
    assert result.error.code == "CAPACITY_EXCEEDED"
    assert result.error.details.capacity == 2
    assert result.error.details.current_count == 2
    assert result.error.details.projected_count == 3
    assert result.error.details.occurrence_date_key == "2025-02-03"


async def test_template_capacity_used_on_other_dates(class_service, enrolment_repo):
    enrolment_repo.enrolments.extend(roster("mon", 2))

    result = await class_service.check_class_capacity(
        CapacityCheckRequest(class_id="mon", occurrence_date=date(2025, 2, 10))
    )

    assert result.ok


async def test_level_default_capacity(class_service, enrolment_repo):
    enrolment_repo.enrolments.extend(roster("wed", 6))

    result = await class_service.check_class_capacity(
        CapacityCheckRequest(class_id="wed", occurrence_date=date(2025, 2, 5))
    )

    assert not result.ok
    assert result.error.details.capacity == 6


async def test_allow_overload_accepts_full_class(class_service, enrolment_repo):
    enrolment_repo.enrolments.extend(roster("mon", 2))

    result = await class_service.check_class_capacity(
        CapacityCheckRequest(class_id="mon-feb-3", allow_overload=True)
    )

    assert result.ok
    assert result.error is None


async def test_unlimited_class():
    service = ClassService(
        FakeClassRepository(templates=[template("t1", 0)], levels=[Level(id=LEVEL_ID, name="Open")]),
        FakeEnrolmentRepository(roster("t1", 50)),
    )

    result = await service.check_class_capacity(CapacityCheckRequest(class_id="t1", occurrence_date=MONDAY))

    assert result.ok


async def test_ended_enrolments_do_not_take_seats(class_service, enrolment_repo):
    enrolment_repo.enrolments.extend(roster("mon", 2))
    for enrolment in enrolment_repo.enrolments:
        enrolment.end_date = date(2025, 1, 31)

    result = await class_service.check_class_capacity(CapacityCheckRequest(class_id="mon-feb-3"))

    assert result.ok


async def test_existing_enrolment_takes_no_extra_seat(class_service, enrolment_repo):
    enrolment_repo.enrolments.extend(roster("mon", 2))

    snapshot = await class_service.get_capacity_snapshot("mon", MONDAY, existing_enrolment_id="mon-e0")

    assert snapshot.projected_count == 2
    assert snapshot.capacity == 2


async def test_first_issue_in_date_order(class_service, enrolment_repo):
    enrolment_repo.enrolments.extend(roster("mon", 2))

    issue = await class_service.get_capacity_issue_for_occurrences("mon", [date(2025, 2, 10), MONDAY])

    assert issue.occurrence_date_key == "2025-02-03"


async def test_occupancy(class_service, enrolment_repo):
    enrolment_repo.enrolments.extend(roster("mon", 3))

    snapshot = await class_service.get_occupancy("mon", date(2025, 2, 10))

    assert snapshot.capacity == 10
    assert snapshot.current_count == 3


async def test_unknown_class(class_service):
    with pytest.raises(HTTPException) as exc:
        await class_service.check_class_capacity(CapacityCheckRequest(class_id="nope"))
    assert exc.value.status_code == 404
