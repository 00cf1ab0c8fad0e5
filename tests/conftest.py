from datetime import date
from typing import Iterable

import pytest

from studio.modules.classes.models import ClassInstance, ClassTemplate, Level
from studio.modules.classes.service import ClassService
from studio.modules.enrolment.models import Enrolment, EnrolmentStatus
from studio.modules.enrolment.service import EnrolmentService
from studio.modules.plans.models import BillingType, EnrolmentPlan
from studio.modules.plans.service import PlanService
from studio.modules.schedule.service import ScheduleService
from studio.modules.students.models import Student

LEVEL_ID = "level-1"
MONDAY = date(2025, 2, 3)
SATURDAY = date(2025, 2, 8)


# ---------------------------------------------------------------------------
# In-memory repositories mirroring the Mongo ones
# ---------------------------------------------------------------------------

class FakePlanRepository:
    def __init__(self, plans: Iterable[EnrolmentPlan] = ()):
        self.plans = {plan.id: plan.model_dump() for plan in plans}

    async def find_plan_by_id(self, plan_id):
        return self.plans.get(plan_id)

    async def find_plans(self, query=None):
        query = query or {}
        rows = [p for p in self.plans.values() if all(p.get(k) == v for k, v in query.items())]
        return sorted(rows, key=lambda p: p["name"])

    async def find_plans_by_ids(self, plan_ids):
        return [self.plans[i] for i in plan_ids if i in self.plans]

    async def add_plan(self, plan):
        self.plans[plan.id] = plan.model_dump()


class FakeStudentRepository:
    def __init__(self, students: Iterable[Student] = ()):
        self.students = {student.id: student.model_dump() for student in students}

    async def find_student_by_id(self, student_id):
        return self.students.get(student_id)


class FakeClassRepository:
    def __init__(self, templates=(), instances=(), levels=()):
        self.templates = {t.id: t for t in templates}
        self.instances = {i.id: i for i in instances}
        self.levels = {level.id: level for level in levels}

    async def find_template_by_id(self, template_id):
        template = self.templates.get(template_id)
        return template.model_dump() if template else None

    async def find_templates_by_ids(self, template_ids):
        return [self.templates[i].model_dump() for i in template_ids if i in self.templates]

    async def find_instance_by_id(self, instance_id):
        instance = self.instances.get(instance_id)
        return instance.model_dump() if instance else None

    async def find_instance(self, template_id, date_key):
        for instance in self.instances.values():
            if instance.template_id == template_id and instance.occurrence_date.isoformat() == date_key:
                return instance.model_dump()
        return None

    async def find_level_by_id(self, level_id):
        level = self.levels.get(level_id)
        return level.model_dump() if level else None


class FakeEnrolmentRepository:
    def __init__(self, enrolments: Iterable[Enrolment] = ()):
        self.enrolments = list(enrolments)

    async def find_enrolments_by_ids(self, enrolment_ids):
        ids = set(enrolment_ids)
        return [e.model_dump() for e in self.enrolments if e.id in ids]

    async def find_student_enrolments_for_templates(self, student_id, template_ids):
        return [
            e.model_dump() for e in self.enrolments
            if e.student_id == student_id
            and e.template_id in template_ids
            and e.status != EnrolmentStatus.cancelled
        ]

    async def find_enrolment_ids_for_occurrence(self, template_id, date_key):
        day = date.fromisoformat(date_key)
        return [
            e.id for e in self.enrolments
            if e.template_id == template_id
            and e.status == EnrolmentStatus.active
            and e.start_date <= day
            and (e.end_date is None or e.end_date >= day)
        ]

    async def add_enrolments(self, enrolments):
        self.enrolments.extend(enrolments)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def weekly_plan(**overrides) -> EnrolmentPlan:
    data = dict(
        id="weekly",
        name="Weekly",
        price_cents=5000,
        level_id=LEVEL_ID,
        billing_type=BillingType.per_week,
        duration_weeks=4,
        sessions_per_week=1,
    )
    data.update(overrides)
    return EnrolmentPlan(**data)


def block_plan(**overrides) -> EnrolmentPlan:
    data = dict(
        id="block",
        name="Block of 4",
        price_cents=10000,
        level_id=LEVEL_ID,
        billing_type=BillingType.per_class,
        block_class_count=4,
    )
    data.update(overrides)
    return EnrolmentPlan(**data)


def template(id: str, day_of_week=0, **overrides) -> ClassTemplate:
    data = dict(
        id=id,
        name=f"Class {id}",
        level_id=LEVEL_ID,
        day_of_week=day_of_week,
        start_time=16 * 60,
        start_date=date(2025, 1, 1),
    )
    data.update(overrides)
    return ClassTemplate(**data)


def roster(template_id: str, count: int, start=date(2025, 1, 6)):
    return [
        Enrolment(
            id=f"{template_id}-e{n}",
            student_id=f"other-{n}",
            template_id=template_id,
            plan_id="weekly",
            start_date=start,
        )
        for n in range(count)
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def student():
    return Student(id="student-1", name="Ada", level_id=LEVEL_ID)


@pytest.fixture
def plan_repo():
    return FakePlanRepository([
        weekly_plan(),
        block_plan(),
        block_plan(id="block-2", name="Two classes", block_class_count=2, price_cents=4000),
        block_plan(id="saturday", name="Saturday block", block_class_count=1, is_saturday_only=True),
    ])


@pytest.fixture
def student_repo(student):
    return FakeStudentRepository([student])


@pytest.fixture
def class_repo():
    return FakeClassRepository(
        templates=[
            template("mon", 0, capacity=10),
            template("wed", 2),
            template("sat", 5),
            template("inactive", 1, active=False),
        ],
        instances=[ClassInstance(id="mon-feb-3", template_id="mon", occurrence_date=MONDAY, capacity=2)],
        levels=[Level(id=LEVEL_ID, name="Level 1", default_capacity=6)],
    )


@pytest.fixture
def enrolment_repo():
    return FakeEnrolmentRepository()


@pytest.fixture
def plan_service(plan_repo):
    return PlanService(plan_repo)


@pytest.fixture
def schedule_service(plan_repo):
    return ScheduleService(plan_repo)


@pytest.fixture
def class_service(class_repo, enrolment_repo):
    return ClassService(class_repo, enrolment_repo)


@pytest.fixture
def enrolment_service(enrolment_repo, plan_repo, student_repo, class_repo, class_service):
    return EnrolmentService(
        enrolment_repo=enrolment_repo,
        plan_repo=plan_repo,
        student_repo=student_repo,
        class_repo=class_repo,
        class_service=class_service,
    )
