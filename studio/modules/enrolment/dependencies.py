from fastapi import Depends
from studio.modules.enrolment.repository import EnrolmentRepository
from studio.modules.enrolment.service import EnrolmentService
from studio.modules.plans.repository import PlanRepository
from studio.modules.students.repository import StudentRepository
from studio.modules.classes.repository import ClassRepository
from studio.modules.classes.service import ClassService
from studio.modules.classes.dependencies import get_class_service

def get_enrolment_service(
    enrolment_repo: EnrolmentRepository = Depends(),
    plan_repo: PlanRepository = Depends(),
    student_repo: StudentRepository = Depends(),
    class_repo: ClassRepository = Depends(),
    class_service: ClassService = Depends(get_class_service),
) -> EnrolmentService:
    return EnrolmentService(
        enrolment_repo=enrolment_repo,
        plan_repo=plan_repo,
        student_repo=student_repo,
        class_repo=class_repo,
        class_service=class_service,
    )
