from fastapi import Depends
from studio.modules.classes.repository import ClassRepository
from studio.modules.classes.service import ClassService
from studio.modules.enrolment.repository import EnrolmentRepository

def get_class_service(
    class_repo: ClassRepository = Depends(),
    enrolment_repo: EnrolmentRepository = Depends(),
) -> ClassService:
    return ClassService(class_repo, enrolment_repo)
