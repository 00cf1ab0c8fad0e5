from typing import List
from studio.core.database import mongodb
from studio.modules.enrolment.models import Enrolment


class EnrolmentRepository:
    async def find_enrolments_by_ids(self, enrolment_ids):
        return await mongodb.db.enrolments.find(
            {"id": {"$in": list(enrolment_ids)}},
            {"_id": 0}
        ).to_list(100)

    async def find_student_enrolments_for_templates(self, student_id: str, template_ids):
        return await mongodb.db.enrolments.find(
            {
                "student_id": student_id,
                "template_id": {"$in": list(template_ids)},
                "status": {"$ne": "CANCELLED"}
            },
            {"_id": 0}
        ).to_list(500)

    # Dates are stored as ISO keys so string comparison orders them
    async def find_enrolment_ids_for_occurrence(self, template_id: str, date_key: str) -> List[str]:
        rows = await mongodb.db.enrolments.find(
            {
                "template_id": template_id,
                "status": "ACTIVE",
                "start_date": {"$lte": date_key},
                "$or": [{"end_date": None}, {"end_date": {"$gte": date_key}}]
            },
            {"_id": 0, "id": 1}
        ).to_list(1000)
        return [row["id"] for row in rows]

    async def add_enrolments(self, enrolments: List[Enrolment]):
        docs = [enrolment.model_dump(mode="json") for enrolment in enrolments]
        return await mongodb.db.enrolments.insert_many(docs)
