from studio.core.database import mongodb
from studio.modules.plans.models import EnrolmentPlan


class PlanRepository:
    async def find_plan_by_id(self, plan_id: str):
        return await mongodb.db.enrolment_plans.find_one({"id": plan_id}, {"_id": 0})

    async def find_plans(self, query=None):
        return await mongodb.db.enrolment_plans.find(query or {}, {"_id": 0}).sort("name", 1).to_list(500)

    async def find_plans_by_ids(self, plan_ids):
        return await mongodb.db.enrolment_plans.find(
            {"id": {"$in": list(plan_ids)}},
            {"_id": 0}
        ).to_list(500)

    async def add_plan(self, plan: EnrolmentPlan):
        return await mongodb.db.enrolment_plans.insert_one(plan.model_dump())
