from studio.core.database import mongodb


class ClassRepository:
    async def find_template_by_id(self, template_id: str):
        return await mongodb.db.class_templates.find_one({"id": template_id}, {"_id": 0})

    async def find_templates_by_ids(self, template_ids):
        return await mongodb.db.class_templates.find(
            {"id": {"$in": list(template_ids)}},
            {"_id": 0}
        ).to_list(500)

    async def find_instance_by_id(self, instance_id: str):
        return await mongodb.db.class_instances.find_one({"id": instance_id}, {"_id": 0})

    async def find_instance(self, template_id: str, date_key: str):
        return await mongodb.db.class_instances.find_one(
            {"template_id": template_id, "occurrence_date": date_key},
            {"_id": 0}
        )

    async def find_level_by_id(self, level_id: str):
        return await mongodb.db.levels.find_one({"id": level_id}, {"_id": 0})
