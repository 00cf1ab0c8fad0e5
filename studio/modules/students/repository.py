from studio.core.database import mongodb

class StudentRepository:
    async def find_student_by_id(self, student_id: str):
        return await mongodb.db.students.find_one({"id": student_id}, {"_id": 0})
