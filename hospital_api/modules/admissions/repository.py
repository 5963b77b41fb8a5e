from hospital_api.core.database import mongodb
from hospital_api.modules.admissions.models import Admission


class AdmissionRepository:
    async def list_admissions(self, limit: int = 500) -> list:
        return await mongodb.db.admissions.find({}, {"_id": 0}).sort("admission_date", 1).to_list(limit)

    async def find_matching(self, query: dict) -> dict:
        return await mongodb.db.admissions.find_one(query, {"_id": 0})

    async def create_admission(self, admission: Admission) -> str:
        await mongodb.db.admissions.insert_one(admission.to_document())
        return admission.id

    async def update_by_patient_id(self, patient_id: int, data: dict) -> int:
        result = await mongodb.db.admissions.update_many(
            {"patient_id": patient_id},
            {"$set": data}
        )
        return result.matched_count

    async def delete_by_patient_id(self, patient_id: int) -> int:
        result = await mongodb.db.admissions.delete_many({"patient_id": patient_id})
        return result.deleted_count
