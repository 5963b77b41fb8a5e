import logging
from typing import List
from hospital_api.core.exceptions import NotFoundError, ValidationError
from hospital_api.modules.admissions.models import Admission
from hospital_api.modules.admissions.repository import AdmissionRepository
from hospital_api.modules.admissions.schemas import AdmissionCreate, AdmissionCreated, AdmissionResponse, AdmissionUpdate
from hospital_api.modules.auth.schemas import MessageResponse

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("patient_id", "admission_date", "diagnosis", "attending_doctor_id")


class AdmissionService:
    def __init__(self, admission_repo: AdmissionRepository):
        self.admission_repo = admission_repo

    async def list_admissions(self) -> List[AdmissionResponse]:
        records = await self.admission_repo.list_admissions()
        return [AdmissionResponse(**record) for record in records]

    async def create_admission(self, data: AdmissionCreate) -> AdmissionCreated:
        admission = Admission(**data.model_dump())

        document = admission.to_document()
        document.pop("id")
        if await self.admission_repo.find_matching(document):
            raise ValidationError("Duplicate entry for admission")

        admission_id = await self.admission_repo.create_admission(admission)
        logger.info("Admission %s created for patient %s", admission_id, admission.patient_id)
        return AdmissionCreated(id=admission_id, message="Admission created successfully")

    async def update_admission(self, patient_id: int, data: AdmissionUpdate) -> MessageResponse:
        update_data = data.model_dump(mode="json", exclude_unset=True)
        if not update_data:
            raise ValidationError("Nothing to update")
        for field in REQUIRED_FIELDS:
            if field in update_data and update_data[field] is None:
                raise ValidationError(f"{field} cannot be null")

        matched = await self.admission_repo.update_by_patient_id(patient_id, update_data)
        if not matched:
            raise NotFoundError("Admission not found")
        return MessageResponse(message="Admission updated successfully")

    async def delete_admission(self, patient_id: int) -> MessageResponse:
        deleted = await self.admission_repo.delete_by_patient_id(patient_id)
        if not deleted:
            raise NotFoundError("Admission not found")
        logger.info("Deleted %d admission(s) for patient %s", deleted, patient_id)
        return MessageResponse(message="Admissions deleted successfully")
