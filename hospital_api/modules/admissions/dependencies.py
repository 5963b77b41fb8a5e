from fastapi import Depends
from hospital_api.modules.admissions.repository import AdmissionRepository
from hospital_api.modules.admissions.service import AdmissionService

def get_admission_service(
    admission_repo: AdmissionRepository = Depends(),
) -> AdmissionService:
    return AdmissionService(admission_repo)
