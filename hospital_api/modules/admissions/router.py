from fastapi import APIRouter, Depends
from typing import Dict, List
from hospital_api.modules.admissions.schemas import AdmissionCreate, AdmissionCreated, AdmissionResponse, AdmissionUpdate
from hospital_api.modules.admissions.service import AdmissionService
from hospital_api.modules.admissions.dependencies import get_admission_service
from hospital_api.modules.auth.schemas import MessageResponse
from hospital_api.modules.auth.utility import get_current_user

admission_router = APIRouter(prefix="/admissions", tags=["Admissions"])

@admission_router.get("", response_model=List[AdmissionResponse])
async def list_admissions(
    current_user: Dict = Depends(get_current_user),
    service: AdmissionService = Depends(get_admission_service)):
    return await service.list_admissions()

@admission_router.post("", response_model=AdmissionCreated)
async def create_admission(
    data: AdmissionCreate,
    current_user: Dict = Depends(get_current_user),
    service: AdmissionService = Depends(get_admission_service)):
    return await service.create_admission(data)

@admission_router.put("/{patient_id}", response_model=MessageResponse)
async def update_admission(
    patient_id: int,
    data: AdmissionUpdate,
    current_user: Dict = Depends(get_current_user),
    service: AdmissionService = Depends(get_admission_service)):
    return await service.update_admission(patient_id, data)

@admission_router.delete("/{patient_id}", response_model=MessageResponse)
async def delete_admission(
    patient_id: int,
    current_user: Dict = Depends(get_current_user),
    service: AdmissionService = Depends(get_admission_service)):
    return await service.delete_admission(patient_id)
