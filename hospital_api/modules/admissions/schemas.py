from pydantic import BaseModel
from typing import Optional
from datetime import date


class AdmissionCreate(BaseModel):
    patient_id: int
    admission_date: date
    discharge_date: Optional[date] = None
    diagnosis: str
    attending_doctor_id: int

class AdmissionUpdate(BaseModel):
    patient_id: Optional[int] = None
    admission_date: Optional[date] = None
    discharge_date: Optional[date] = None
    diagnosis: Optional[str] = None
    attending_doctor_id: Optional[int] = None

class AdmissionResponse(BaseModel):
    id: str
    patient_id: int
    admission_date: date
    discharge_date: Optional[date] = None
    diagnosis: str
    attending_doctor_id: int

class AdmissionCreated(BaseModel):
    id: str
    message: str
