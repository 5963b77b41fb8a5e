from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date
import uuid


class Admission(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    patient_id: int
    admission_date: date
    discharge_date: Optional[date] = None
    diagnosis: str
    attending_doctor_id: int

    def to_document(self) -> dict:
        # BSON has no date type; store ISO strings
        return self.model_dump(mode="json")
