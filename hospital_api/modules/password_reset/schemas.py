from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ResetRequest(BaseModel):
    token: Optional[str] = None
    email: Optional[str] = None

class ResetVerify(BaseModel):
    token: Optional[str] = None
    email: Optional[str] = None
    otp: Optional[str] = None

class ResetConfirm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    token: Optional[str] = None
    email: Optional[str] = None
    new_password: Optional[str] = Field(default=None, alias="newPassword")

class ResetMessage(BaseModel):
    message: str

class VerifyResponse(BaseModel):
    message: str
    email: str
