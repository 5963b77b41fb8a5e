from fastapi import APIRouter, Depends
from typing import Optional
from hospital_api.modules.auth.utility import bearer_token
from hospital_api.modules.password_reset.schemas import ResetConfirm, ResetMessage, ResetRequest, ResetVerify, VerifyResponse
from hospital_api.modules.password_reset.service import PasswordResetService
from hospital_api.modules.password_reset.dependencies import get_password_reset_service

reset_router = APIRouter(prefix="/reset", tags=["Password-Reset"])

# The token travels in the body; an Authorization: Bearer header is the fallback.

@reset_router.post("/request", response_model=ResetMessage)
async def request_otp(
    data: ResetRequest,
    header_token: Optional[str] = Depends(bearer_token),
    service: PasswordResetService = Depends(get_password_reset_service)
    ):
    return await service.request_otp(data.token or header_token, data.email)

@reset_router.post("/verify", response_model=VerifyResponse)
async def verify_otp(
    data: ResetVerify,
    header_token: Optional[str] = Depends(bearer_token),
    service: PasswordResetService = Depends(get_password_reset_service)
    ):
    return await service.verify_otp(data.token or header_token, data.email, data.otp)

@reset_router.post("/confirm", response_model=ResetMessage)
async def confirm_reset(
    data: ResetConfirm,
    header_token: Optional[str] = Depends(bearer_token),
    service: PasswordResetService = Depends(get_password_reset_service)
    ):
    return await service.reset_password(data.token or header_token, data.email, data.new_password)
