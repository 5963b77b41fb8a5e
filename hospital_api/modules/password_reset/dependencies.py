from fastapi import Depends
from hospital_api.core.email_service.email_instance import get_email_service
from hospital_api.core.email_service.email_service import EmailService
from hospital_api.modules.auth.repository import AuthRepository
from hospital_api.modules.password_reset.otp_store import OtpStore
from hospital_api.modules.password_reset.service import PasswordResetService

otp_store = OtpStore()


def get_otp_store() -> OtpStore:
    return otp_store

def get_password_reset_service(
    auth_repo: AuthRepository = Depends(),
    store: OtpStore = Depends(get_otp_store),
    email_service: EmailService = Depends(get_email_service),
) -> PasswordResetService:
    return PasswordResetService(
        auth_repo=auth_repo,
        otp_store=store,
        email_service=email_service,
    )
