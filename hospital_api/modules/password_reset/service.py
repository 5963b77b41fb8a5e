import logging
from datetime import timedelta
from typing import Callable, Dict, Optional

from fastapi.concurrency import run_in_threadpool

from hospital_api.core.config import OTP_EXPIRY_MINUTES
from hospital_api.core.email_service.email_service import EmailService
from hospital_api.core.exceptions import AuthError, NotFoundError, OtpError, ValidationError
from hospital_api.modules.auth.repository import AuthRepository
from hospital_api.modules.auth.utility import decode_token, hash_password
from hospital_api.modules.password_reset.otp_store import OtpRecord, OtpStore, generate_otp
from hospital_api.modules.password_reset.schemas import ResetMessage, VerifyResponse

logger = logging.getLogger(__name__)


class PasswordResetService:
    """
    Password reset gated by an emailed one-time code.

    Per email: request -> Pending, verify keeps Pending (read only),
    confirm consumes it. Expired records keep their slot until a new
    request overwrites them or a confirm call fails on them.
    """

    def __init__(self,
                 auth_repo: AuthRepository,
                 otp_store: OtpStore,
                 email_service: EmailService,
                 expiry_minutes: int = OTP_EXPIRY_MINUTES,
                 otp_generator: Callable[[], str] = generate_otp,
                 ):
        self.auth_repo = auth_repo
        self.otp_store = otp_store
        self.email_service = email_service
        self.expiry_minutes = expiry_minutes
        self.otp_generator = otp_generator

    async def _authorize(self, token: Optional[str], email: Optional[str], **required) -> Dict:
        if not token:
            raise AuthError("Token is required")
        if not email:
            raise ValidationError("Email is required")
        for field, value in required.items():
            if not value:
                raise ValidationError(f"{field} is required")

        claims = decode_token(token)
        user = await self.auth_repo.find_user(email)
        if not claims.owns(user):
            raise NotFoundError("User not found")
        return user

    def _pending_record(self, email: str) -> OtpRecord:
        record = self.otp_store.get(email)
        if record is None:
            raise OtpError("no pending request")
        return record

    async def request_otp(self, token: Optional[str], email: Optional[str]) -> ResetMessage:
        await self._authorize(token, email)

        otp = self.otp_generator()
        record = OtpRecord(
            otp=otp,
            expires_at=self.otp_store.clock() + timedelta(minutes=self.expiry_minutes)
        )
        async with self.otp_store.lock(email):
            self.otp_store.put(email, record)
        logger.info("Password reset code issued for %s", email)

        # A failed send leaves the record in place; the caller can request again.
        await run_in_threadpool(self.email_service.send_otp_email, email, otp, self.expiry_minutes)

        return ResetMessage(message="OTP sent to your email")

    async def verify_otp(self, token: Optional[str], email: Optional[str], otp: Optional[str]) -> VerifyResponse:
        await self._authorize(token, email, otp=otp)

        record = self._pending_record(email)
        if record.otp != otp:
            raise OtpError("invalid code")
        if record.is_expired(self.otp_store.clock()):
            raise OtpError("expired")

        return VerifyResponse(message="OTP verified successfully", email=email)

    async def reset_password(self, token: Optional[str], email: Optional[str], new_password: Optional[str]) -> ResetMessage:
        await self._authorize(token, email, newPassword=new_password)

        async with self.otp_store.lock(email):
            record = self._pending_record(email)
            if record.is_expired(self.otp_store.clock()):
                raise OtpError("expired")

            hashed = await run_in_threadpool(hash_password, new_password)
            updated = await self.auth_repo.update_password(email, hashed)
            if not updated:
                raise NotFoundError("User not found")
            self.otp_store.delete(email)

        logger.info("Password reset completed for %s", email)
        return ResetMessage(message="Password reset successfully")
