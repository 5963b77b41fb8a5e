"""
Hospital API Email Service - SendGrid Integration
Handles password-reset one-time codes
"""

import logging
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from hospital_api.core.config import SENDGRID_API_KEY, FROM_EMAIL
from hospital_api.core.exceptions import DependencyError

logger = logging.getLogger(__name__)


OTP_EMAIL_SUBJECT = "Your password reset code"

OTP_EMAIL_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <style>
        body {{ font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; }}
        .header {{ background: #0f766e; color: white; padding: 30px; text-align: center; border-radius: 8px; }}
        .content {{ padding: 30px; background: #f8fafc; border-radius: 8px; margin: 20px 0; }}
        .code {{ font-size: 32px; letter-spacing: 8px; font-weight: bold; color: #0f172a; text-align: center; }}
        .footer {{ text-align: center; color: #64748b; font-size: 14px; margin-top: 20px; }}
    </style>
</head>
<body>
    <div class="header">
        <h1>Password reset</h1>
    </div>

    <div class="content">
        <p>Use the code below to reset your password.</p>
        <p class="code">{otp}</p>
        <p>This code is valid for {validity_minutes} minutes.
           If you did not request a reset, you can ignore this email.</p>
    </div>

    <div class="footer">
        <p>This is an automated message, please do not reply.</p>
    </div>
</body>
</html>
"""


def render_otp_email(otp: str, validity_minutes: int) -> str:
    return OTP_EMAIL_TEMPLATE.format(otp=otp, validity_minutes=validity_minutes)


class EmailService:
    def __init__(self, api_key: str = SENDGRID_API_KEY, from_email: str = FROM_EMAIL):
        self.from_email = from_email

        if api_key:
            self.client = SendGridAPIClient(api_key)
        else:
            self.client = None

    def send_otp_email(self, user_email: str, otp: str, validity_minutes: int) -> None:
        """Send a password-reset code. Raises DependencyError when delivery fails."""
        if not self.client:
            logger.info("[MOCK EMAIL] Password reset code %s to %s", otp, user_email)
            return

        message = Mail(
            from_email=self.from_email,
            to_emails=user_email,
            subject=OTP_EMAIL_SUBJECT,
            html_content=render_otp_email(otp, validity_minutes)
        )

        try:
            response = self.client.send(message)
        except Exception as e:
            logger.error("Email error for %s: %s", user_email, e)
            raise DependencyError("Failed to send OTP email") from e

        if response.status_code >= 300:
            logger.error("Email to %s rejected: %s", user_email, response.status_code)
            raise DependencyError("Failed to send OTP email")

        logger.info("Email sent to %s: %s", user_email, response.status_code)
