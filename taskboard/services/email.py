"""Outbound email for one-time passcodes."""

import logging
import smtplib
from email.message import EmailMessage
from typing import Protocol

from taskboard.config import Settings, get_settings

logger = logging.getLogger(__name__)

OTP_SUBJECT = "Your OTP for Login"

OTP_TEXT = """\
Taskboard - OTP Verification

Your OTP for login is: {code}

This OTP will expire in {minutes} minutes.
If you didn't request this, please ignore this email.
"""

OTP_HTML = """\
<h2>Taskboard - OTP Verification</h2>
<p>Your OTP for login is: <strong>{code}</strong></p>
<p>This OTP will expire in {minutes} minutes.</p>
<p>If you didn't request this, please ignore this email.</p>
"""


class Mailer(Protocol):
    def send_otp_email(self, to_email: str, code: str, minutes: int) -> bool:
        """Deliver a passcode; return False when the transport failed."""
        ...


def build_otp_message(sender: str, to_email: str, code: str, minutes: int) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = OTP_SUBJECT
    msg["From"] = sender
    msg["To"] = to_email
    msg.set_content(OTP_TEXT.format(code=code, minutes=minutes))
    msg.add_alternative(OTP_HTML.format(code=code, minutes=minutes), subtype="html")
    return msg


class SMTPMailer:
    """Sends mail through the SMTP relay configured in settings."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def send_otp_email(self, to_email: str, code: str, minutes: int) -> bool:
        msg = build_otp_message(self.settings.email_from, to_email, code, minutes)
        try:
            with smtplib.SMTP(
                self.settings.smtp_host,
                self.settings.smtp_port,
                timeout=self.settings.smtp_timeout_seconds,
            ) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.smtp_username and self.settings.smtp_password:
                    server.login(self.settings.smtp_username, self.settings.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError):
            logger.exception(f"Failed to send OTP email to {to_email}")
            return False
        return True
