"""Outbound email for password reset codes: SMTP delivery or a logging backend for dev."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import TYPE_CHECKING, Protocol

from app.core.errors import EmailDeliveryError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

OTP_SUBJECT = "Password Reset OTP - NGO Connect"

OTP_TEXT_TEMPLATE = """\
Password Reset Request - NGO Connect

Hello,

You have requested to reset your password for your NGO Connect account.

Your One-Time Password (OTP) is: {code}

This OTP will expire in {ttl_minutes} minutes.

If you didn't request this password reset, please ignore this email.
For security reasons, please do not share this OTP with anyone.
"""

OTP_HTML_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #dc2626;">Password Reset Request</h2>
  <p>Hello,</p>
  <p>You have requested to reset your password for your NGO Connect account.</p>
  <p>Your One-Time Password (OTP) is:</p>
  <div style="background-color: #f3f4f6; padding: 20px; text-align: center; margin: 20px 0;">
    <h1 style="color: #dc2626; font-size: 32px; margin: 0; letter-spacing: 5px;">{code}</h1>
  </div>
  <p><strong>This OTP will expire in {ttl_minutes} minutes.</strong></p>
  <p>If you didn't request this password reset, please ignore this email.</p>
</div>
"""


class EmailDispatcher(Protocol):
    """Delivers a reset code to an address. Raises EmailDeliveryError on failure."""

    def send_otp(self, to_address: str, code: str) -> None: ...


def build_otp_message(
    from_address: str, to_address: str, code: str, ttl_minutes: int
) -> EmailMessage:
    """Plain-text message with an HTML alternative."""
    msg = EmailMessage()
    msg["Subject"] = OTP_SUBJECT
    msg["From"] = from_address
    msg["To"] = to_address
    msg.set_content(OTP_TEXT_TEMPLATE.format(code=code, ttl_minutes=ttl_minutes))
    msg.add_alternative(
        OTP_HTML_TEMPLATE.format(code=code, ttl_minutes=ttl_minutes), subtype="html"
    )
    return msg


class SmtpEmailDispatcher:
    """Send through an SMTP relay, with STARTTLS and login when configured."""

    def __init__(self, settings: Settings) -> None:
        if not settings.SMTP_HOST:
            raise ValueError("SMTP_HOST is required for the smtp email backend")
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.timeout = settings.SMTP_TIMEOUT_SEC
        self.from_address = settings.FROM_EMAIL
        self.ttl_minutes = settings.PASSWORD_RESET_OTP_TTL_MINUTES

    def send_otp(self, to_address: str, code: str) -> None:
        msg = build_otp_message(self.from_address, to_address, code, self.ttl_minutes)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.user and self.password is not None:
                    smtp.login(self.user, self.password.get_secret_value())
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "OTP email delivery failed",
                extra={"smtp_host": self.host, "reason": type(e).__name__},
            )
            raise EmailDeliveryError("Failed to send OTP email") from e
        logger.info("OTP email sent", extra={"smtp_host": self.host})


class ConsoleEmailDispatcher:
    """Development backend: writes the message to the log instead of sending it."""

    def __init__(self, from_address: str = "", ttl_minutes: int = 15) -> None:
        self.from_address = from_address
        self.ttl_minutes = ttl_minutes

    def send_otp(self, to_address: str, code: str) -> None:
        msg = build_otp_message(self.from_address, to_address, code, self.ttl_minutes)
        body = msg.get_body(preferencelist=("plain",))
        logger.info(
            "Email (console backend) to=%s subject=%s\n%s",
            to_address,
            msg["Subject"],
            body.get_content() if body is not None else "",
        )


def build_email_dispatcher(settings: Settings) -> EmailDispatcher:
    if settings.EMAIL_BACKEND == "smtp":
        return SmtpEmailDispatcher(settings)
    return ConsoleEmailDispatcher(
        from_address=settings.FROM_EMAIL,
        ttl_minutes=settings.PASSWORD_RESET_OTP_TTL_MINUTES,
    )
