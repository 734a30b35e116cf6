"""
Password recovery with one-time codes.

A code moves Idle -> Issued -> (Consumed | Expired | Replaced). Issuing a new
code overwrites the previous one; there is never more than one per account.
Concurrent issue/consume for one account race at the store (last write wins).
"""

import hmac
import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from app.core.errors import (
    CodeExpiredError,
    EmailDeliveryError,
    InvalidCodeError,
    NoResetRequestedError,
    ServerError,
    ValidationError,
)
from app.models import User
from app.services.credential_store import UserStore
from app.services.email import EmailDispatcher

logger = logging.getLogger(__name__)

OTP_DIGITS = 6
DEFAULT_OTP_TTL = timedelta(minutes=15)

# Returned whether or not the address is registered.
FORGOT_PASSWORD_MESSAGE = "If the email exists, an OTP has been sent"


def generate_otp() -> str:
    """Uniform over 000000-999999, zero-padded."""
    return f"{secrets.randbelow(10**OTP_DIGITS):0{OTP_DIGITS}d}"


def utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class PasswordResetFlow:
    def __init__(
        self,
        store: UserStore,
        dispatcher: EmailDispatcher,
        ttl: timedelta = DEFAULT_OTP_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.ttl = ttl
        self.clock = clock

    def forgot_password(self, email: str) -> None:
        """
        Issue a code for the account and email it. Returns normally for unknown
        addresses so callers cannot tell which emails are registered.
        """
        if not email or not email.strip():
            raise ValidationError("Email is required")
        user = self.store.find_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        code = generate_otp()
        self.store.set_reset_code(user, code, self.clock() + self.ttl)
        try:
            self.dispatcher.send_otp(user.email, code)
        except EmailDeliveryError as e:
            # The code stays on record; the user can request another.
            raise ServerError("Error processing forgot password request") from e
        logger.info("Password reset code issued", extra={"user_id": user.id})

    def reset_password(
        self, email: str, otp: str, new_password: str, confirm_password: str
    ) -> User:
        """Consume a code and set the new password. Raises a ValidationError subclass."""
        if not email or not otp or not new_password or not confirm_password:
            raise ValidationError("All fields are required")
        if new_password != confirm_password:
            raise ValidationError("Passwords do not match")

        user = self.store.find_by_email(email)
        if user is None:
            raise InvalidCodeError()
        if not user.password_reset_code or user.password_reset_expires_at is None:
            raise NoResetRequestedError()
        if not hmac.compare_digest(
            user.password_reset_code.encode("utf-8"), otp.encode("utf-8")
        ):
            raise InvalidCodeError()
        if self.clock() >= _as_utc(user.password_reset_expires_at):
            raise CodeExpiredError()

        self.store.change_password(user, new_password)
        logger.info("Password reset completed", extra={"user_id": user.id})
        return user
