"""Request/response schemas for auth endpoints."""

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.user import PublicUser


# Request fields default to "" so that missing values get the endpoint's own
# 400 message instead of a generic schema error.
class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str = Field(default="", description="Account email (case-insensitive)")
    password: str = Field(default="", description="Password")


class ForgotPasswordRequest(CamelModel):
    email: str = ""


class ResetPasswordRequest(CamelModel):
    """One-time code from the reset email plus the new password, twice."""

    email: str = ""
    otp: str = Field(default="", description="6-digit code, leading zeros included")
    new_password: str = ""
    confirm_password: str = ""


class AuthResponse(CamelModel):
    """JWT plus the public view of the account, returned by register and login."""

    success: bool = True
    token: str = Field(..., description="Bearer token for the Authorization header")
    user: PublicUser


class MessageResponse(CamelModel):
    success: bool = True
    message: str
