"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
)
from app.schemas.health import HealthResponse, HealthStatus, UserCounts
from app.schemas.user import (
    NgoRegistration,
    ProfileData,
    ProfileUpdateRequest,
    PublicUser,
    Registration,
    UserListResponse,
    UserResponse,
    VolunteerRegistration,
)

__all__ = [
    "AuthResponse",
    "ForgotPasswordRequest",
    "HealthResponse",
    "HealthStatus",
    "LoginRequest",
    "MessageResponse",
    "NgoRegistration",
    "ProfileData",
    "ProfileUpdateRequest",
    "PublicUser",
    "Registration",
    "ResetPasswordRequest",
    "UserCounts",
    "UserListResponse",
    "UserResponse",
    "VolunteerRegistration",
]
