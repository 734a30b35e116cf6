"""Account endpoints: register, login, current user, password recovery."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from app.api.deps import (
    get_auth_service,
    get_current_user,
    get_password_reset_flow,
    get_user_store,
)
from app.models import User
from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
)
from app.schemas.user import UserResponse
from app.services.auth import AuthService
from app.services.credential_store import UserStore
from app.services.password_reset import FORGOT_PASSWORD_MESSAGE, PasswordResetFlow

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: Annotated[dict[str, Any], Body()],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Create a volunteer or NGO account and return a JWT for it.

    Volunteers need firstName and lastName; NGOs need organizationName and
    contactPerson. Profile attributes may be sent at the top level or under "profile".
    """
    token, user = auth.register(body)
    return AuthResponse(token=token, user=user)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    token, user = auth.login(body.email, body.password)
    return AuthResponse(token=token, user=user)


@router.get("/me", response_model=UserResponse)
def me(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    return UserResponse(user=store.to_public_view(current_user))


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    body: ForgotPasswordRequest,
    flow: Annotated[PasswordResetFlow, Depends(get_password_reset_flow)],
) -> MessageResponse:
    """Email a 6-digit reset code. The response is the same for unknown addresses."""
    flow.forgot_password(body.email)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    body: ResetPasswordRequest,
    flow: Annotated[PasswordResetFlow, Depends(get_password_reset_flow)],
) -> MessageResponse:
    flow.reset_password(body.email, body.otp, body.new_password, body.confirm_password)
    return MessageResponse(message="Password has been reset successfully")
