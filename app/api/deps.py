"""
Shared API dependencies.

Components built once in create_app() live on app.state; these dependencies
hand them to endpoints together with a per-request database session.
"""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.models import User
from app.services.auth import AuthService
from app.services.credential_store import UserStore
from app.services.password_reset import PasswordResetFlow

# auto_error=False: a missing header or non-Bearer scheme reaches the gate as "no token".
security = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a DB session and close it when the request is done."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_user_store(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> UserStore:
    return UserStore(db, request.app.state.password_hasher)


def get_auth_service(
    request: Request,
    store: Annotated[UserStore, Depends(get_user_store)],
) -> AuthService:
    return AuthService(store, request.app.state.token_service)


def get_password_reset_flow(
    request: Request,
    store: Annotated[UserStore, Depends(get_user_store)],
) -> PasswordResetFlow:
    return PasswordResetFlow(
        store,
        request.app.state.email_dispatcher,
        ttl=request.app.state.otp_ttl,
        clock=request.app.state.clock,
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Dependency: require a valid Bearer JWT for an active user. Raises 401 otherwise."""
    token = credentials.credentials if credentials is not None else None
    return auth.authenticate_token(token)
