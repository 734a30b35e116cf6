"""Registration, login and bearer-token authentication."""

import logging
from typing import Any

from app.core.errors import AuthenticationError, ValidationError
from app.core.security import InvalidTokenError, TokenService
from app.models import User
from app.schemas.user import PublicUser
from app.services.credential_store import UserStore, parse_registration

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
ACCOUNT_DEACTIVATED = "Account is deactivated"
NOT_AUTHORIZED = "Not authorized to access this route"


class AuthService:
    def __init__(self, store: UserStore, tokens: TokenService) -> None:
        self.store = store
        self.tokens = tokens

    def register(self, body: dict[str, Any]) -> tuple[str, PublicUser]:
        """Create an account from a raw JSON body; return (token, public user)."""
        registration = parse_registration(body)
        user = self.store.create(registration)
        return self.tokens.issue(user.id), self.store.to_public_view(user)

    def login(self, email: str, password: str) -> tuple[str, PublicUser]:
        """
        Check credentials; return (token, public user).
        Unknown email and wrong password fail with the same error.
        """
        if not email or not email.strip() or not password:
            raise ValidationError("Please provide email and password")
        user = self.store.find_by_email(email)
        if user is None:
            self.store.hasher.verify_dummy(password)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not self.store.verify_password(user, password):
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise AuthenticationError(ACCOUNT_DEACTIVATED)
        return self.tokens.issue(user.id), self.store.to_public_view(user)

    def authenticate_token(self, token: str | None) -> User:
        """
        Resolve a bearer token to an active user. Every failure (no token, bad
        token, missing or inactive user) raises the same AuthenticationError.
        """
        if not token:
            logger.info("Authorization denied: no bearer token")
            raise AuthenticationError(NOT_AUTHORIZED)
        try:
            user_id = self.tokens.verify(token)
        except InvalidTokenError as e:
            logger.info("Authorization denied: invalid token (%s)", e)
            raise AuthenticationError(NOT_AUTHORIZED) from e
        user = self.store.get(user_id)
        if user is None:
            logger.info("Authorization denied: no user for token")
            raise AuthenticationError(NOT_AUTHORIZED)
        if not user.is_active:
            logger.info("Authorization denied: user inactive", extra={"user_id": user.id})
            raise AuthenticationError(NOT_AUTHORIZED)
        return user
