"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

# Bcrypt cost (rounds) used when settings do not override it.
BCRYPT_ROUNDS = 12

# Min/max lengths for password validation; bcrypt only reads the first 72 bytes.
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
BCRYPT_MAX_BYTES = 72


class InvalidTokenError(Exception):
    """Token failed verification (bad signature, malformed, expired or no subject)."""


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way hashing with bcrypt. Plain passwords are never stored."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        # Hash of a random value; compared against when the account does not exist.
        self._dummy_hash = bcrypt.hashpw(
            bcrypt.gensalt(), bcrypt.gensalt(rounds=rounds)
        ).decode("utf-8")

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage."""
        return bcrypt.hashpw(
            _password_bytes(plain_password), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash (constant-time in bcrypt)."""
        try:
            return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, plain_password: str) -> bool:
        """Spend the same work as verify() for unknown accounts. Always False."""
        self.verify(plain_password, self._dummy_hash)
        return False


def validate_password_length(plain_password: str) -> bool:
    return PASSWORD_MIN_LEN <= len(plain_password) <= PASSWORD_MAX_LEN


class TokenService:
    """Issues and verifies signed, time-bounded session tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = 30) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(days=expire_days)

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """Create a JWT with sub (user id), iat and exp."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Decode and validate the JWT; return the user id it was issued for.
        Raises InvalidTokenError for every kind of failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(type(e).__name__) from e
        sub = payload.get("sub")
        if not sub or not isinstance(sub, str):
            raise InvalidTokenError("missing subject")
        return sub
