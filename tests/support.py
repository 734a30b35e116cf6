"""Builders shared by the test modules."""

from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import build_engine, build_session_factory
from app.core.errors import EmailDeliveryError
from app.core.security import PasswordHasher
from app.main import create_app
from app.models import Base
from app.services.credential_store import UserStore, parse_registration

TEST_ROUNDS = 4


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": "test-secret-for-unit-tests",
        "BCRYPT_ROUNDS": TEST_ROUNDS,
        "EMAIL_BACKEND": "console",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session() -> Session:
    """Fresh in-memory database with the schema created."""
    engine = build_engine(make_settings())
    Base.metadata.create_all(engine)
    return build_session_factory(engine)()


def make_store() -> UserStore:
    return UserStore(make_session(), PasswordHasher(rounds=TEST_ROUNDS))


def volunteer_body(email: str = "ada@example.com", password: str = "secret123", **extra: Any) -> dict:
    body = {
        "email": email,
        "password": password,
        "userType": "volunteer",
        "firstName": "Ada",
        "lastName": "Lovelace",
    }
    body.update(extra)
    return body


def ngo_body(email: str = "help@example.org", password: str = "secret123", **extra: Any) -> dict:
    body = {
        "email": email,
        "password": password,
        "userType": "ngo",
        "organizationName": "Help Foundation",
        "contactPerson": "Jane Smith",
    }
    body.update(extra)
    return body


def create_user(store: UserStore, body: dict):
    return store.create(parse_registration(body))


class RecordingDispatcher:
    """Email dispatcher that keeps messages in memory, or fails on demand."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, str]] = []

    def send_otp(self, to_address: str, code: str) -> None:
        if self.fail:
            raise EmailDeliveryError("Failed to send OTP email")
        self.sent.append((to_address, code))

    @property
    def last_code(self) -> str:
        return self.sent[-1][1]


class FrozenClock:
    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


def make_client() -> tuple[TestClient, RecordingDispatcher, FrozenClock]:
    """App on its own in-memory database, with recording email and a frozen clock."""
    app = create_app(make_settings())
    dispatcher = RecordingDispatcher()
    clock = FrozenClock()
    app.state.email_dispatcher = dispatcher
    app.state.clock = clock
    return TestClient(app), dispatcher, clock


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
