"""Test environment: in-memory SQLite, cheap bcrypt, console email. Set before app imports."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret-for-unit-tests"
os.environ["EMAIL_BACKEND"] = "console"
