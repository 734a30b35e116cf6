"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.user import USER_TYPE_NGO, USER_TYPE_VOLUNTEER, USER_TYPES, User

__all__ = ["Base", "User", "USER_TYPE_NGO", "USER_TYPE_VOLUNTEER", "USER_TYPES"]
