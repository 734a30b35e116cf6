"""ORM model for volunteer and NGO accounts."""

import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base

USER_TYPE_VOLUNTEER = "volunteer"
USER_TYPE_NGO = "ngo"
USER_TYPES = (USER_TYPE_VOLUNTEER, USER_TYPE_NGO)

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
ProfileJSON = JSON().with_variant(JSONB(), "postgresql")


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    """
    A registered volunteer or NGO.

    user_type: 'volunteer' or 'ngo', fixed at registration.
    password_reset_code and password_reset_expires_at are set and cleared together.
    is_email_verified and last_login are reserved; no flow writes them yet.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    user_type = Column(String(16), nullable=False, index=True)

    # volunteer
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    # ngo
    organization_name = Column(String(255), nullable=True)
    contact_person = Column(String(255), nullable=True)

    profile = Column(ProfileJSON, nullable=False, default=dict)

    is_email_verified = Column(Boolean, nullable=False, default=False)
    password_reset_code = Column(String(6), nullable=True)
    password_reset_expires_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    last_login = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} type={self.user_type}>"
