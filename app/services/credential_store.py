"""
User persistence: lookup, registration, profile updates and password changes.

Hashing happens only in create() and change_password(); update_profile() never
touches the stored hash.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ServerError, ValidationError
from app.core.security import PasswordHasher, validate_password_length
from app.models import USER_TYPE_NGO, USER_TYPE_VOLUNTEER, User
from app.schemas.base import describe_errors
from app.schemas.user import (
    PROFILE_KEYS,
    NgoRegistration,
    ProfileData,
    ProfileUpdateRequest,
    PublicUser,
    Registration,
    VolunteerRegistration,
    canonical_profile_keys,
)

logger = logging.getLogger(__name__)

_registration_adapter: TypeAdapter[VolunteerRegistration | NgoRegistration] = TypeAdapter(
    Registration
)

# Writable name fields per role.
ROLE_NAME_FIELDS = {
    USER_TYPE_VOLUNTEER: ("first_name", "last_name"),
    USER_TYPE_NGO: ("organization_name", "contact_person"),
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_registration(body: dict[str, Any]) -> VolunteerRegistration | NgoRegistration:
    """
    Build a typed registration from a raw JSON body.

    Profile attributes may be sent nested under "profile" or at the top level;
    top-level values win.
    """
    email = _text(body.get("email"))
    password = body.get("password")
    user_type = body.get("userType", body.get("user_type"))
    if not email or not password or not user_type:
        raise ValidationError("Please provide email, password, and user type")
    if user_type == USER_TYPE_VOLUNTEER:
        if not (_text(body.get("firstName")) and _text(body.get("lastName"))):
            raise ValidationError("First and last name are required for volunteers")
    elif user_type == USER_TYPE_NGO:
        if not (_text(body.get("organizationName")) and _text(body.get("contactPerson"))):
            raise ValidationError(
                "Organization name and contact person are required for NGOs"
            )
    else:
        raise ValidationError("User type must be 'volunteer' or 'ngo'")
    if not isinstance(password, str) or not validate_password_length(password):
        raise ValidationError("Password must be 6-128 characters")

    nested = body.get("profile")
    profile = canonical_profile_keys(nested) if isinstance(nested, dict) else {}
    profile.update(canonical_profile_keys({k: v for k, v in body.items() if k in PROFILE_KEYS}))

    data: dict[str, Any] = {
        "email": normalize_email(email),
        "password": password,
        "userType": user_type,
        "profile": profile,
    }
    for name in ROLE_NAME_FIELDS[user_type]:
        data[name] = _text(body.get(to_camel(name)))
    try:
        return _registration_adapter.validate_python(data)
    except PydanticValidationError as e:
        raise ValidationError(describe_errors(e.errors())) from e


def _validate_profile(document: dict[str, Any]) -> dict[str, Any]:
    try:
        return ProfileData.model_validate(document).to_document()
    except PydanticValidationError as e:
        raise ValidationError(describe_errors(e.errors())) from e


class UserStore:
    """Credential store over the users table."""

    def __init__(self, session: Session, hasher: PasswordHasher) -> None:
        self.session = session
        self.hasher = hasher

    def _commit(self, user: User | None = None) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("User store write failed: %s", type(e).__name__, exc_info=e)
            raise ServerError("Database operation failed") from e
        if user is not None:
            self.session.refresh(user)

    def get(self, user_id: str) -> User | None:
        try:
            return self.session.get(User, user_id)
        except SQLAlchemyError as e:
            raise ServerError("Database operation failed") from e

    def find_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup; the stored email is always lowercase."""
        if not email or not email.strip():
            return None
        try:
            return (
                self.session.query(User)
                .filter(User.email == normalize_email(email))
                .first()
            )
        except SQLAlchemyError as e:
            raise ServerError("Database operation failed") from e

    def create(self, registration: VolunteerRegistration | NgoRegistration) -> User:
        """Insert a new account. Raises ValidationError if the email is taken."""
        email = normalize_email(registration.email)
        if self.find_by_email(email) is not None:
            raise ValidationError("Email already registered")

        user = User(
            email=email,
            password_hash=self.hasher.hash(registration.password),
            user_type=registration.user_type,
            profile=registration.profile.to_document(),
        )
        match registration:
            case VolunteerRegistration(first_name=first, last_name=last):
                user.first_name = first
                user.last_name = last
            case NgoRegistration(organization_name=org, contact_person=contact):
                user.organization_name = org
                user.contact_person = contact

        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same address.
            self.session.rollback()
            raise ValidationError("Email already registered") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("User create failed: %s", type(e).__name__, exc_info=e)
            raise ServerError("Database operation failed") from e
        self.session.refresh(user)
        logger.info("Registered user", extra={"user_id": user.id, "user_type": user.user_type})
        return user

    def update_profile(self, user: User, update: ProfileUpdateRequest) -> User:
        """
        Apply name and profile changes. Names for the other role are ignored and
        role-required names cannot be blanked. Profile keys are merged into the
        stored profile; a null value resets that key to its default. Nothing is
        assigned until every change has validated. The password hash is untouched.
        """
        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        names: dict[str, str] = {}
        for name in ROLE_NAME_FIELDS[user.user_type]:
            if name not in changes:
                continue
            value = changes[name].strip()
            if not value:
                raise ValidationError(f"{to_camel(name)} cannot be empty")
            names[name] = value

        profile = None
        if update.profile is not None:
            merged = dict(user.profile or {})
            merged.update(canonical_profile_keys(update.profile))
            profile = _validate_profile(merged)

        for name, value in names.items():
            setattr(user, name, value)
        if profile is not None:
            # Reassign so the JSON column is flagged dirty.
            user.profile = profile
        self._commit(user)
        return user

    def change_password(self, user: User, new_password: str) -> User:
        """Replace the password (rehash) and clear any outstanding reset code."""
        if not validate_password_length(new_password):
            raise ValidationError("Password must be 6-128 characters")
        user.password_hash = self.hasher.hash(new_password)
        user.password_reset_code = None
        user.password_reset_expires_at = None
        self._commit(user)
        return user

    def set_reset_code(self, user: User, code: str, expires_at: datetime) -> User:
        """Store a reset code with its expiry in one write, replacing any previous code."""
        user.password_reset_code = code
        user.password_reset_expires_at = expires_at
        self._commit(user)
        return user

    def verify_password(self, user: User, candidate: str) -> bool:
        return self.hasher.verify(candidate, user.password_hash)

    @staticmethod
    def to_public_view(user: User) -> PublicUser:
        return PublicUser.model_validate(user)

    def list_active(self, user_type: str) -> list[User]:
        try:
            return (
                self.session.query(User)
                .filter(User.user_type == user_type, User.is_active.is_(True))
                .order_by(User.created_at, User.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise ServerError("Database operation failed") from e

    def count_by_type(self) -> Counter:
        rows = (
            self.session.query(User.user_type, func.count(User.id))
            .group_by(User.user_type)
            .all()
        )
        return Counter({user_type: count for user_type, count in rows})
