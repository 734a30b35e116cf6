"""Schemas for user records: profile bag, registration variants, public view."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.schemas.base import CamelModel

# Closed sets for enumerated profile tiers; "" means unset.
EXPERIENCE_LEVELS = ("beginner", "intermediate", "advanced", "expert")
AVAILABILITY_OPTIONS = (
    "few-hours-week",
    "few-hours-month",
    "part-time",
    "full-time",
    "project-based",
)
ORGANIZATION_SIZES = ("small", "medium", "large", "enterprise")

Experience = Literal["", "beginner", "intermediate", "advanced", "expert"]
Availability = Literal[
    "", "few-hours-week", "few-hours-month", "part-time", "full-time", "project-based"
]
OrganizationSize = Literal["", "small", "medium", "large", "enterprise"]


class ProfileData(CamelModel):
    """
    Optional profile attributes. Volunteers use bio/skills/experience/availability/interests,
    NGOs use description/mission/focusAreas/size/foundedYear/registrationNumber;
    contact fields are shared.
    """

    model_config = ConfigDict(extra="ignore")

    phone: str = ""
    location: str = ""
    website: str = ""

    bio: str = ""
    skills: list[str] = Field(default_factory=list)
    experience: Experience = ""
    availability: Availability = ""
    interests: list[str] = Field(default_factory=list)

    description: str = ""
    mission: str = ""
    focus_areas: list[str] = Field(default_factory=list)
    size: OrganizationSize = ""
    founded_year: int | None = Field(default=None, ge=1800, le=2100)
    registration_number: str = ""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null means "not filled in": the field falls back to its default, so a
        # null in a profile update clears the stored value.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_document(self) -> dict[str, Any]:
        """Representation stored in the profile JSON column."""
        return self.model_dump(by_alias=True)


# Accepted spellings of profile keys, mapped to the stored camelCase key.
_PROFILE_ALIASES = {
    key: to_camel(name) for name in ProfileData.model_fields for key in (name, to_camel(name))
}
PROFILE_KEYS = frozenset(_PROFILE_ALIASES)


def canonical_profile_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Rename snake_case profile keys to the camelCase keys the profile column stores."""
    return {_PROFILE_ALIASES.get(key, key): value for key, value in data.items()}


class _RegistrationBase(CamelModel):
    email: str
    password: str
    profile: ProfileData = Field(default_factory=ProfileData)


class VolunteerRegistration(_RegistrationBase):
    user_type: Literal["volunteer"]
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)


class NgoRegistration(_RegistrationBase):
    user_type: Literal["ngo"]
    organization_name: str = Field(min_length=1, max_length=255)
    contact_person: str = Field(min_length=1, max_length=255)


Registration = Annotated[
    VolunteerRegistration | NgoRegistration,
    Field(discriminator="user_type"),
]


class ProfileUpdateRequest(CamelModel):
    """
    Body of PUT /users/profile. Only names and the profile bag are writable;
    email, password, userType, id and anything else are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    organization_name: str | None = None
    contact_person: str | None = None
    profile: dict[str, Any] | None = None


class PublicUser(CamelModel):
    """User as returned to clients. Has no hash or reset-code fields to leak."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    user_type: str
    first_name: str | None = None
    last_name: str | None = None
    organization_name: str | None = None
    contact_person: str | None = None
    profile: dict[str, Any] = Field(default_factory=dict)
    is_email_verified: bool = False
    is_active: bool = True
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserResponse(CamelModel):
    success: bool = True
    user: PublicUser


class UserListResponse(CamelModel):
    """Response for the volunteer and NGO listings."""

    success: bool = True
    count: int
    data: list[PublicUser]
