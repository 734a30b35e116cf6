"""Filtered listings of active volunteers and NGOs."""

from dataclasses import dataclass, field
from typing import Any

from app.core.errors import ValidationError
from app.models import USER_TYPE_NGO, USER_TYPE_VOLUNTEER, User
from app.schemas.user import (
    AVAILABILITY_OPTIONS,
    EXPERIENCE_LEVELS,
    ORGANIZATION_SIZES,
    PublicUser,
)
from app.services.credential_store import UserStore


def split_csv(value: str | None) -> list[str]:
    """'a, b,,c' -> ['a', 'b', 'c']."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _check_tier(name: str, value: str | None, allowed: tuple[str, ...]) -> str:
    value = (value or "").strip()
    if value and value not in allowed:
        raise ValidationError(f"Invalid {name}: must be one of {', '.join(allowed)}")
    return value


def _any_overlap(wanted: list[str], have: Any) -> bool:
    if not wanted:
        return True
    return bool(set(wanted) & set(have or ()))


def _location_matches(needle: str, profile: dict[str, Any]) -> bool:
    if not needle:
        return True
    return needle.lower() in str(profile.get("location") or "").lower()


@dataclass
class VolunteerFilters:
    skills: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    experience: str = ""
    availability: str = ""
    location: str = ""

    @classmethod
    def from_query(
        cls,
        skills: str | None = None,
        interests: str | None = None,
        experience: str | None = None,
        availability: str | None = None,
        location: str | None = None,
    ) -> "VolunteerFilters":
        return cls(
            skills=split_csv(skills),
            interests=split_csv(interests),
            experience=_check_tier("experience", experience, EXPERIENCE_LEVELS),
            availability=_check_tier("availability", availability, AVAILABILITY_OPTIONS),
            location=(location or "").strip(),
        )

    def matches(self, user: User) -> bool:
        profile = user.profile or {}
        if self.experience and profile.get("experience") != self.experience:
            return False
        if self.availability and profile.get("availability") != self.availability:
            return False
        return (
            _any_overlap(self.skills, profile.get("skills"))
            and _any_overlap(self.interests, profile.get("interests"))
            and _location_matches(self.location, profile)
        )


@dataclass
class NgoFilters:
    focus_areas: list[str] = field(default_factory=list)
    size: str = ""
    location: str = ""

    @classmethod
    def from_query(
        cls,
        focus_areas: str | None = None,
        size: str | None = None,
        location: str | None = None,
    ) -> "NgoFilters":
        return cls(
            focus_areas=split_csv(focus_areas),
            size=_check_tier("size", size, ORGANIZATION_SIZES),
            location=(location or "").strip(),
        )

    def matches(self, user: User) -> bool:
        profile = user.profile or {}
        if self.size and profile.get("size") != self.size:
            return False
        return _any_overlap(self.focus_areas, profile.get("focusAreas")) and _location_matches(
            self.location, profile
        )


def search_volunteers(store: UserStore, filters: VolunteerFilters) -> list[PublicUser]:
    """Active volunteers matching every given filter (list filters match on any value)."""
    return [
        store.to_public_view(u)
        for u in store.list_active(USER_TYPE_VOLUNTEER)
        if filters.matches(u)
    ]


def search_ngos(store: UserStore, filters: NgoFilters) -> list[PublicUser]:
    return [
        store.to_public_view(u) for u in store.list_active(USER_TYPE_NGO) if filters.matches(u)
    ]
