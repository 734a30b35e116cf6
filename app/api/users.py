"""Profile editing and counterpart listings (volunteers for NGOs and vice versa)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_user, get_user_store
from app.models import User
from app.schemas.user import ProfileUpdateRequest, UserListResponse, UserResponse
from app.services.credential_store import UserStore
from app.services.profile_query import (
    NgoFilters,
    VolunteerFilters,
    search_ngos,
    search_volunteers,
)

router = APIRouter()


@router.put("/profile", response_model=UserResponse)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    """
    Update names and profile attributes of the current user. Profile keys are
    merged into the existing profile. Email, password, userType and id cannot
    be changed here and are ignored.
    """
    user = store.update_profile(current_user, body)
    return UserResponse(user=store.to_public_view(user))


@router.get("/volunteers", response_model=UserListResponse)
def list_volunteers(
    _user: Annotated[User, Depends(get_current_user)],
    store: Annotated[UserStore, Depends(get_user_store)],
    skills: Annotated[str | None, Query(description="Comma-separated; any match")] = None,
    interests: Annotated[str | None, Query(description="Comma-separated; any match")] = None,
    experience: str | None = None,
    availability: str | None = None,
    location: Annotated[str | None, Query(description="Case-insensitive substring")] = None,
) -> UserListResponse:
    filters = VolunteerFilters.from_query(
        skills=skills,
        interests=interests,
        experience=experience,
        availability=availability,
        location=location,
    )
    data = search_volunteers(store, filters)
    return UserListResponse(count=len(data), data=data)


@router.get("/ngos", response_model=UserListResponse)
def list_ngos(
    _user: Annotated[User, Depends(get_current_user)],
    store: Annotated[UserStore, Depends(get_user_store)],
    focus_areas: Annotated[
        str | None, Query(alias="focusAreas", description="Comma-separated; any match")
    ] = None,
    size: str | None = None,
    location: Annotated[str | None, Query(description="Case-insensitive substring")] = None,
) -> UserListResponse:
    filters = NgoFilters.from_query(focus_areas=focus_areas, size=size, location=location)
    data = search_ngos(store, filters)
    return UserListResponse(count=len(data), data=data)
