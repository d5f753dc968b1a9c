from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from src.application.dtos.profile_dto import ProfileResponse
from src.domain.entities.profile import ProfileEntity
from src.infrastructure.api.dependencies import get_current_user, get_profile_repo
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Unauthorized - Invalid or missing authentication token"},
        422: {"description": "Validation Error - Invalid request format"},
    },
)


class ValidateTokenResponse(BaseModel):
    """Response model for token validation."""
    user_id: str = Field(..., description="Unique identifier of the authenticated user")
    email: str | None = Field(None, description="Email address of the authenticated user", examples=["user@example.com"])
    onboarded: bool = Field(..., description="Whether the user finished onboarding")


@router.post(
    "/validate",
    response_model=ValidateTokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Validate Authentication Token",
    description="""
    Validate the provided access token and make sure a profile row exists.

    New accounts get an empty profile carrying the name given at sign-up.

    **Authentication required**: Yes (Bearer token)
    """,
)
def validate_token(
    user=Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    """Validate token and ensure the user profile exists."""
    prof = profiles.ensure(user.id, user.full_name)
    return {"user_id": prof.id, "email": user.email, "onboarded": prof.is_onboarded}


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get Current User Profile",
    description="""
    Profile of the signed-in user, created empty on first call.

    **Authentication required**: Yes (Bearer token)
    """,
)
def get_me(
    user=Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    """Get current user's profile."""
    return ProfileResponse.from_entity(profiles.ensure(user.id, user.full_name))


class UpdateProfileBody(BaseModel):
    """Fields the profile screen can edit after onboarding."""
    full_name: str | None = Field(None, min_length=1, max_length=100, examples=["Jamie Rivera"])
    bio: str | None = Field(None, max_length=2000)


@router.patch(
    "/profile",
    response_model=ProfileResponse,
    summary="Update User Profile",
    description="""
    Update the display name and/or biography of the signed-in user.

    **Authentication required**: Yes (Bearer token)
    """,
    responses={400: {"description": "Bad Request - Invalid name provided"}},
)
def update_profile(
    body: UpdateProfileBody,
    user=Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    """Update the current user's name or bio."""
    if body.full_name is not None and not body.full_name.strip():
        raise HTTPException(status_code=400, detail="Display name cannot be empty")
    current = profiles.ensure(user.id, user.full_name)
    updated = ProfileEntity(
        id=current.id,
        full_name=body.full_name.strip() if body.full_name else current.full_name,
        avatar_url=current.avatar_url,
        instruments=current.instruments,
        genres=current.genres,
        bio=body.bio.strip() if body.bio is not None else current.bio,
        created_at=current.created_at,
    )
    return ProfileResponse.from_entity(profiles.upsert(updated))
