from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from src.application.dtos.page_dto import LayoutDTO, ProfilePageResponse
from src.application.dtos.profile_dto import ProfileResponse
from src.application.navigation import EventNavigation, NavigationChannel, RecordingNavigator
from src.application.use_cases.load_profile_page import LoadProfilePageUseCase, PageState
from src.application.views.layout import DESKTOP_MIN_WIDTH, LayoutShell
from src.infrastructure.api.dependencies import (
    get_navigation_channel,
    get_optional_user,
    get_profile_repo,
    get_user_repo,
)
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
    responses={
        404: {"description": "Not Found - No such user"},
        422: {"description": "Validation Error - Invalid request format"},
    },
)

_STATUS_BY_STATE = {
    PageState.PROFILE: 200,
    PageState.NOT_FOUND: 404,
    PageState.ERROR: 500,
    PageState.LOADING: 202,
}


@router.get(
    "/{user_id}",
    response_model=ProfileResponse,
    summary="Get Profile",
    description="""
    Public profile of a musician with instrument and genre glyphs.

    **Authentication required**: No
    """,
)
async def get_profile(user_id: str, profiles: ProfileRepository = Depends(get_profile_repo)):
    """Fetch a single profile."""
    try:
        profile = profiles.get(user_id)
    except RuntimeError as exc:
        raise HTTPException(status_code=500, detail="Failed to load user profile") from exc
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return ProfileResponse.from_entity(profile)


@router.get(
    "/{user_id}/page",
    response_model=ProfilePageResponse,
    summary="Profile Page State",
    description="""
    Everything the profile page needs to render, in one call.

    The `state` field is one of `loading`, `error`, `not_found` or `profile`,
    checked in that order. Users without a profile row but with an account in
    the `users` table still count as existing.

    The `layout` field carries the navigation chrome for the given viewport:
    a side panel from 1024px up, a bottom bar below.

    **Authentication required**: No (a bearer token marks the viewer's own profile)
    """,
    responses={500: {"description": "Profile lookup failed"}},
)
async def get_profile_page(
    user_id: str,
    viewport_width: int = Query(DESKTOP_MIN_WIDTH, gt=0, description="Viewer's viewport width in pixels"),
    viewer=Depends(get_optional_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
    users: UserRepository = Depends(get_user_repo),
    channel: NavigationChannel = Depends(get_navigation_channel),
):
    """Resolve the profile page for `user_id`."""
    page = LoadProfilePageUseCase(profiles=profiles, users=users).execute(user_id)
    body = ProfilePageResponse(state=page.state.value, error=page.error)
    if page.state is PageState.PROFILE:
        shell = LayoutShell(
            EventNavigation(RecordingNavigator(), channel),
            viewport_width=viewport_width,
            is_current_user=viewer is not None and viewer.id == user_id,
        )
        body.layout = LayoutDTO(**shell.to_dict())
        if page.profile is not None:
            body.profile = ProfileResponse.from_entity(page.profile)
    return JSONResponse(status_code=_STATUS_BY_STATE[page.state], content=body.model_dump(mode="json"))
