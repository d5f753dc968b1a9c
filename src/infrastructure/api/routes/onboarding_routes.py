from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from src.application.dtos.profile_dto import (
    AvatarUploadResponse,
    CompleteOnboardingRequest,
    CompleteOnboardingResponse,
    IconOptionDTO,
    OnboardingOptionsResponse,
    OnboardingStatusResponse,
    ProfileResponse,
)
from src.application.use_cases.complete_onboarding import (
    DASHBOARD_ROUTE,
    CompleteOnboardingUseCase,
    OnboardingForm,
    onboarding_status,
)
from src.application.use_cases.upload_avatar import UploadAvatarUseCase
from src.domain.services.music_icons import icons_of_kind
from src.infrastructure.api.dependencies import (
    get_current_user,
    get_max_avatar_bytes,
    get_profile_repo,
    get_storage,
)
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.storage.supabase_storage import SupabaseStorage

router = APIRouter(
    prefix="/onboarding",
    tags=["Onboarding"],
    responses={
        401: {"description": "Unauthorized - Invalid or missing authentication token"},
        422: {"description": "Validation Error - Invalid request format"},
    },
)


@router.get(
    "/status",
    response_model=OnboardingStatusResponse,
    summary="Onboarding Status",
    description="""
    Whether the signed-in user still has onboarding steps left.

    Completed users get `redirect_to: "/dashboard"`.
    """,
)
def get_status(user=Depends(get_current_user), profiles: ProfileRepository = Depends(get_profile_repo)):
    st = onboarding_status(profiles.get(user.id))
    return OnboardingStatusResponse(onboarded=st.onboarded, started=st.started, redirect_to=st.redirect_to)


@router.get("/options", response_model=OnboardingOptionsResponse, summary="Instrument and Genre Options")
def get_options():
    def options(kind):
        return [IconOptionDTO(id=i.id, name=i.name, emoji=i.emoji) for i in icons_of_kind(kind)]

    return OnboardingOptionsResponse(instruments=options("instrument"), genres=options("genre"))


@router.post(
    "/avatar",
    response_model=AvatarUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Profile Photo",
    description="""
    Upload the profile photo for the onboarding photo step.

    **Accepted**: any `image/*` file up to 5MB. The photo is cropped to a
    centered square and scaled to 256x256 before it is stored in the
    `avatars` bucket. Earlier photos of the user are deleted.
    """,
    responses={400: {"description": "Bad Request - Not an image or too large"}},
)
async def upload_avatar(
    file: UploadFile = File(..., description="Image file to upload"),
    user=Depends(get_current_user),
    storage: SupabaseStorage = Depends(get_storage),
    max_bytes: int = Depends(get_max_avatar_bytes),
):
    data = await file.read()
    try:
        uploaded = UploadAvatarUseCase(storage=storage, max_bytes=max_bytes).execute(
            user.id, data, file.content_type
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return AvatarUploadResponse(
        url=uploaded.url,
        path=uploaded.stored.path,
        width=uploaded.stored.width,
        height=uploaded.stored.height,
        replaced=uploaded.replaced,
    )


@router.post(
    "/complete",
    response_model=CompleteOnboardingResponse,
    summary="Complete Onboarding",
    description="""
    Save photo, instruments, genres and bio in one go.

    Instrument and genre names are stored as canonical ids (`"Hip Hop"` is
    stored as `hiphop`); names outside the icon table are kept as lowercase
    slugs.
    """,
)
def complete(
    body: CompleteOnboardingRequest,
    user=Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    form = OnboardingForm(
        avatar_url=body.avatar_url,
        instruments=body.instruments,
        genres=body.genres,
        bio=body.bio,
        full_name=body.full_name or user.full_name,
    )
    try:
        profile = CompleteOnboardingUseCase(profiles=profiles).execute(user.id, form)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CompleteOnboardingResponse(profile=ProfileResponse.from_entity(profile), redirect_to=DASHBOARD_ROUTE)
