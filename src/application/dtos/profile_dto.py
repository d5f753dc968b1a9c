from __future__ import annotations

from pydantic import BaseModel, Field

from src.domain.entities.profile import ProfileEntity
from src.domain.services.date_format import format_date
from src.domain.services.music_icons import get_stored_emoji


class IconBadgeDTO(BaseModel):
    """A free-text instrument or genre with its display glyph."""
    label: str = Field(..., description="Name as stored on the profile", examples=["guitar"])
    glyph: str = Field(..., description="Emoji, or the name itself when unknown", examples=["🎸"])


class ProfileResponse(BaseModel):
    """Public profile of a musician."""
    id: str = Field(..., description="User id from Supabase Auth")
    full_name: str | None = Field(None, description="Display name", examples=["Jamie Rivera"])
    avatar_url: str | None = Field(None, description="Public URL of the profile photo")
    instruments: list[str] = Field(default_factory=list, description="Instrument ids")
    genres: list[str] = Field(default_factory=list, description="Genre ids")
    instrument_icons: list[IconBadgeDTO] = Field(default_factory=list)
    genre_icons: list[IconBadgeDTO] = Field(default_factory=list)
    bio: str | None = Field(None, description="Biography text")
    onboarded: bool = Field(..., description="All onboarding steps are complete")
    member_since: str | None = Field(None, description="Profile creation date, Pacific Time", examples=["May 4, 2025"])

    @classmethod
    def from_entity(cls, profile: ProfileEntity) -> ProfileResponse:
        return cls(
            id=profile.id,
            full_name=profile.full_name,
            avatar_url=profile.avatar_url,
            instruments=profile.instruments,
            genres=profile.genres,
            instrument_icons=[IconBadgeDTO(label=i, glyph=get_stored_emoji(i, "instrument")) for i in profile.instruments],
            genre_icons=[IconBadgeDTO(label=g, glyph=get_stored_emoji(g, "genre")) for g in profile.genres],
            bio=profile.bio,
            onboarded=profile.is_onboarded,
            member_since=format_date(profile.created_at) if profile.created_at else None,
        )


class OnboardingStatusResponse(BaseModel):
    onboarded: bool = Field(..., description="Every onboarding step is filled in")
    started: bool = Field(..., description="At least one onboarding step is filled in")
    redirect_to: str | None = Field(None, description="Where the client should go next", examples=["/dashboard"])


class CompleteOnboardingRequest(BaseModel):
    """Everything collected by the onboarding steps."""
    avatar_url: str = Field("", description="URL returned by the avatar upload step")
    instruments: list[str] = Field(default_factory=list, description="Instrument names", examples=[["Guitar", "Vocals"]])
    genres: list[str] = Field(default_factory=list, description="Genre names", examples=[["Hip Hop", "Jazz"]])
    bio: str = Field("", max_length=2000, description="Short biography")
    full_name: str | None = Field(None, max_length=100, description="Overrides the name given at sign-up")


class CompleteOnboardingResponse(BaseModel):
    profile: ProfileResponse
    redirect_to: str = Field(..., examples=["/dashboard"])


class AvatarUploadResponse(BaseModel):
    url: str = Field(..., description="Public URL of the stored avatar")
    path: str = Field(..., description="Object name inside the avatars bucket")
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    replaced: int = Field(0, ge=0, description="Earlier avatars removed")


class IconOptionDTO(BaseModel):
    id: str = Field(..., examples=["hiphop"])
    name: str = Field(..., examples=["Hip Hop"])
    emoji: str = Field(..., examples=["🎤"])


class OnboardingOptionsResponse(BaseModel):
    """Pick lists shown by the instrument and genre onboarding steps."""
    instruments: list[IconOptionDTO]
    genres: list[IconOptionDTO]
