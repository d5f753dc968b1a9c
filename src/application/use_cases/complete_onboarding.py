from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities.profile import ProfileEntity
from src.domain.services.music_icons import convert_names_to_ids
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

DASHBOARD_ROUTE = "/dashboard"


@dataclass
class OnboardingForm:
    avatar_url: str = ""
    instruments: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    bio: str = ""
    full_name: str | None = None


@dataclass(frozen=True)
class OnboardingStatus:
    onboarded: bool
    started: bool

    @property
    def redirect_to(self) -> str | None:
        return DASHBOARD_ROUTE if self.onboarded else None


def onboarding_status(profile: ProfileEntity | None) -> OnboardingStatus:
    if profile is None:
        return OnboardingStatus(onboarded=False, started=False)
    return OnboardingStatus(onboarded=profile.is_onboarded, started=profile.has_started_onboarding)


@dataclass
class CompleteOnboardingUseCase:
    profiles: ProfileRepository

    def execute(self, user_id: str, form: OnboardingForm) -> ProfileEntity:
        """Save every onboarding step in one write.

        Instrument and genre names are stored as canonical ids.
        """
        if not user_id:
            raise ValueError("No user found")
        existing = self.profiles.get(user_id)
        full_name = form.full_name or (existing.full_name if existing else None)
        profile = ProfileEntity(
            id=user_id,
            full_name=full_name,
            avatar_url=form.avatar_url or None,
            instruments=convert_names_to_ids(form.instruments, "instrument"),
            genres=convert_names_to_ids(form.genres, "genre"),
            bio=form.bio.strip() or None,
        )
        return self.profiles.upsert(profile)
