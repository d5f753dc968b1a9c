from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ProfileEntity:
    id: str  # user id from Supabase auth
    full_name: str | None = None
    avatar_url: str | None = None
    instruments: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    bio: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_onboarded(self) -> bool:
        """All onboarding steps are filled in."""
        return bool(self.instruments) and bool(self.genres) and bool(self.bio) and bool(self.avatar_url)

    @property
    def has_started_onboarding(self) -> bool:
        return bool(self.instruments) or bool(self.genres) or bool(self.bio) or bool(self.avatar_url)
