from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load user profile"
UNEXPECTED_ERROR = "An unexpected error occurred"


class PageState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    NOT_FOUND = "not_found"
    PROFILE = "profile"


@dataclass
class ProfilePage:
    user_id: str
    loading: bool = True
    error: str | None = None
    user_exists: bool = False
    profile: ProfileEntity | None = None

    @property
    def state(self) -> PageState:
        if self.loading:
            return PageState.LOADING
        if self.error:
            return PageState.ERROR
        if not self.user_exists:
            return PageState.NOT_FOUND
        return PageState.PROFILE


@dataclass
class LoadProfilePageUseCase:
    """Decide what someone's profile page shows.

    Accounts created before profiles existed only have a ``users`` row, so a
    missing profile falls back to that table before giving up.
    """

    profiles: ProfileRepository
    users: UserRepository

    def find_user(self, user_id: str) -> tuple[bool, ProfileEntity | None]:
        """Whether the user exists, plus their profile when they have one.

        Raises:
            RuntimeError: A lookup failed for a reason other than "no rows".
        """
        profile = self.profiles.get(user_id)
        if profile is not None:
            return True, profile
        # only reached once the profiles lookup settled as "not found"
        return self.users.get(user_id) is not None, None

    def execute(self, user_id: str) -> ProfilePage:
        page = ProfilePage(user_id=user_id)
        if not user_id:
            return page
        try:
            page.user_exists, page.profile = self.find_user(user_id)
        except RuntimeError as exc:
            logger.error("Error checking user %s: %s", user_id, exc)
            page.error = LOAD_FAILED
        except Exception:
            logger.exception("Unexpected error loading profile page for %s", user_id)
            page.error = UNEXPECTED_ERROR
        finally:
            page.loading = False
        return page
