from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client, create_client

logger = logging.getLogger(__name__)

# PostgREST error code for ``.single()`` matching zero rows
NO_ROWS_CODE = "PGRST116"


@dataclass(slots=True)
class UserInfo:
    id: str
    email: str | None
    full_name: str | None = None


def is_no_rows_error(exc: Exception) -> bool:
    return isinstance(exc, APIError) and exc.code == NO_ROWS_CODE


def supabase_disabled() -> bool:
    return os.getenv("SUPABASE_DISABLED", "0") == "1"


class SupabaseAuthAdapter:
    """Answers "is there a session" and "who is the current user".

    When SUPABASE_DISABLED=1, any non-empty token is a session for a fake
    user derived from the token.
    """

    def __init__(self) -> None:
        self.disabled = supabase_disabled()
        self.url = os.getenv("SUPABASE_URL")
        self.key = os.getenv("SUPABASE_ANON_KEY")
        self._client: Client | None = None
        if not self.disabled and self.url and self.key:
            self._client = create_client(self.url, self.key)

    def validate_token(self, token: str) -> UserInfo:
        if not token:
            raise ValueError("Missing access token")
        if self.disabled or not self._client:
            # "user-<id>" tokens map to that id so tests can act as a given user
            if token.startswith("user-"):
                return UserInfo(id=token[len("user-"):], email=None)
            fake_id = f"fake-{abs(hash(token)) % (10**10)}"
            return UserInfo(id=fake_id, email=None)
        try:  # pragma: no cover - network
            res = self._client.auth.get_user(token)
            user = res.user if res else None
            if not user:
                raise ValueError("Invalid access token")
            metadata = getattr(user, "user_metadata", None) or {}
            return UserInfo(id=user.id, email=user.email, full_name=metadata.get("full_name"))
        except ValueError:
            raise
        except Exception as exc:  # pragma: no cover - network
            raise ValueError(f"Invalid access token: {exc}") from exc

    def get_session(self, token: str | None) -> UserInfo | None:
        """Current session owner for ``token``, or None when signed out."""
        if not token:
            return None
        try:
            return self.validate_token(token)
        except ValueError as exc:
            logger.info("Rejected session token: %s", exc)
            return None


_CLIENT_SINGLETON: Client | None = None


def get_supabase_client() -> Client | None:
    global _CLIENT_SINGLETON
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_ANON_KEY")
    if supabase_disabled() or not url or not key:
        return None
    if _CLIENT_SINGLETON is None:
        _CLIENT_SINGLETON = create_client(url, key)
    return _CLIENT_SINGLETON
