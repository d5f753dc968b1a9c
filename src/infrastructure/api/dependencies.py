from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.navigation import NavigationChannel
from src.infrastructure.config import settings
from src.infrastructure.database.repositories.event_repository import EventRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.repositories.user_repository import UserRepository
from src.infrastructure.database.supabase_client import (
    SupabaseAuthAdapter,
    UserInfo,
    get_supabase_client,
)
from src.infrastructure.storage.supabase_storage import SupabaseStorage

_bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_adapter() -> SupabaseAuthAdapter:
    return SupabaseAuthAdapter()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(_bearer_scheme)] = None,
    auth: Annotated[SupabaseAuthAdapter, Depends(get_auth_adapter)] = None,
) -> UserInfo:
    if not credentials or not credentials.scheme or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    token = credentials.credentials
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    try:
        return auth.validate_token(token)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))


def get_session_user(request: Request) -> UserInfo:
    """Owner of the session the gate middleware already checked."""
    user = getattr(request.state, "session_user", None)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No active session")
    return user


def get_storage() -> SupabaseStorage:
    return SupabaseStorage(get_supabase_client())


def get_profile_repo() -> ProfileRepository:
    return ProfileRepository(get_supabase_client())


def get_user_repo() -> UserRepository:
    return UserRepository(get_supabase_client())


def get_event_repo() -> EventRepository:
    return EventRepository(get_supabase_client())


def get_navigation_channel(request: Request) -> NavigationChannel:
    return request.app.state.navigation_channel


def get_max_avatar_bytes() -> int:
    return settings.max_avatar_bytes


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(_bearer_scheme)] = None,
    auth: Annotated[SupabaseAuthAdapter, Depends(get_auth_adapter)] = None,
) -> UserInfo | None:
    """Signed-in user when a valid bearer token is sent, else None."""
    if not credentials or credentials.scheme.lower() != "bearer":
        return None
    return auth.get_session(credentials.credentials)
