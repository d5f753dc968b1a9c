from unittest.mock import Mock

import pytest
from postgrest.exceptions import APIError

from src.application.use_cases.load_profile_page import (
    LOAD_FAILED,
    UNEXPECTED_ERROR,
    LoadProfilePageUseCase,
    PageState,
    ProfilePage,
)
from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.repositories.profile_repository import ProfileRepository


def api_error(code: str) -> APIError:
    return APIError({"message": "boom", "code": code, "hint": None, "details": "0 rows"})


@pytest.fixture
def repos():
    return Mock(), Mock()


def test_profile_found(repos):
    profiles, users = repos
    profiles.get.return_value = ProfileEntity(id="u1", full_name="Ana")

    page = LoadProfilePageUseCase(profiles, users).execute("u1")

    assert page.state is PageState.PROFILE
    assert page.profile.full_name == "Ana"
    users.get.assert_not_called()


def test_falls_back_to_users_table(repos):
    profiles, users = repos
    profiles.get.return_value = None
    users.get.return_value = {"id": "u1"}

    page = LoadProfilePageUseCase(profiles, users).execute("u1")

    assert page.state is PageState.PROFILE
    assert page.profile is None
    users.get.assert_called_once_with("u1")


def test_not_found_anywhere(repos):
    profiles, users = repos
    profiles.get.return_value = None
    users.get.return_value = None

    page = LoadProfilePageUseCase(profiles, users).execute("ghost")

    assert page.state is PageState.NOT_FOUND
    assert page.error is None


def test_backend_failure_sets_load_error(repos):
    profiles, users = repos
    profiles.get.side_effect = RuntimeError("DB get profile failed: timeout")

    page = LoadProfilePageUseCase(profiles, users).execute("u1")

    assert page.state is PageState.ERROR
    assert page.error == LOAD_FAILED
    users.get.assert_not_called()


def test_failure_in_users_lookup(repos):
    profiles, users = repos
    profiles.get.return_value = None
    users.get.side_effect = RuntimeError("DB get user failed")

    assert LoadProfilePageUseCase(profiles, users).execute("u1").error == LOAD_FAILED


def test_unexpected_exception(repos):
    profiles, users = repos
    profiles.get.side_effect = KeyError("id")

    page = LoadProfilePageUseCase(profiles, users).execute("u1")

    assert page.error == UNEXPECTED_ERROR
    assert page.loading is False


def test_empty_id_stays_loading(repos):
    profiles, users = repos
    page = LoadProfilePageUseCase(profiles, users).execute("")
    assert page.state is PageState.LOADING
    profiles.get.assert_not_called()


def test_state_priority():
    page = ProfilePage(user_id="u1", loading=True, error="x", user_exists=True)
    assert page.state is PageState.LOADING
    page.loading = False
    assert page.state is PageState.ERROR
    page.error = None
    page.user_exists = False
    assert page.state is PageState.NOT_FOUND


@pytest.fixture
def supabase_repo(monkeypatch):
    monkeypatch.setenv("SUPABASE_DISABLED", "0")
    monkeypatch.delenv("USE_LOCAL_DB", raising=False)
    client = Mock()
    repo = ProfileRepository(client)
    query = client.table.return_value.select.return_value.eq.return_value.single.return_value
    return repo, query


def test_repository_maps_no_rows_to_none(supabase_repo):
    repo, query = supabase_repo
    query.execute.side_effect = api_error("PGRST116")
    assert repo.get("u1") is None


def test_repository_raises_on_other_errors(supabase_repo):
    repo, query = supabase_repo
    query.execute.side_effect = api_error("42501")
    with pytest.raises(RuntimeError, match="DB get profile failed"):
        repo.get("u1")


def test_repository_returns_entity(supabase_repo):
    repo, query = supabase_repo
    query.execute.return_value = Mock(
        data={
            "id": "u1",
            "full_name": "Ana",
            "avatar_url": None,
            "instruments": ["piano"],
            "genres": None,
            "bio": None,
            "created_at": "2025-05-04T19:30:00Z",
        }
    )

    profile = repo.get("u1")

    assert profile.instruments == ["piano"]
    assert profile.genres == []
    assert profile.created_at.year == 2025
