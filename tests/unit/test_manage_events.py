from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

from src.application.use_cases.manage_events import (
    CreateEventUseCase,
    EventNotFoundError,
    GetEventUseCase,
    ListUserEventsUseCase,
    UpdateParticipationUseCase,
)
from src.domain.entities.participant import Participant
from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.repositories.event_repository import EventRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

START = datetime(2025, 5, 4, 19, 30, tzinfo=UTC)


@pytest.fixture
def events():
    return EventRepository(None)


@pytest.fixture
def profiles():
    repo = ProfileRepository(None)
    repo.upsert(ProfileEntity(id="ana", full_name="Ana", avatar_url="ana.png", instruments=["piano"], genres=["jazz"]))
    repo.upsert(ProfileEntity(id="bo", full_name="Bo"))
    return repo


@pytest.fixture
def jam(events):
    return CreateEventUseCase(events).execute("ana", "Sunday Jam", START, START + timedelta(hours=2))


def test_create_validates_input(events):
    create = CreateEventUseCase(events)
    with pytest.raises(ValueError, match="title"):
        create.execute("ana", "   ", START, START + timedelta(hours=1))
    with pytest.raises(ValueError, match="end after"):
        create.execute("ana", "Jam", START, START)


def test_going_then_maybe_keeps_one_entry(events, profiles, jam):
    update = UpdateParticipationUseCase(events, profiles)

    update.execute("bo", jam.id, "going")
    event = update.execute("bo", jam.id, "maybe")

    assert [p.id for p in event.participants_going] == []
    assert [p.id for p in event.participants_maybe] == ["bo"]
    assert event.status_of("bo") == "maybe"


def test_clearing_participation(events, profiles, jam):
    update = UpdateParticipationUseCase(events, profiles)
    update.execute("bo", jam.id, "going")
    event = update.execute("bo", jam.id, None)
    assert event.status_of("bo") is None
    assert event.updated_at >= jam.updated_at


def test_participant_is_standardized_from_profile(events, profiles, jam):
    event = UpdateParticipationUseCase(events, profiles).execute("bo", jam.id, "going")
    assert event.participants_going == [
        Participant(id="bo", full_name="Bo", avatar_url="/placeholder.svg", instruments=[], genres=[])
    ]


@pytest.mark.parametrize(
    "user_id,event_id,status,message",
    [
        ("", "x", "going", "logged in"),
        ("bo", "x", "maybe-not", "Unsupported"),
        ("bo", "missing", "going", "Event not found"),
        ("nobody", None, "going", "Complete your profile"),
    ],
)
def test_participation_errors(events, profiles, jam, user_id, event_id, status, message):
    with pytest.raises(ValueError, match=message):
        UpdateParticipationUseCase(events, profiles).execute(user_id, event_id or jam.id, status)


def test_get_fills_in_placeholder_participants(events, profiles, jam):
    events.update_participants(jam.id, [Participant(id="ana")], [])
    event = GetEventUseCase(events, profiles).execute(jam.id)
    assert event.participants_going[0].full_name == "Ana"
    assert event.participants_going[0].avatar_url == "ana.png"
    assert event.participants_going[0].instruments == ["piano"]


def test_get_keeps_stored_data_when_profiles_fail(events, jam):
    events.update_participants(jam.id, [Participant(id="ana")], [])
    broken = Mock()
    broken.get_many.side_effect = RuntimeError("DB list profiles failed")
    event = GetEventUseCase(events, broken).execute(jam.id)
    assert event.participants_going[0].full_name == "User"


def test_get_unknown_event(events, profiles):
    with pytest.raises(ValueError, match="Event not found"):
        GetEventUseCase(events, profiles).execute("nope")


def test_user_events_include_hosted_and_going(events, profiles, jam):
    later = CreateEventUseCase(events).execute("bo", "Late Set", START + timedelta(days=1), START + timedelta(days=1, hours=1))
    CreateEventUseCase(events).execute("bo", "Solo", START + timedelta(days=2), START + timedelta(days=2, hours=1))
    UpdateParticipationUseCase(events, profiles).execute("ana", later.id, "going")

    titles = [e.title for e in ListUserEventsUseCase(events).execute("ana")]

    assert titles == ["Sunday Jam", "Late Set"]


def test_create_mixes_aware_and_naive_times(events):
    naive_end = datetime(2025, 5, 4, 22, 0)
    event = CreateEventUseCase(events).execute("ana", "Jam", START, naive_end)
    assert event.end_time == datetime(2025, 5, 4, 22, 0, tzinfo=UTC)

    with pytest.raises(ValueError, match="end after"):
        CreateEventUseCase(events).execute("ana", "Jam", START, datetime(2025, 5, 4, 19, 0))


def test_unknown_event_has_its_own_error(events, profiles):
    with pytest.raises(EventNotFoundError):
        UpdateParticipationUseCase(events, profiles).execute("bo", "missing", "going")


def test_local_db_list_failure_is_wrapped(events):
    events.use_local_db = True
    events.pg_client = Mock()
    events.pg_client.fetch_all.side_effect = Exception("connection refused")
    with pytest.raises(RuntimeError, match="PostgreSQL list events failed"):
        events.list_all()
