import json

from src.domain.entities.participant import (
    PLACEHOLDER_AVATAR,
    Participant,
    parse_participant,
    parse_participants,
)
from src.domain.entities.profile import ProfileEntity


def test_parses_json_strings():
    raw = json.dumps({"id": "u1", "full_name": "Ana", "avatar_url": "a.png", "instruments": ["Piano"], "genres": []})
    p = parse_participant(raw)
    assert p == Participant(id="u1", full_name="Ana", avatar_url="a.png", instruments=["Piano"], genres=[])


def test_bare_ids_become_standard_participants():
    p = parse_participant("0b7c3b6e-1234")
    assert p.id == "0b7c3b6e-1234"
    assert p.full_name == "User"
    assert p.avatar_url == PLACEHOLDER_AVATAR


def test_partial_dicts_get_defaults():
    p = parse_participant({"id": "u2", "instruments": "not a list"})
    assert p.instruments == []
    assert p.genres == []


def test_unreadable_entries_are_dropped():
    assert parse_participant(None) is None
    assert parse_participant({"name": "no id"}) is None
    assert parse_participants([None, "u3", {"id": "u4"}, 42]) == [
        Participant(id="u3"),
        Participant(id="u4"),
    ]


def test_round_trip_through_storage_format():
    p = Participant(id="u5", full_name="Bo", avatar_url="b.png", instruments=["dj"], genres=["electronic"])
    assert parse_participant(p.to_json()) == p


def test_from_profile_fills_defaults():
    p = Participant.from_profile(ProfileEntity(id="u6", instruments=["bass"]))
    assert p.full_name == "User"
    assert p.avatar_url == PLACEHOLDER_AVATAR
    assert p.instruments == ["bass"]
