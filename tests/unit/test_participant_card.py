from unittest.mock import Mock

from src.application.views.participant_card import render_participant_card
from src.domain.entities.participant import PLACEHOLDER_AVATAR, Participant


def make_participant(**overrides) -> Participant:
    data = {
        "id": "u1",
        "full_name": "Jamie Rivera",
        "avatar_url": "https://cdn.example.com/jamie.png",
        "instruments": ["Guitar", "Vocals", "Drums"],
        "genres": ["Hip Hop", "Jazz", "Rock"],
    }
    data.update(overrides)
    return Participant(**data)


def test_host_gets_suffix():
    assert render_participant_card(make_participant(), is_host=True).display_name == "Jamie Rivera (HOST)"
    assert render_participant_card(make_participant(), is_host=False).display_name == "Jamie Rivera"


def test_badges_are_truncated_and_resolved():
    card = render_participant_card(make_participant(), is_host=False)
    assert [b.glyph for b in card.instruments] == ["🎸", "🎤"]
    assert [b.label for b in card.genres] == ["Hip Hop", "Jazz"]
    assert card.has_badges


def test_unknown_names_are_shown_as_text():
    card = render_participant_card(make_participant(instruments=["Kazoo"], genres=[]), is_host=False)
    assert card.instruments[0].glyph == "Kazoo"
    assert card.genres == ()


def test_missing_avatar_and_name_fall_back():
    card = render_participant_card(make_participant(avatar_url="", full_name=""), is_host=False)
    assert card.avatar_url == PLACEHOLDER_AVATAR
    assert card.display_name == "User"


def test_no_badges():
    card = render_participant_card(make_participant(instruments=[], genres=[]), is_host=False)
    assert not card.has_badges


def test_click_calls_the_callers_handler():
    handler = Mock()
    card = render_participant_card(make_participant(), is_host=False, on_click=handler)
    card.click()
    handler.assert_called_once_with()


def test_click_without_handler_is_harmless():
    render_participant_card(make_participant(), is_host=False).click()


def test_to_dict_leaves_out_the_handler():
    out = render_participant_card(make_participant(), is_host=True, on_click=Mock()).to_dict()
    assert "on_click" not in out
    assert out["instruments"][0] == {"label": "Guitar", "glyph": "🎸"}


def test_stored_ids_show_glyphs():
    card = render_participant_card(make_participant(instruments=["dj"], genres=["rnb", "hiphop"]), is_host=False)
    assert [b.glyph for b in card.instruments] == ["🎧"]
    assert [b.glyph for b in card.genres] == ["🎼", "🎤"]
