import pytest

from src.domain.services.music_icons import (
    MUSIC_ICONS,
    convert_names_to_ids,
    get_emoji,
    get_icon_by_name,
    get_stored_emoji,
    normalize_name,
)

NAMES = ["Hip Hop", "hip hop", "  R&B ", "Electronic", "Bass\tGuitar", "DJ", "Sea Shanty", "", "x"]


@pytest.mark.parametrize("name", NAMES)
def test_normalize_ignores_case_and_whitespace(name):
    assert normalize_name(name) == normalize_name(name.upper())
    assert normalize_name(name) == normalize_name(name.replace(" ", ""))


def test_normalize_strips_all_whitespace():
    assert normalize_name(" Hip \n Hop\t") == "hiphop"


def test_lookup_is_case_and_space_insensitive():
    assert get_emoji("hip hop", "genre") == "🎤"
    assert get_emoji("HIPHOP", "genre") == "🎤"
    assert get_emoji("  guitar ", "instrument") == "🎸"
    assert get_icon_by_name("r&b", "genre").id == "rnb"


def test_lookup_respects_kind():
    # "Rock" is a genre, not an instrument
    assert get_emoji("Rock", "instrument") == "Rock"
    assert get_icon_by_name("Rock", "instrument") is None


@pytest.mark.parametrize("name", ["Kazoo", "", "   ", "🎸", "Guitar!"])
def test_unknown_names_come_back_unchanged(name):
    assert get_emoji(name, "instrument") == name


def test_every_icon_resolves_by_its_own_name():
    for icon in MUSIC_ICONS:
        assert get_emoji(icon.name, icon.kind) == icon.emoji


def test_convert_names_to_ids():
    assert convert_names_to_ids(["Guitar", "Bass Clarinet", "", "  "], "instrument") == [
        "guitar",
        "bassclarinet",
    ]
    assert convert_names_to_ids(["R&B", "hip hop", "Sea Shanty"], "genre") == ["rnb", "hiphop", "seashanty"]


def test_stored_ids_resolve_to_glyphs():
    assert get_stored_emoji("rnb", "genre") == "🎼"
    assert get_stored_emoji("hiphop", "genre") == "🎤"
    assert get_stored_emoji("R&B", "genre") == "🎼"
    assert get_stored_emoji("leadvocals", "instrument") == "leadvocals"
    # ids only match within their own kind
    assert get_stored_emoji("rnb", "instrument") == "rnb"


def test_get_emoji_stays_name_based():
    assert get_emoji("rnb", "genre") == "rnb"
