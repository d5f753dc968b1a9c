from __future__ import annotations

from src.domain.entities.music_icon import IconKind, MusicIcon

MUSIC_ICONS: tuple[MusicIcon, ...] = (
    # Instruments
    MusicIcon("guitar", "Guitar", "🎸", "instrument"),
    MusicIcon("piano", "Piano", "🎹", "instrument"),
    MusicIcon("drums", "Drums", "🥁", "instrument"),
    MusicIcon("bass", "Bass", "🎸", "instrument"),
    MusicIcon("violin", "Violin", "🎻", "instrument"),
    MusicIcon("vocals", "Vocals", "🎤", "instrument"),
    MusicIcon("saxophone", "Saxophone", "🎷", "instrument"),
    MusicIcon("trumpet", "Trumpet", "🎺", "instrument"),
    MusicIcon("dj", "DJ", "🎧", "instrument"),
    # Genres
    MusicIcon("rock", "Rock", "🤘", "genre"),
    MusicIcon("jazz", "Jazz", "🎷", "genre"),
    MusicIcon("pop", "Pop", "⭐", "genre"),
    MusicIcon("hiphop", "Hip Hop", "🎤", "genre"),
    MusicIcon("rnb", "R&B", "🎼", "genre"),
    MusicIcon("electronic", "Electronic", "🎹", "genre"),
    MusicIcon("classical", "Classical", "🎼", "genre"),
    MusicIcon("country", "Country", "🤠", "genre"),
    MusicIcon("reggae", "Reggae", "🌴", "genre"),
)


def normalize_name(name: str) -> str:
    """Lowercase and drop every whitespace character."""
    return "".join(name.lower().split())


_BY_NORMALIZED_NAME: dict[tuple[IconKind, str], MusicIcon] = {
    (icon.kind, normalize_name(icon.name)): icon for icon in MUSIC_ICONS
}


_BY_ID: dict[tuple[IconKind, str], MusicIcon] = {(icon.kind, icon.id): icon for icon in MUSIC_ICONS}


def get_icon_by_name(name: str, kind: IconKind) -> MusicIcon | None:
    if not isinstance(name, str):
        return None
    return _BY_NORMALIZED_NAME.get((kind, normalize_name(name)))


def get_emoji(name: str, kind: IconKind) -> str:
    """Glyph for a free-text instrument or genre name.

    Unknown names come back unchanged so the UI still shows something.
    """
    icon = get_icon_by_name(name, kind)
    return icon.emoji if icon else name


def get_stored_emoji(value: str, kind: IconKind) -> str:
    """Glyph for a value read back from a profile.

    Profiles store canonical ids (``rnb``), older rows free-text names
    (``R&B``); ids are tried first.
    """
    icon = _BY_ID.get((kind, value)) if isinstance(value, str) else None
    return icon.emoji if icon else get_emoji(value, kind)


def convert_names_to_ids(names: list[str], kind: IconKind) -> list[str]:
    """Map free-text names to canonical ids for storage.

    Names without a table entry fall back to their normalized slug; empty
    results are dropped.
    """
    ids = []
    for name in names:
        if not name:
            continue
        icon = get_icon_by_name(name, kind)
        slug = icon.id if icon else normalize_name(name)
        if slug:
            ids.append(slug)
    return ids


def icons_of_kind(kind: IconKind) -> list[MusicIcon]:
    return [icon for icon in MUSIC_ICONS if icon.kind == kind]
