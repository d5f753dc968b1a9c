from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from src.domain.entities.participant import DEFAULT_NAME, PLACEHOLDER_AVATAR, Participant
from src.domain.services.music_icons import get_stored_emoji

HOST_SUFFIX = " (HOST)"
MAX_INSTRUMENT_BADGES = 2
MAX_GENRE_BADGES = 2


@dataclass(frozen=True)
class IconBadge:
    label: str  # the free-text name, shown as a tooltip
    glyph: str


@dataclass(frozen=True)
class ParticipantCard:
    """Compact summary of one event participant.

    Stateless apart from the click handler handed in by the caller.
    """

    participant_id: str
    avatar_url: str
    display_name: str
    is_host: bool
    instruments: tuple[IconBadge, ...] = ()
    genres: tuple[IconBadge, ...] = ()
    on_click: Callable[[], None] | None = field(default=None, compare=False, repr=False)

    @property
    def has_badges(self) -> bool:
        return bool(self.instruments or self.genres)

    def click(self) -> None:
        if self.on_click is not None:
            self.on_click()

    def to_dict(self) -> dict:
        return {
            "participant_id": self.participant_id,
            "avatar_url": self.avatar_url,
            "display_name": self.display_name,
            "is_host": self.is_host,
            "instruments": [{"label": b.label, "glyph": b.glyph} for b in self.instruments],
            "genres": [{"label": b.label, "glyph": b.glyph} for b in self.genres],
        }


def render_participant_card(
    participant: Participant,
    is_host: bool,
    on_click: Callable[[], None] | None = None,
    *,
    max_instruments: int = MAX_INSTRUMENT_BADGES,
    max_genres: int = MAX_GENRE_BADGES,
) -> ParticipantCard:
    name = participant.full_name or DEFAULT_NAME
    if is_host:
        name += HOST_SUFFIX
    instruments = tuple(
        IconBadge(label=i, glyph=get_stored_emoji(i, "instrument"))
        for i in (participant.instruments or [])[:max_instruments]
    )
    genres = tuple(
        IconBadge(label=g, glyph=get_stored_emoji(g, "genre"))
        for g in (participant.genres or [])[:max_genres]
    )
    return ParticipantCard(
        participant_id=participant.id,
        avatar_url=participant.avatar_url or PLACEHOLDER_AVATAR,
        display_name=name,
        is_host=is_host,
        instruments=instruments,
        genres=genres,
        on_click=on_click,
    )
