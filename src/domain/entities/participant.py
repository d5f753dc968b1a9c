from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from src.domain.entities.profile import ProfileEntity

logger = logging.getLogger(__name__)

PLACEHOLDER_AVATAR = "/placeholder.svg"
DEFAULT_NAME = "User"


@dataclass(frozen=True)
class Participant:
    """Card-sized projection of a profile attached to an event."""

    id: str
    full_name: str = DEFAULT_NAME
    avatar_url: str = PLACEHOLDER_AVATAR
    instruments: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)

    @classmethod
    def from_profile(cls, profile: ProfileEntity) -> Participant:
        return create_standard_participant(
            {
                "id": profile.id,
                "full_name": profile.full_name,
                "avatar_url": profile.avatar_url,
                "instruments": profile.instruments,
                "genres": profile.genres,
            }
        )

    def to_json(self) -> str:
        return json.dumps(asdict(self))


def create_standard_participant(data: dict[str, Any]) -> Participant:
    instruments = data.get("instruments")
    genres = data.get("genres")
    return Participant(
        id=data.get("id") or "unknown",
        full_name=data.get("full_name") or DEFAULT_NAME,
        avatar_url=data.get("avatar_url") or PLACEHOLDER_AVATAR,
        instruments=list(instruments) if isinstance(instruments, list) else [],
        genres=list(genres) if isinstance(genres, list) else [],
    )


def parse_participant(data: Any) -> Participant | None:
    """Normalize a stored participant entry.

    Entries written by older clients are JSON strings, plain dicts or bare
    user ids. Anything without an id is dropped.
    """
    if isinstance(data, Participant):
        return data
    parsed = data
    if isinstance(data, str):
        try:
            parsed = json.loads(data)
        except ValueError:
            # a bare user id
            return create_standard_participant({"id": data})
    if isinstance(parsed, dict) and isinstance(parsed.get("id"), str):
        return create_standard_participant(parsed)
    if isinstance(data, str) and data:
        return create_standard_participant({"id": data})
    logger.warning("Dropping unreadable participant entry: %r", data)
    return None


def parse_participants(entries: list[Any] | None) -> list[Participant]:
    out = []
    for entry in entries or []:
        p = parse_participant(entry)
        if p is not None:
            out.append(p)
    return out
