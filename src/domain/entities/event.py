from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from src.domain.entities.participant import Participant


@dataclass(frozen=True)
class EventEntity:
    id: str
    title: str
    start_time: datetime
    end_time: datetime
    creator_id: str
    description: str | None = None
    location: str | None = None
    image_url: str | None = None
    participants_going: list[Participant] = field(default_factory=list)
    participants_maybe: list[Participant] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_host(self, user_id: str) -> bool:
        return self.creator_id == user_id

    def status_of(self, user_id: str) -> str | None:
        if any(p.id == user_id for p in self.participants_going):
            return "going"
        if any(p.id == user_id for p in self.participants_maybe):
            return "maybe"
        return None
