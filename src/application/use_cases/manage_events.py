from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal

from src.domain.entities.event import EventEntity
from src.domain.entities.participant import DEFAULT_NAME, PLACEHOLDER_AVATAR, Participant
from src.domain.services.date_format import to_utc
from src.infrastructure.database.repositories.event_repository import EventRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

ParticipationStatus = Literal["going", "maybe"] | None


class EventNotFoundError(ValueError):
    pass


@dataclass
class CreateEventUseCase:
    events: EventRepository

    def execute(
        self,
        user_id: str,
        title: str,
        start_time: datetime,
        end_time: datetime,
        description: str | None = None,
        location: str | None = None,
        image_url: str | None = None,
    ) -> EventEntity:
        if not title.strip():
            raise ValueError("Event title cannot be empty")
        start_time, end_time = to_utc(start_time), to_utc(end_time)
        if end_time <= start_time:
            raise ValueError("Event must end after it starts")
        return self.events.create(
            creator_id=user_id,
            title=title.strip(),
            start_time=start_time,
            end_time=end_time,
            description=description,
            location=location,
            image_url=image_url,
        )


@dataclass
class GetEventUseCase:
    events: EventRepository
    profiles: ProfileRepository

    def _fill_in(self, participants: list[Participant]) -> list[Participant]:
        """Replace placeholder names and avatars with current profile data."""
        incomplete = [
            p.id for p in participants if p.full_name == DEFAULT_NAME or p.avatar_url == PLACEHOLDER_AVATAR
        ]
        if not incomplete:
            return participants
        try:
            found = {prof.id: prof for prof in self.profiles.get_many(incomplete)}
        except RuntimeError as exc:
            # keep what the event row already had
            logger.warning("Error fetching participants: %s", exc)
            return participants
        out = []
        for p in participants:
            prof = found.get(p.id)
            if prof is None:
                out.append(p)
                continue
            out.append(
                replace(
                    p,
                    full_name=prof.full_name or p.full_name,
                    avatar_url=prof.avatar_url or p.avatar_url,
                    instruments=p.instruments or list(prof.instruments),
                    genres=p.genres or list(prof.genres),
                )
            )
        return out

    def execute(self, event_id: str) -> EventEntity:
        event = self.events.get(event_id)
        if event is None:
            raise EventNotFoundError("Event not found")
        return replace(
            event,
            participants_going=self._fill_in(event.participants_going),
            participants_maybe=self._fill_in(event.participants_maybe),
        )


@dataclass
class UpdateParticipationUseCase:
    events: EventRepository
    profiles: ProfileRepository

    def execute(self, user_id: str, event_id: str, status: ParticipationStatus) -> EventEntity:
        """
        Put the user on the "going" or "maybe" list, or on neither.

        The user is first removed from both lists so they appear at most once.
        """
        if not user_id:
            raise ValueError("User must be logged in to update participation")
        if status not in ("going", "maybe", None):
            raise ValueError(f"Unsupported participation status: {status}")
        event = self.events.get(event_id)
        if event is None:
            raise EventNotFoundError("Event not found")
        profile = self.profiles.get(user_id)
        if profile is None:
            raise ValueError("Complete your profile before joining events")

        me = Participant.from_profile(profile)
        going = [p for p in event.participants_going if p.id != user_id]
        maybe = [p for p in event.participants_maybe if p.id != user_id]
        if status == "going":
            going.append(me)
        elif status == "maybe":
            maybe.append(me)
        return self.events.update_participants(event_id, going, maybe)


@dataclass
class ListUserEventsUseCase:
    events: EventRepository

    def execute(self, user_id: str) -> list[EventEntity]:
        """Events the user hosts or is going to, soonest first."""
        return [
            e
            for e in self.events.list_all()
            if e.creator_id == user_id or any(p.id == user_id for p in e.participants_going)
        ]
