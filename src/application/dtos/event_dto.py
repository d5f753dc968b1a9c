from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from src.application.views.participant_card import ParticipantCard
from src.domain.entities.event import EventEntity
from src.domain.services.date_format import (
    format_event_card_date,
    format_time_ago,
    format_time_range,
    is_past_date,
    is_today,
)


class CreateEventRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, examples=["Old Peeps Jam"])
    start_time: datetime = Field(..., description="ISO timestamp; naive values are UTC")
    end_time: datetime = Field(..., description="ISO timestamp; naive values are UTC")
    description: str | None = Field(None, max_length=5000)
    location: str | None = Field(None, max_length=300, examples=["The Basement, Oakland"])
    image_url: str | None = None


class IconDTO(BaseModel):
    label: str
    glyph: str


class ParticipantCardDTO(BaseModel):
    participant_id: str
    avatar_url: str
    display_name: str = Field(..., examples=["Jamie Rivera (HOST)"])
    is_host: bool
    instruments: list[IconDTO] = Field(default_factory=list)
    genres: list[IconDTO] = Field(default_factory=list)

    @classmethod
    def from_card(cls, card: ParticipantCard) -> ParticipantCardDTO:
        return cls(**card.to_dict())


class EventResponse(BaseModel):
    """An event with its Pacific Time display fields."""
    id: str
    title: str
    description: str | None = None
    location: str | None = None
    start_time: datetime
    end_time: datetime
    image_url: str | None = None
    creator_id: str
    date_label: str = Field(..., examples=["Sun, May 4"])
    time_range: str = Field(..., examples=["7:00 PM - 10:00 PM"])
    is_today: bool
    is_past: bool = Field(..., description="The event has already ended")
    updated: str | None = Field(None, description="Relative time of the last change", examples=["5m ago"])
    going: list[ParticipantCardDTO] = Field(default_factory=list)
    maybe: list[ParticipantCardDTO] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, event: EventEntity, going: list[ParticipantCard], maybe: list[ParticipantCard]) -> EventResponse:
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            location=event.location,
            start_time=event.start_time,
            end_time=event.end_time,
            image_url=event.image_url,
            creator_id=event.creator_id,
            date_label=format_event_card_date(event.start_time),
            time_range=format_time_range(event.start_time, event.end_time),
            is_today=is_today(event.start_time),
            is_past=is_past_date(event.end_time),
            updated=format_time_ago(event.updated_at) if event.updated_at else None,
            going=[ParticipantCardDTO.from_card(c) for c in going],
            maybe=[ParticipantCardDTO.from_card(c) for c in maybe],
        )


class ListEventsResponse(BaseModel):
    events: list[EventResponse]


class ParticipantsResponse(BaseModel):
    going: list[ParticipantCardDTO]
    maybe: list[ParticipantCardDTO]


class ParticipationRequest(BaseModel):
    status: Literal["going", "maybe"] | None = Field(..., description="null leaves both lists")


class ParticipationResponse(BaseModel):
    event_id: str
    status: Literal["going", "maybe"] | None
    going_count: int = Field(..., ge=0)
    maybe_count: int = Field(..., ge=0)
