from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from src.application.dtos.common_dto import ErrorResponse
from src.application.dtos.event_dto import (
    CreateEventRequest,
    EventResponse,
    ListEventsResponse,
    ParticipantCardDTO,
    ParticipantsResponse,
    ParticipationRequest,
    ParticipationResponse,
)
from src.application.navigation import EventNavigation, RecordingNavigator
from src.application.use_cases.manage_events import (
    CreateEventUseCase,
    EventNotFoundError,
    GetEventUseCase,
    ListUserEventsUseCase,
    UpdateParticipationUseCase,
)
from src.application.views.participant_card import ParticipantCard, render_participant_card
from src.domain.entities.event import EventEntity
from src.infrastructure.api.dependencies import (
    get_current_user,
    get_event_repo,
    get_profile_repo,
)
from src.infrastructure.database.repositories.event_repository import EventRepository
from src.infrastructure.database.repositories.profile_repository import ProfileRepository

router = APIRouter(
    tags=["Events"],
    responses={
        401: {"description": "Unauthorized - Invalid or missing authentication token"},
        404: {"description": "Not Found - Event does not exist", "model": ErrorResponse},
        422: {"description": "Validation Error - Invalid request format"},
    },
)


def _cards(event: EventEntity) -> tuple[list[ParticipantCard], list[ParticipantCard]]:
    going = [render_participant_card(p, event.is_host(p.id)) for p in event.participants_going]
    maybe = [render_participant_card(p, event.is_host(p.id)) for p in event.participants_maybe]
    return going, maybe


def _response(event: EventEntity) -> EventResponse:
    going, maybe = _cards(event)
    return EventResponse.from_entity(event, going, maybe)


def _load(event_id: str, events: EventRepository, profiles: ProfileRepository) -> EventEntity:
    try:
        return GetEventUseCase(events=events, profiles=profiles).execute(event_id)
    except EventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post(
    "/events",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Event",
    description="""
    Create an event hosted by the signed-in user.

    Times are stored as given and displayed in Pacific Time.
    """,
    responses={400: {"description": "Bad Request - Empty title or end before start"}},
)
def create_event(
    body: CreateEventRequest,
    user=Depends(get_current_user),
    events: EventRepository = Depends(get_event_repo),
):
    try:
        event = CreateEventUseCase(events=events).execute(
            user_id=user.id,
            title=body.title,
            start_time=body.start_time,
            end_time=body.end_time,
            description=body.description,
            location=body.location,
            image_url=body.image_url,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _response(event)


@router.get("/events/{event_id}", response_model=EventResponse, summary="Get Event")
def get_event(
    event_id: str,
    events: EventRepository = Depends(get_event_repo),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    """Event details with participant cards."""
    return _response(_load(event_id, events, profiles))


@router.get(
    "/events/{event_id}/participants",
    response_model=ParticipantsResponse,
    summary="Participant Cards",
    description="""
    Cards for everyone going or maybe going. The host is marked with a
    `(HOST)` suffix; each card shows up to two instrument and two genre
    glyphs.
    """,
)
def get_participants(
    event_id: str,
    events: EventRepository = Depends(get_event_repo),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    going, maybe = _cards(_load(event_id, events, profiles))
    return ParticipantsResponse(
        going=[ParticipantCardDTO.from_card(c) for c in going],
        maybe=[ParticipantCardDTO.from_card(c) for c in maybe],
    )


@router.post(
    "/events/{event_id}/participation",
    response_model=ParticipationResponse,
    summary="Set Participation",
    description="""
    Mark the signed-in user as `going`, `maybe`, or neither (`null`).
    """,
    responses={400: {"description": "Bad Request - User has no profile yet"}},
)
def set_participation(
    event_id: str,
    body: ParticipationRequest,
    user=Depends(get_current_user),
    events: EventRepository = Depends(get_event_repo),
    profiles: ProfileRepository = Depends(get_profile_repo),
):
    try:
        event = UpdateParticipationUseCase(events=events, profiles=profiles).execute(user.id, event_id, body.status)
    except EventNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ParticipationResponse(
        event_id=event.id,
        status=event.status_of(user.id),
        going_count=len(event.participants_going),
        maybe_count=len(event.participants_maybe),
    )


@router.get(
    "/events/{event_id}/open",
    summary="Open Event on the Main Page",
    description="""
    Redirect to `/?event=<id>` so the main page shows the event while the
    navigation chrome stays in place.
    """,
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=RedirectResponse,
)
async def open_event(event_id: str):
    navigator = RecordingNavigator()
    EventNavigation(navigator).navigate_to_event(event_id)
    return RedirectResponse(navigator.location, status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    "/users/{user_id}/events",
    response_model=ListEventsResponse,
    summary="User Events",
    description="Events the user hosts or is going to, soonest first.",
)
def list_user_events(user_id: str, events: EventRepository = Depends(get_event_repo)):
    return ListEventsResponse(events=[_response(e) for e in ListUserEventsUseCase(events=events).execute(user_id)])
