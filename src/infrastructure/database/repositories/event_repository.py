from __future__ import annotations

import os
import uuid
from dataclasses import replace
from datetime import UTC, datetime

from supabase import Client

from src.domain.entities.event import EventEntity
from src.domain.entities.participant import Participant, parse_participants
from src.infrastructure.database.postgres_client import get_postgres_client
from src.infrastructure.database.supabase_client import is_no_rows_error, supabase_disabled

# module-level in-memory store for disabled mode
_MEM_EVENTS: dict[str, EventEntity] = {}


def _ts(value) -> datetime | None:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


class EventRepository:
    """The ``events`` table.

    Participant lists are stored as arrays of JSON strings, one standardized
    participant per entry.
    """

    def __init__(self, client: Client | None) -> None:
        self.client = client
        self.disabled = supabase_disabled()
        self.use_local_db = os.getenv("USE_LOCAL_DB", "0") == "1"
        self.pg_client = get_postgres_client() if self.use_local_db else None

    @property
    def in_memory(self) -> bool:
        return self.disabled or self.client is None

    def _row_to_entity(self, row: dict) -> EventEntity:
        return EventEntity(
            id=str(row["id"]),
            title=row.get("title") or "",
            description=row.get("description"),
            location=row.get("location"),
            start_time=_ts(row["start_time"]),
            end_time=_ts(row["end_time"]),
            image_url=row.get("image_url") or row.get("image"),
            creator_id=row.get("creator_id") or "",
            participants_going=parse_participants(row.get("participants_going")),
            participants_maybe=parse_participants(row.get("participants_maybe")),
            created_at=_ts(row.get("created_at")),
            updated_at=_ts(row.get("updated_at")),
        )

    def create(
        self,
        creator_id: str,
        title: str,
        start_time: datetime,
        end_time: datetime,
        description: str | None = None,
        location: str | None = None,
        image_url: str | None = None,
    ) -> EventEntity:
        now = datetime.now(UTC)
        event_id = str(uuid.uuid4())

        if self.use_local_db and self.pg_client:
            query = """
                INSERT INTO events (
                    id, title, description, location, start_time, end_time, image_url,
                    creator_id, participants_going, participants_maybe, created_at, updated_at
                ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING *
            """
            try:
                row = self.pg_client.execute_returning(
                    query,
                    (
                        event_id, title, description, location, start_time, end_time, image_url,
                        creator_id, [], [], now, now,
                    ),
                )
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL insert event failed: {exc}") from exc
            return self._row_to_entity(row)

        if self.in_memory:
            entity = EventEntity(
                id=event_id,
                title=title,
                description=description,
                location=location,
                start_time=_ts(start_time),
                end_time=_ts(end_time),
                image_url=image_url,
                creator_id=creator_id,
                created_at=now,
                updated_at=now,
            )
            _MEM_EVENTS[event_id] = entity
            return entity

        data = {
            "id": event_id,
            "title": title,
            "description": description,
            "location": location,
            "start_time": start_time.isoformat(),
            "end_time": end_time.isoformat(),
            "image_url": image_url,
            "creator_id": creator_id,
            "participants_going": [],
            "participants_maybe": [],
            "created_at": now.isoformat(),
            "updated_at": now.isoformat(),
        }
        try:  # pragma: no cover - network
            res = self.client.table("events").insert(data).execute()
        except Exception as exc:  # pragma: no cover - network
            raise RuntimeError(f"DB insert event failed: {exc}") from exc
        return self._row_to_entity(res.data[0] if res.data else data)

    def get(self, event_id: str) -> EventEntity | None:
        if self.use_local_db and self.pg_client:
            try:
                row = self.pg_client.fetch_one("SELECT * FROM events WHERE id::text = %s", (event_id,))
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL get event failed: {exc}") from exc
            return self._row_to_entity(row) if row else None

        if self.in_memory:
            return _MEM_EVENTS.get(event_id)

        try:
            res = self.client.table("events").select("*").eq("id", event_id).single().execute()
        except Exception as exc:
            if is_no_rows_error(exc):
                return None
            raise RuntimeError(f"DB get event failed: {exc}") from exc
        return self._row_to_entity(res.data) if res.data else None

    def list_all(self) -> list[EventEntity]:
        if self.use_local_db and self.pg_client:
            try:
                rows = self.pg_client.fetch_all("SELECT * FROM events ORDER BY start_time ASC")
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL list events failed: {exc}") from exc
            return [self._row_to_entity(row) for row in rows]

        if self.in_memory:
            return sorted(_MEM_EVENTS.values(), key=lambda e: e.start_time)

        try:  # pragma: no cover - network
            res = self.client.table("events").select("*").order("start_time").execute()
        except Exception as exc:  # pragma: no cover - network
            raise RuntimeError(f"DB list events failed: {exc}") from exc
        return [self._row_to_entity(row) for row in res.data or []]

    def update_participants(
        self,
        event_id: str,
        going: list[Participant],
        maybe: list[Participant],
    ) -> EventEntity:
        now = datetime.now(UTC)
        going_json = [p.to_json() for p in going]
        maybe_json = [p.to_json() for p in maybe]

        if self.use_local_db and self.pg_client:
            query = """
                UPDATE events
                SET participants_going = %s, participants_maybe = %s, updated_at = %s
                WHERE id::text = %s
                RETURNING *
            """
            try:
                row = self.pg_client.execute_returning(query, (going_json, maybe_json, now, event_id))
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL update event failed: {exc}") from exc
            return self._row_to_entity(row)

        if self.in_memory:
            current = _MEM_EVENTS.get(event_id)
            if current is None:
                raise RuntimeError(f"Event {event_id} does not exist")
            updated = replace(
                current,
                participants_going=list(going),
                participants_maybe=list(maybe),
                updated_at=now,
            )
            _MEM_EVENTS[event_id] = updated
            return updated

        try:  # pragma: no cover - network
            res = (
                self.client.table("events")
                .update(
                    {
                        "participants_going": going_json,
                        "participants_maybe": maybe_json,
                        "updated_at": now.isoformat(),
                    }
                )
                .eq("id", event_id)
                .execute()
            )
        except Exception as exc:  # pragma: no cover - network
            raise RuntimeError(f"DB update event failed: {exc}") from exc
        if not res.data:
            raise RuntimeError(f"Event {event_id} does not exist")
        return self._row_to_entity(res.data[0])
