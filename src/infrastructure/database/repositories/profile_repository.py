from __future__ import annotations

import logging
import os
from datetime import UTC, datetime

from supabase import Client

from src.domain.entities.profile import ProfileEntity
from src.infrastructure.database.postgres_client import get_postgres_client
from src.infrastructure.database.supabase_client import is_no_rows_error, supabase_disabled

logger = logging.getLogger(__name__)

# module-level in-memory store for disabled mode
_MEM_PROFILES: dict[str, ProfileEntity] = {}


def _ts(value) -> datetime | None:
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value


class ProfileRepository:
    """Reads and writes the ``profiles`` table."""

    def __init__(self, client: Client | None) -> None:
        self.client = client
        self.disabled = supabase_disabled()
        self.use_local_db = os.getenv("USE_LOCAL_DB", "0") == "1"
        self.pg_client = get_postgres_client() if self.use_local_db else None

    @property
    def in_memory(self) -> bool:
        return self.disabled or self.client is None

    def _row_to_entity(self, row: dict) -> ProfileEntity:
        return ProfileEntity(
            id=row["id"],
            full_name=row.get("full_name"),
            avatar_url=row.get("avatar_url"),
            instruments=list(row.get("instruments") or []),
            genres=list(row.get("genres") or []),
            bio=row.get("bio"),
            created_at=_ts(row.get("created_at")),
            updated_at=_ts(row.get("updated_at")),
        )

    def get(self, user_id: str) -> ProfileEntity | None:
        """Profile for ``user_id``; None when the table has no such row."""
        if self.use_local_db and self.pg_client:
            try:
                row = self.pg_client.fetch_one("SELECT * FROM profiles WHERE id = %s", (user_id,))
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL get profile failed: {exc}") from exc
            return self._row_to_entity(row) if row else None

        if self.in_memory:
            return _MEM_PROFILES.get(user_id)

        try:
            res = self.client.table("profiles").select("*").eq("id", user_id).single().execute()
        except Exception as exc:
            if is_no_rows_error(exc):
                return None
            raise RuntimeError(f"DB get profile failed: {exc}") from exc
        return self._row_to_entity(res.data) if res.data else None

    def get_many(self, user_ids: list[str]) -> list[ProfileEntity]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return []
        if self.use_local_db and self.pg_client:
            try:
                rows = self.pg_client.fetch_all("SELECT * FROM profiles WHERE id = ANY(%s)", (ids,))
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL list profiles failed: {exc}") from exc
            return [self._row_to_entity(row) for row in rows]

        if self.in_memory:
            return [_MEM_PROFILES[i] for i in ids if i in _MEM_PROFILES]

        try:  # pragma: no cover - network
            res = self.client.table("profiles").select("*").in_("id", ids).execute()
        except Exception as exc:  # pragma: no cover - network
            raise RuntimeError(f"DB list profiles failed: {exc}") from exc
        return [self._row_to_entity(row) for row in res.data or []]

    def ensure(self, user_id: str, full_name: str | None = None) -> ProfileEntity:
        """Make sure a (possibly empty) profile row exists for the user."""
        existing = self.get(user_id)
        if existing is not None:
            return existing
        return self.upsert(ProfileEntity(id=user_id, full_name=full_name))

    def upsert(self, profile: ProfileEntity) -> ProfileEntity:
        now = datetime.now(UTC)
        data = {
            "id": profile.id,
            "full_name": profile.full_name,
            "avatar_url": profile.avatar_url,
            "instruments": list(profile.instruments),
            "genres": list(profile.genres),
            "bio": profile.bio,
            "updated_at": now.isoformat(),
        }

        if self.use_local_db and self.pg_client:
            query = """
                INSERT INTO profiles (id, full_name, avatar_url, instruments, genres, bio, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (id) DO UPDATE SET
                    full_name = EXCLUDED.full_name,
                    avatar_url = EXCLUDED.avatar_url,
                    instruments = EXCLUDED.instruments,
                    genres = EXCLUDED.genres,
                    bio = EXCLUDED.bio,
                    updated_at = EXCLUDED.updated_at
                RETURNING *
            """
            try:
                row = self.pg_client.execute_returning(
                    query,
                    (
                        profile.id, profile.full_name, profile.avatar_url,
                        data["instruments"], data["genres"], profile.bio, now, now,
                    ),
                )
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL upsert profile failed: {exc}") from exc
            return self._row_to_entity(row)

        if self.in_memory:
            current = _MEM_PROFILES.get(profile.id)
            entity = ProfileEntity(
                id=profile.id,
                full_name=profile.full_name,
                avatar_url=profile.avatar_url,
                instruments=data["instruments"],
                genres=data["genres"],
                bio=profile.bio,
                created_at=current.created_at if current else now,
                updated_at=now,
            )
            _MEM_PROFILES[profile.id] = entity
            return entity

        try:  # pragma: no cover - network
            res = self.client.table("profiles").upsert(data, on_conflict="id").execute()
        except Exception as exc:  # pragma: no cover - network
            raise RuntimeError(f"DB upsert profile failed: {exc}") from exc
        rows = res.data or []
        logger.info("Saved profile %s", profile.id)
        return self._row_to_entity(rows[0]) if rows else self.get(profile.id) or profile
