from __future__ import annotations

import os

from supabase import Client

from src.infrastructure.database.postgres_client import get_postgres_client
from src.infrastructure.database.supabase_client import is_no_rows_error, supabase_disabled

# ids of accounts that predate their profile row
_MEM_USERS: dict[str, dict] = {}


class UserRepository:
    """Point lookups on the legacy ``users`` table."""

    def __init__(self, client: Client | None) -> None:
        self.client = client
        self.disabled = supabase_disabled()
        self.use_local_db = os.getenv("USE_LOCAL_DB", "0") == "1"
        self.pg_client = get_postgres_client() if self.use_local_db else None

    def get(self, user_id: str) -> dict | None:
        if self.use_local_db and self.pg_client:
            try:
                return self.pg_client.fetch_one("SELECT id FROM users WHERE id = %s", (user_id,))
            except Exception as exc:
                raise RuntimeError(f"PostgreSQL get user failed: {exc}") from exc

        if self.disabled or self.client is None:
            return _MEM_USERS.get(user_id)

        try:
            res = self.client.table("users").select("id").eq("id", user_id).single().execute()
        except Exception as exc:
            if is_no_rows_error(exc):
                return None
            raise RuntimeError(f"DB get user failed: {exc}") from exc
        return res.data or None

    def add(self, user_id: str) -> dict:
        """Register a bare account; only used in local and in-memory modes."""
        if self.use_local_db and self.pg_client:
            return self.pg_client.execute_returning(
                "INSERT INTO users (id) VALUES (%s) ON CONFLICT (id) DO UPDATE SET id = EXCLUDED.id RETURNING id",
                (user_id,),
            )
        if self.disabled or self.client is None:
            _MEM_USERS[user_id] = {"id": user_id}
            return _MEM_USERS[user_id]
        raise RuntimeError("Accounts are created by Supabase Auth")
