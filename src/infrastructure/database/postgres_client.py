"""PostgreSQL client for running against a local database instead of Supabase.

Enabled with USE_LOCAL_DB=1. Rows come back as plain dicts so repositories
can share their row mappers between the local and Supabase paths.
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Generator

from psycopg2 import pool
from psycopg2.extras import RealDictCursor


class PostgresClient:
    def __init__(self) -> None:
        self.enabled = os.getenv("USE_LOCAL_DB", "0") == "1"
        self._pool: pool.SimpleConnectionPool | None = None
        if self.enabled:
            try:
                self._pool = pool.SimpleConnectionPool(
                    minconn=1,
                    maxconn=int(os.getenv("POSTGRES_POOL_SIZE", "10")),
                    host=os.getenv("POSTGRES_HOST", "localhost"),
                    port=int(os.getenv("POSTGRES_PORT", "5432")),
                    database=os.getenv("POSTGRES_DB", "jamboree"),
                    user=os.getenv("POSTGRES_USER", "jamboree"),
                    password=os.getenv("POSTGRES_PASSWORD", "jamboree_dev_password"),
                )
            except Exception as exc:  # pragma: no cover
                raise RuntimeError(f"Failed to initialize PostgreSQL connection pool: {exc}") from exc

    @contextmanager
    def cursor(self, dict_cursor: bool = True) -> Generator[Any, None, None]:
        """Cursor on a pooled connection; commits on success, rolls back on error."""
        if self._pool is None:
            raise RuntimeError("Local PostgreSQL database is not enabled")
        conn = self._pool.getconn()
        try:
            cur = conn.cursor(cursor_factory=RealDictCursor if dict_cursor else None)
            try:
                yield cur
            finally:
                cur.close()
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._pool.putconn(conn)

    def fetch_one(self, query: str, params: tuple = ()) -> dict[str, Any] | None:
        with self.cursor() as cur:
            cur.execute(query, params)
            row = cur.fetchone()
            return dict(row) if row else None

    def fetch_all(self, query: str, params: tuple = ()) -> list[dict[str, Any]]:
        with self.cursor() as cur:
            cur.execute(query, params)
            return [dict(row) for row in cur.fetchall()]

    def execute_returning(self, query: str, params: tuple = ()) -> dict[str, Any]:
        """Run an INSERT/UPDATE ... RETURNING and hand back the row."""
        row = self.fetch_one(query, params)
        if row is None:
            raise RuntimeError("Query did not return a row")
        return row


_POSTGRES_CLIENT: PostgresClient | None = None


def get_postgres_client() -> PostgresClient | None:
    global _POSTGRES_CLIENT
    if os.getenv("USE_LOCAL_DB", "0") != "1":
        return None
    if _POSTGRES_CLIENT is None:
        _POSTGRES_CLIENT = PostgresClient()
    return _POSTGRES_CLIENT
