"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created by the app lifespan (see `city_explorer/main.py`), kept on
`app.state.pool` and passed explicitly to repositories. Helpers here take the
pool (or a single connection) as their first argument.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

# Anything that can run a query: a Pool or a Connection.
Executor = Any


# Storage failures are explicit and separable from provider failures.
class StoreError(RuntimeError):
    pass


_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

LOCATIONS_DDL = """
CREATE TABLE IF NOT EXISTS locations (
  id              SERIAL PRIMARY KEY,
  search_query    TEXT NOT NULL,
  formatted_query TEXT NOT NULL,
  latitude        NUMERIC NOT NULL,
  longitude       NUMERIC NOT NULL
)
"""

# Added separately so tables created before the constraint existed get it too.
LOCATIONS_QUERY_INDEX_DDL = """
CREATE UNIQUE INDEX IF NOT EXISTS locations_search_query_key ON locations (search_query)
"""


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def create_pool(dsn: str | None = None) -> asyncpg.Pool:
    try:
        return await asyncpg.create_pool(
            dsn=dsn or database_url(),
            min_size=1,
            max_size=5,
            command_timeout=30,
        )
    except _STORE_ERRORS as exc:
        raise StoreError(f"Could not connect to the database: {exc}") from exc


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()


def _record_to_dict(record: Any) -> dict[str, Any]:
    return dict(record)


async def fetch_one(executor: Executor, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        row = await executor.fetchrow(sql, *args)
    except _STORE_ERRORS as exc:
        raise StoreError(f"Query failed: {exc}") from exc
    return _record_to_dict(row) if row is not None else None


async def fetch_all(executor: Executor, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        rows = await executor.fetch(sql, *args)
    except _STORE_ERRORS as exc:
        raise StoreError(f"Query failed: {exc}") from exc
    return [_record_to_dict(r) for r in rows]


async def execute(executor: Executor, sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the command status,
    e.g. "DELETE 3".
    """
    try:
        return await executor.execute(sql, *args)
    except _STORE_ERRORS as exc:
        raise StoreError(f"Statement failed: {exc}") from exc


async def ensure_schema(executor: Executor) -> None:
    await execute(executor, LOCATIONS_DDL)
    await execute(executor, LOCATIONS_QUERY_INDEX_DDL)
