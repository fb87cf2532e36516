"""
Location persistence (raw SQL).

`locations.search_query` is the natural key. `ensure_schema` puts a unique
index on it; the insert uses a bare ON CONFLICT DO NOTHING, so it also runs
on tables that predate the index.
"""

from __future__ import annotations

import re
from decimal import Decimal

from city_explorer.core import db

from .schemas import LocationRecord

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


async def find_by_query(executor: db.Executor, query: str) -> list[LocationRecord]:
    """
    Exact-match lookup by search_query, oldest row first.
    """
    rows = await db.fetch_all(
        executor,
        """
        SELECT id, search_query, formatted_query, latitude, longitude
        FROM locations
        WHERE search_query = $1
        ORDER BY id ASC
        """,
        query,
    )
    return [LocationRecord.from_row(row) for row in rows]


async def insert_if_absent(executor: db.Executor, record: LocationRecord) -> LocationRecord:
    """
    Insert `record` unless its search_query already exists.

    Returns a copy with the generated id, or the record unchanged (no id)
    when the insert hit an existing row.
    """
    row = await db.fetch_one(
        executor,
        """
        INSERT INTO locations (search_query, formatted_query, latitude, longitude)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT DO NOTHING
        RETURNING id
        """,
        record.search_query,
        record.formatted_query,
        Decimal(str(record.latitude)),
        Decimal(str(record.longitude)),
    )
    if row is None:
        return record
    return record.model_copy(update={"id": int(row["id"])})


async def delete_by_location_id(executor: db.Executor, table: str, location_id: int) -> int:
    """
    Delete every row of child table `table` that belongs to `location_id`.
    Returns the number of rows deleted.
    """
    if not _IDENTIFIER.match(table or ""):
        raise ValueError(f"Invalid table name: {table!r}")

    status = await db.execute(
        executor,
        f'DELETE FROM "{table}" WHERE location_id = $1',
        location_id,
    )
    # asyncpg returns the command tag, e.g. "DELETE 3".
    try:
        return int(str(status).rsplit(" ", 1)[-1])
    except ValueError:
        return 0
