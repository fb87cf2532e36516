"""
Location record schema.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class LocationRecord(BaseModel):
    search_query: str
    formatted_query: str
    latitude: float
    longitude: float
    # Only set once the row is persisted.
    id: int | None = None
    # Epoch milliseconds at construction; stored rows don't carry it.
    created_at: int | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "LocationRecord":
        # NUMERIC columns come back from asyncpg as Decimal.
        return cls(
            id=int(row["id"]),
            search_query=str(row["search_query"]),
            formatted_query=str(row["formatted_query"]),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
        )
