"""Shared test fixtures: an in-memory stand-in for the asyncpg pool and geocoder fakes."""

import asyncio
from decimal import Decimal

import pytest

from city_explorer.core.providers import ProviderError
from city_explorer.locations.schemas import LocationRecord


class FakePool:
    """Understands the handful of statements the locations repository issues."""

    def __init__(self) -> None:
        self.locations: list[dict] = []
        self.child_rows: dict[str, list[dict]] = {}
        self.statements: list[str] = []
        # Read number (1-based) -> seconds to stall before answering.
        self.read_delays: dict[int, float] = {}
        self._reads = 0
        self._next_id = 1

    def add_location(self, search_query: str, formatted_query: str, latitude: float, longitude: float) -> dict:
        row = {
            "id": self._next_id,
            "search_query": search_query,
            "formatted_query": formatted_query,
            "latitude": Decimal(str(latitude)),
            "longitude": Decimal(str(longitude)),
        }
        self._next_id += 1
        self.locations.append(row)
        return row

    async def fetch(self, sql: str, *args):
        self.statements.append("select")
        self._reads += 1
        delay = self.read_delays.get(self._reads)
        if delay:
            await asyncio.sleep(delay)
        assert "FROM locations" in sql
        return [dict(row) for row in self.locations if row["search_query"] == args[0]]

    async def fetchrow(self, sql: str, *args):
        self.statements.append("insert")
        assert "INSERT INTO locations" in sql
        if any(row["search_query"] == args[0] for row in self.locations):
            return None
        row = self.add_location(args[0], args[1], args[2], args[3])
        return {"id": row["id"]}

    async def execute(self, sql: str, *args):
        self.statements.append("execute")
        if sql.startswith("DELETE FROM"):
            table = sql.split('"')[1]
            rows = self.child_rows.get(table, [])
            kept = [row for row in rows if row["location_id"] != args[0]]
            self.child_rows[table] = kept
            return f"DELETE {len(rows) - len(kept)}"
        return "CREATE TABLE"


class FakeGeocoder:
    """Returns canned records keyed by query and counts calls."""

    def __init__(self, results: dict | None = None, delay_s: float = 0.0) -> None:
        self.results = results or {}
        self.calls: list[str] = []
        self.delay_s = delay_s

    async def geocode(self, query: str) -> LocationRecord:
        self.calls.append(query)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        result = self.results.get(query)
        if isinstance(result, Exception):
            raise result
        if result is None:
            raise ProviderError("google-geocode", "No results.")
        formatted_query, latitude, longitude = result
        return LocationRecord(
            search_query=query,
            formatted_query=formatted_query,
            latitude=latitude,
            longitude=longitude,
            created_at=1_700_000_000_000,
        )


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def seattle_geocoder() -> FakeGeocoder:
    return FakeGeocoder({"Seattle, WA": ("Seattle, WA, USA", 47.6, -122.3)})


@pytest.fixture
def make_geocoder():
    return FakeGeocoder
