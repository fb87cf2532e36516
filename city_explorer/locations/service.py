"""
Location resolution (cache-aside over the `locations` table).

Flow:
1) Look the query up in Postgres; a stored row is returned as-is.
2) On a miss, geocode the query, insert the result and return it.

Concurrent lookups for the same query inside this process share one
read-then-resolve pass, so the geocoder is called at most once. Across
processes the unique index on `search_query` decides the winner and losers
read the row back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from city_explorer.core import db

from . import repository
from .schemas import LocationRecord

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    async def geocode(self, query: str) -> LocationRecord: ...


class LocationResolver:
    def __init__(self, pool: db.Executor, geocoder: Geocoder) -> None:
        self._pool = pool
        self._geocoder = geocoder
        self._inflight: dict[str, asyncio.Future[LocationRecord]] = {}

    async def lookup(self, query: str) -> LocationRecord:
        task = self._inflight.get(query)
        if task is None:
            task = asyncio.ensure_future(self._lookup_once(query))
            self._inflight[query] = task
            task.add_done_callback(lambda done: self._forget(query, done))
        else:
            logger.info("location_inflight_join query=%r", query)

        # One cancelled caller must not cancel the shared lookup.
        return await asyncio.shield(task)

    def _forget(self, query: str, task: asyncio.Future[LocationRecord]) -> None:
        if self._inflight.get(query) is task:
            del self._inflight[query]
        # Waiters may all have been cancelled; mark the outcome as retrieved.
        if not task.cancelled():
            task.exception()

    async def _lookup_once(self, query: str) -> LocationRecord:
        rows = await repository.find_by_query(self._pool, query)
        if rows:
            logger.info("location_cache_hit query=%r id=%s", query, rows[0].id)
            return rows[0]

        logger.info("location_cache_miss query=%r", query)
        return await self._resolve(query)

    async def _resolve(self, query: str) -> LocationRecord:
        candidate = await self._geocoder.geocode(query)
        saved = await repository.insert_if_absent(self._pool, candidate)
        if saved.id is not None:
            return saved

        # Another writer stored this query first; prefer its row.
        logger.warning("location_insert_conflict query=%r", query)
        existing = await repository.find_by_query(self._pool, query)
        if existing:
            return existing[0]
        return saved

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)
