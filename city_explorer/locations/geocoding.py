"""
Google Geocoding API client.

Response shape used:
  {"status": "OK",
   "results": [{"formatted_address": "...",
                "geometry": {"location": {"lat": 47.6, "lng": -122.3}}}]}

Parsing is kept separate from transport so it can be tested on plain dicts.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from city_explorer.core import settings
from city_explorer.core.providers import ProviderError, get_json, require_key

from .schemas import LocationRecord

PROVIDER = "google-geocode"

_ERROR_STATUSES = {"REQUEST_DENIED", "OVER_QUERY_LIMIT", "INVALID_REQUEST", "UNKNOWN_ERROR"}

logger = logging.getLogger(__name__)


class GeocodeParseError(ProviderError):
    def __init__(self, message: str) -> None:
        super().__init__(PROVIDER, message)


def now_ms() -> int:
    return int(time.time() * 1000)


def parse_geocode_response(
    query: str,
    payload: dict[str, Any],
    *,
    created_at: int | None = None,
) -> LocationRecord:
    """
    Build a LocationRecord from the first geocoding candidate.
    """
    api_status = str(payload.get("status") or "OK")
    if api_status == "ZERO_RESULTS":
        raise GeocodeParseError("No results.")
    if api_status in _ERROR_STATUSES:
        msg = payload.get("error_message") or api_status
        raise GeocodeParseError(f"API error: {msg}")

    results = payload.get("results")
    if not isinstance(results, list) or not results:
        raise GeocodeParseError("No results.")

    first = results[0]
    if not isinstance(first, dict):
        raise GeocodeParseError("Malformed result.")

    formatted = first.get("formatted_address")
    geometry = first.get("geometry")
    location = geometry.get("location") if isinstance(geometry, dict) else None
    if not isinstance(formatted, str) or not isinstance(location, dict):
        raise GeocodeParseError("Result is missing formatted_address or geometry.location.")

    try:
        latitude = float(location["lat"])
        longitude = float(location["lng"])
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodeParseError("Result has missing or non-numeric coordinates.") from exc

    return LocationRecord(
        search_query=query,
        formatted_query=formatted,
        latitude=latitude,
        longitude=longitude,
        created_at=created_at if created_at is not None else now_ms(),
    )


class GoogleGeocoder:
    """
    Geocodes free-text queries. The query is sent as-is.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        url: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self._timeout_s = timeout_s
        self._transport = transport

    async def geocode(self, query: str) -> LocationRecord:
        api_key = require_key(
            PROVIDER,
            "GOOGLE_API_KEY",
            self._api_key if self._api_key is not None else settings.google_api_key(),
        )
        payload = await get_json(
            self._url or settings.geocode_api_url(),
            provider=PROVIDER,
            params={"address": query, "key": api_key},
            timeout_s=self._timeout_s or settings.provider_timeout_s(),
            transport=self._transport,
        )
        record = parse_geocode_response(query, payload)
        logger.debug("geocode_resolved query=%r formatted_query=%r", query, record.formatted_query)
        return record
