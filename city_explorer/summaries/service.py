"""
Per-location summaries from third-party APIs.

Each provider is a stateless fetch-and-map:
- weather   -> Dark Sky daily forecast
- yelp      -> Yelp business search
- movies    -> TMDB movie search
- meetups   -> Meetup upcoming events
- hiking    -> Hiking Project trails

`parse_*` functions map a decoded payload and raise ProviderError when it
does not have the expected shape; `fetch_*` functions do the HTTP call.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from city_explorer.core import settings
from city_explorer.core.providers import ProviderError, get_json, require_key

from . import schemas

DARKSKY_URL = "https://api.darksky.net/forecast"
YELP_SEARCH_URL = "https://api.yelp.com/v3/businesses/search"
TMDB_SEARCH_URL = "https://api.themoviedb.org/3/search/movie"
TMDB_POSTER_PREFIX = "https://image.tmdb.org/t/p/w200_and_h300_bestv2"
MEETUP_EVENTS_URL = "https://api.meetup.com/find/upcoming_events"
HIKING_TRAILS_URL = "https://www.hikingproject.com/data/get-trails"

MEETUP_PAGE_SIZE = 5
HIKING_MAX_DISTANCE = 10


def _items(payload: dict[str, Any], *path: str, provider: str) -> list[dict[str, Any]]:
    node: Any = payload
    for key in path:
        node = node.get(key) if isinstance(node, dict) else None
    if not isinstance(node, list):
        raise ProviderError(provider, f"Response is missing {'.'.join(path)}.")
    return [item for item in node if isinstance(item, dict)]


def _build(model: type, provider: str, **fields: Any) -> Any:
    try:
        return model(**fields)
    except ValidationError as exc:
        raise ProviderError(provider, f"Unexpected field types: {exc.error_count()} error(s).") from exc


def format_day(epoch_s: Any) -> str:
    """
    Render a unix timestamp as e.g. "Mon Jan 01 2018" (UTC).
    """
    return datetime.fromtimestamp(int(epoch_s), tz=timezone.utc).strftime("%a %b %d %Y")


def parse_weather(payload: dict[str, Any]) -> list[schemas.WeatherSummary]:
    summaries = []
    for day in _items(payload, "daily", "data", provider="darksky"):
        try:
            time_str = format_day(day["time"])
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as exc:
            raise ProviderError("darksky", "Forecast day has no valid time.") from exc
        summaries.append(_build(schemas.WeatherSummary, "darksky", forecast=day.get("summary"), time=time_str))
    return summaries


def parse_businesses(payload: dict[str, Any]) -> list[schemas.BusinessSummary]:
    return [
        _build(
            schemas.BusinessSummary,
            "yelp",
            name=item.get("name"),
            image_url=item.get("image_url"),
            price=item.get("price"),
            rating=item.get("rating"),
            url=item.get("url"),
        )
        for item in _items(payload, "businesses", provider="yelp")
    ]


def parse_movies(payload: dict[str, Any]) -> list[schemas.MovieSummary]:
    return [
        _build(
            schemas.MovieSummary,
            "tmdb",
            title=item.get("title"),
            overview=item.get("overview"),
            average_votes=item.get("vote_average"),
            total_votes=item.get("vote_count"),
            image_url=f"{TMDB_POSTER_PREFIX}{item.get('poster_path') or ''}",
            popularity=item.get("popularity"),
            released_on=item.get("release_date"),
        )
        for item in _items(payload, "results", provider="tmdb")
    ]


def parse_events(payload: dict[str, Any]) -> list[schemas.EventSummary]:
    summaries = []
    for event in _items(payload, "events", provider="meetup"):
        group = event.get("group")
        summaries.append(
            _build(
                schemas.EventSummary,
                "meetup",
                link=event.get("link"),
                name=event.get("name"),
                creation_date=event.get("created"),
                host=group.get("name") if isinstance(group, dict) else None,
            )
        )
    return summaries


def _split_condition_date(raw: Any) -> tuple[str | None, str | None]:
    # "2018-10-11 08:28:09" -> ("2018-10-11", "08:28:09")
    parts = str(raw).split() if raw else []
    date = parts[0] if len(parts) > 0 else None
    time_part = parts[1] if len(parts) > 1 else None
    return date, time_part


def parse_trails(payload: dict[str, Any]) -> list[schemas.TrailSummary]:
    summaries = []
    for trail in _items(payload, "trails", provider="hikingproject"):
        condition_date, condition_time = _split_condition_date(trail.get("conditionDate"))
        summaries.append(
            _build(
                schemas.TrailSummary,
                "hikingproject",
                name=trail.get("name"),
                location=trail.get("location"),
                length=trail.get("length"),
                stars=trail.get("stars"),
                star_votes=trail.get("starVotes", trail.get("starVote")),
                summary=trail.get("summary"),
                trail_url=trail.get("url"),
                conditions=trail.get("conditionDetails"),
                condition_date=condition_date,
                condition_time=condition_time,
            )
        )
    return summaries


async def fetch_weather(
    latitude: float,
    longitude: float,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[schemas.WeatherSummary]:
    api_key = require_key("darksky", "WEATHER_API_KEY", settings.weather_api_key())
    payload = await get_json(
        f"{DARKSKY_URL}/{api_key}/{latitude},{longitude}",
        provider="darksky",
        timeout_s=settings.provider_timeout_s(),
        transport=transport,
    )
    return parse_weather(payload)


async def fetch_businesses(
    search_query: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[schemas.BusinessSummary]:
    api_key = require_key("yelp", "YELP_API_KEY", settings.yelp_api_key())
    payload = await get_json(
        YELP_SEARCH_URL,
        provider="yelp",
        params={"location": search_query},
        headers={"Authorization": f"Bearer {api_key}"},
        timeout_s=settings.provider_timeout_s(),
        transport=transport,
    )
    return parse_businesses(payload)


async def fetch_movies(
    search_query: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[schemas.MovieSummary]:
    api_key = require_key("tmdb", "MOVIES_API_KEY", settings.movies_api_key())
    payload = await get_json(
        TMDB_SEARCH_URL,
        provider="tmdb",
        params={"api_key": api_key, "query": search_query},
        timeout_s=settings.provider_timeout_s(),
        transport=transport,
    )
    return parse_movies(payload)


async def fetch_events(
    latitude: float,
    longitude: float,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[schemas.EventSummary]:
    api_key = require_key("meetup", "MEETUP_API_KEY", settings.meetup_api_key())
    payload = await get_json(
        MEETUP_EVENTS_URL,
        provider="meetup",
        params={
            "sign": "true",
            "photo-host": "public",
            "lon": longitude,
            "lat": latitude,
            "page": MEETUP_PAGE_SIZE,
            "key": api_key,
        },
        timeout_s=settings.provider_timeout_s(),
        transport=transport,
    )
    return parse_events(payload)


async def fetch_trails(
    latitude: float,
    longitude: float,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[schemas.TrailSummary]:
    api_key = require_key("hikingproject", "HIKING_API_KEY", settings.hiking_api_key())
    payload = await get_json(
        HIKING_TRAILS_URL,
        provider="hikingproject",
        params={
            "lat": latitude,
            "lon": longitude,
            "maxDistance": HIKING_MAX_DISTANCE,
            "key": api_key,
        },
        timeout_s=settings.provider_timeout_s(),
        transport=transport,
    )
    return parse_trails(payload)
