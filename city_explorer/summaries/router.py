"""
Summary API endpoints.

Clients pass the resolved location back as bracketed query params, e.g.
`/weather?data[latitude]=47.6&data[longitude]=-122.3` or
`/movies?data[search_query]=Seattle`.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from . import schemas, service

router = APIRouter()


@router.get("/weather", response_model=list[schemas.WeatherSummary])
async def get_weather(
    latitude: float = Query(..., alias="data[latitude]", ge=-90, le=90),
    longitude: float = Query(..., alias="data[longitude]", ge=-180, le=180),
) -> list[schemas.WeatherSummary]:
    return await service.fetch_weather(latitude, longitude)


@router.get("/yelp", response_model=list[schemas.BusinessSummary])
async def get_yelp(
    search_query: str = Query(..., alias="data[search_query]", min_length=1),
) -> list[schemas.BusinessSummary]:
    return await service.fetch_businesses(search_query)


@router.get("/movies", response_model=list[schemas.MovieSummary])
async def get_movies(
    search_query: str = Query(..., alias="data[search_query]", min_length=1),
) -> list[schemas.MovieSummary]:
    return await service.fetch_movies(search_query)


@router.get("/meetups", response_model=list[schemas.EventSummary])
async def get_meetups(
    latitude: float = Query(..., alias="data[latitude]", ge=-90, le=90),
    longitude: float = Query(..., alias="data[longitude]", ge=-180, le=180),
) -> list[schemas.EventSummary]:
    return await service.fetch_events(latitude, longitude)


@router.get("/hiking", response_model=list[schemas.TrailSummary])
async def get_hiking(
    latitude: float = Query(..., alias="data[latitude]", ge=-90, le=90),
    longitude: float = Query(..., alias="data[longitude]", ge=-180, le=180),
) -> list[schemas.TrailSummary]:
    return await service.fetch_trails(latitude, longitude)
