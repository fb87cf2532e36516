"""
Pydantic schemas for the per-provider summaries returned to the client.
"""

from __future__ import annotations

from pydantic import BaseModel


class WeatherSummary(BaseModel):
    forecast: str | None = None
    time: str


class BusinessSummary(BaseModel):
    name: str | None = None
    image_url: str | None = None
    price: str | None = None
    rating: float | None = None
    url: str | None = None


class MovieSummary(BaseModel):
    title: str | None = None
    overview: str | None = None
    average_votes: float | None = None
    total_votes: int | None = None
    image_url: str
    popularity: float | None = None
    released_on: str | None = None


class EventSummary(BaseModel):
    link: str | None = None
    name: str | None = None
    creation_date: int | None = None
    host: str | None = None


class TrailSummary(BaseModel):
    name: str | None = None
    location: str | None = None
    length: float | None = None
    stars: float | None = None
    star_votes: int | None = None
    summary: str | None = None
    trail_url: str | None = None
    conditions: str | None = None
    condition_date: str | None = None
    condition_time: str | None = None
