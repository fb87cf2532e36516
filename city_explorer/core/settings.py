"""
Environment-provided configuration.

Values are read on each call so tests (and process managers) can change the
environment without reloading modules.
"""

from __future__ import annotations

import os

from .providers import DEFAULT_TIMEOUT_S

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw not in {"0", "false", "no", "off"}


def google_api_key() -> str:
    return _env_str("GOOGLE_API_KEY")


def geocode_api_url() -> str:
    return _env_str("GEOCODE_API_URL", GOOGLE_GEOCODE_URL)


def weather_api_key() -> str:
    return _env_str("WEATHER_API_KEY")


def yelp_api_key() -> str:
    return _env_str("YELP_API_KEY")


def movies_api_key() -> str:
    return _env_str("MOVIES_API_KEY")


def meetup_api_key() -> str:
    return _env_str("MEETUP_API_KEY")


def hiking_api_key() -> str:
    return _env_str("HIKING_API_KEY")


def provider_timeout_s() -> float:
    return _env_float("PROVIDER_TIMEOUT_S", DEFAULT_TIMEOUT_S)


def cors_allow_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def port() -> int:
    return _env_int("PORT", 3000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def ensure_schema_on_startup() -> bool:
    return _env_bool("DB_ENSURE_SCHEMA", True)
