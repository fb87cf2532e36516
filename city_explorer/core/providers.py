"""
Third-party API HTTP helpers.

Every provider (geocoding, weather, businesses, movies, events, trails) is a
plain JSON-over-GET API, so one helper covers them all.
"""

from __future__ import annotations

from typing import Any

import httpx

DEFAULT_TIMEOUT_S = 10.0


# Provider failures are explicit and separable from other runtime errors.
class ProviderError(RuntimeError):
    def __init__(self, provider: str, message: str, status_code: int | None = None) -> None:
        self.provider = provider
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider}: {message}")


def require_key(provider: str, name: str, value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ProviderError(provider, f"{name} is not set.")
    return value


async def get_json(
    url: str,
    *,
    provider: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """
    GET `url` and return the decoded JSON object.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport) as client:
            resp = await client.get(url, params=params, headers=headers)
    except httpx.TimeoutException as exc:
        raise ProviderError(provider, "Request timed out.") from exc
    except httpx.HTTPError as exc:
        raise ProviderError(provider, f"Request failed: {exc}") from exc

    if resp.status_code != 200:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:500]
        raise ProviderError(
            provider,
            f"Request failed: {resp.status_code} {body}",
            status_code=resp.status_code,
        )

    try:
        data = resp.json()
    except ValueError as exc:
        raise ProviderError(provider, "Response is not valid JSON.") from exc

    if not isinstance(data, dict):
        raise ProviderError(provider, "Response is not a JSON object.")
    return data
