"""
Location dependencies for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Request

from .service import LocationResolver


def get_resolver(request: Request) -> LocationResolver:
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        raise RuntimeError("Location resolver is not initialized. Start the app through its lifespan.")
    return resolver
