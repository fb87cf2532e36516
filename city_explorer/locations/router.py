"""
Location API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from .dependencies import get_resolver
from .schemas import LocationRecord
from .service import LocationResolver

router = APIRouter()


@router.get("/location", response_model=LocationRecord, response_model_exclude_none=True)
async def get_location(
    data: str = Query(...),
    resolver: LocationResolver = Depends(get_resolver),
) -> LocationRecord:
    return await resolver.lookup(data)
