"""
Summary API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Query

from core import db
from core.params import parse_bbox

from . import service

router = APIRouter()


@router.get("/summary/by-species")
async def summary_by_species(
    min_lon: str | None = Query(default=None, alias="minLon"),
    min_lat: str | None = Query(default=None, alias="minLat"),
    max_lon: str | None = Query(default=None, alias="maxLon"),
    max_lat: str | None = Query(default=None, alias="maxLat"),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    bbox = parse_bbox(min_lon, min_lat, max_lon, max_lat)
    return await service.summary_by_species(pool, bbox)
