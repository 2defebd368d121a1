"""
Sighting API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from core import db
from core.params import parse_bbox, parse_numbers

from . import repository, schemas, service

router = APIRouter()

NEAR_MESSAGE = "lon, lat, radius_m must be numbers."


@router.post("/sightings", status_code=status.HTTP_201_CREATED)
async def create_sighting(
    payload: schemas.SightingCreate | None = Body(default=None),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    if payload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=schemas.REQUIRED_MESSAGE)
    return await service.create_sighting(pool, payload)


@router.get("/sightings/bbox")
async def sightings_in_bbox(
    min_lon: str | None = Query(default=None, alias="minLon"),
    min_lat: str | None = Query(default=None, alias="minLat"),
    max_lon: str | None = Query(default=None, alias="maxLon"),
    max_lat: str | None = Query(default=None, alias="maxLat"),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    bbox = parse_bbox(min_lon, min_lat, max_lon, max_lat)
    return await service.sightings_in_bbox(pool, bbox)


@router.get("/sightings/near")
async def sightings_near(
    lon: str | None = None,
    lat: str | None = None,
    radius_m: str | None = None,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    if radius_m is None:
        radius_m = str(repository.DEFAULT_RADIUS_M)
    lon_value, lat_value, radius_value = parse_numbers([lon, lat, radius_m], message=NEAR_MESSAGE)
    return await service.sightings_near(pool, lon=lon_value, lat=lat_value, radius_m=radius_value)


@router.post("/sightings/within")
async def sightings_within(
    request: schemas.WithinRequest | None = Body(default=None),
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    if request is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=schemas.AOI_MESSAGE)
    return await service.sightings_within(pool, request.aoi)
