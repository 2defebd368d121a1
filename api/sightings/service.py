"""
Sighting service (orchestration).

Validated input goes to exactly one repository call; rows come back shaped
as GeoJSON. Database failures are logged here and masked as a fixed 500.
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg

from core import geojson
from core.errors import backend_errors
from core.params import BBox

from . import repository, schemas

logger = logging.getLogger(__name__)


async def create_sighting(pool: asyncpg.Pool, payload: schemas.SightingCreate) -> dict[str, Any]:
    with backend_errors(logger, "create_sighting", "Server error creating sighting."):
        row = await repository.insert_sighting(
            pool,
            species_common=payload.species_common,
            species_scientific=payload.species_scientific,
            category=payload.category,
            severity=payload.severity,
            observed_at=payload.observed_at,
            observer=payload.observer,
            notes=payload.notes,
            lon=payload.lon,
            lat=payload.lat,
        )
    logger.info("sighting_created id=%s species=%s", row.get("id"), payload.species_common)
    return geojson.row_to_feature(row)


async def sightings_in_bbox(pool: asyncpg.Pool, bbox: BBox) -> dict[str, Any]:
    with backend_errors(logger, "bbox", "Server error querying bbox."):
        rows = await repository.select_in_bbox(pool, bbox)
    return geojson.features_to_collection(geojson.row_to_feature(r) for r in rows)


async def sightings_near(pool: asyncpg.Pool, *, lon: float, lat: float, radius_m: float) -> dict[str, Any]:
    with backend_errors(logger, "near", "Server error querying near."):
        rows = await repository.select_near(pool, lon=lon, lat=lat, radius_m=radius_m)
    return geojson.features_to_collection(geojson.row_to_feature(r) for r in rows)


async def sightings_within(pool: asyncpg.Pool, aoi: Any) -> dict[str, Any]:
    with backend_errors(logger, "within", "Server error querying within."):
        rows = await repository.select_within(pool, aoi)
    return geojson.features_to_collection(geojson.row_to_feature(r) for r in rows)
