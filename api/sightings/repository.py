"""
Sighting SQL (raw, PostGIS).

Every Feature-returning query selects the same column list, with the
geometry pre-serialized by PostGIS as `geom_geojson`, and is capped at
MAX_FEATURES rows newest-first.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import asyncpg

from core import db
from core.params import BBox

MAX_FEATURES = 2000
DEFAULT_RADIUS_M = 500.0

SIGHTING_COLUMNS = """
  id,
  species_common,
  species_scientific,
  category,
  severity,
  observed_at,
  observer,
  notes,
  created_at,
  ST_AsGeoJSON(geom)::json AS geom_geojson
"""


async def insert_sighting(
    pool: asyncpg.Pool,
    *,
    species_common: str,
    species_scientific: str | None,
    category: str,
    severity: int,
    observed_at: datetime,
    observer: str | None,
    notes: str | None,
    lon: float,
    lat: float,
) -> dict[str, Any]:
    row = await db.fetch_one(
        pool,
        f"""
        INSERT INTO sightings
          (species_common, species_scientific, category, severity, observed_at, observer, notes, geom)
        VALUES
          ($1, $2, $3, $4, $5, $6, $7, ST_SetSRID(ST_MakePoint($8, $9), 4326))
        RETURNING {SIGHTING_COLUMNS}
        """,
        species_common,
        species_scientific,
        category,
        severity,
        observed_at,
        observer,
        notes,
        lon,  # ST_MakePoint(x=lon, y=lat)
        lat,
    )
    if row is None:
        raise RuntimeError("Failed to insert sighting.")
    return row


async def select_in_bbox(pool: asyncpg.Pool, bbox: BBox, *, limit: int = MAX_FEATURES) -> list[dict[str, Any]]:
    """
    Sightings whose point overlaps the envelope (index-backed `&&`).
    """
    return await db.fetch_all(
        pool,
        f"""
        SELECT {SIGHTING_COLUMNS}
        FROM sightings
        WHERE geom && ST_MakeEnvelope($1, $2, $3, $4, 4326)
        ORDER BY observed_at DESC
        LIMIT $5
        """,
        *bbox.as_args(),
        min(limit, MAX_FEATURES),
    )


async def select_near(
    pool: asyncpg.Pool,
    *,
    lon: float,
    lat: float,
    radius_m: float = DEFAULT_RADIUS_M,
    limit: int = MAX_FEATURES,
) -> list[dict[str, Any]]:
    """
    Sightings within `radius_m` meters of (lon, lat), measured on the geography
    (geodesic), not in planar degrees.
    """
    return await db.fetch_all(
        pool,
        f"""
        SELECT {SIGHTING_COLUMNS}
        FROM sightings
        WHERE ST_DWithin(
          geom::geography,
          ST_SetSRID(ST_MakePoint($1, $2), 4326)::geography,
          $3
        )
        ORDER BY observed_at DESC
        LIMIT $4
        """,
        lon,
        lat,
        radius_m,
        min(limit, MAX_FEATURES),
    )


async def select_within(pool: asyncpg.Pool, aoi: Any, *, limit: int = MAX_FEATURES) -> list[dict[str, Any]]:
    """
    Sightings inside a GeoJSON Polygon/MultiPolygon. The AOI is sent as JSON
    text in a bound parameter and parsed by ST_GeomFromGeoJSON.
    """
    return await db.fetch_all(
        pool,
        f"""
        SELECT {SIGHTING_COLUMNS}
        FROM sightings
        WHERE ST_Within(
          geom,
          ST_SetSRID(ST_GeomFromGeoJSON($1), 4326)
        )
        ORDER BY observed_at DESC
        LIMIT $2
        """,
        json.dumps(aoi),
        min(limit, MAX_FEATURES),
    )
