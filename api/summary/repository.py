"""
Summary SQL (raw, PostGIS aggregates).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db
from core.params import BBox


async def species_counts_in_bbox(pool: asyncpg.Pool, bbox: BBox) -> list[dict[str, Any]]:
    """
    One row per species inside the envelope: count and mean severity
    (numeric(10,2), i.e. rounded to 2 decimals), most frequent first.
    """
    return await db.fetch_all(
        pool,
        """
        SELECT
          species_common,
          COUNT(*) AS n,
          AVG(severity)::numeric(10,2) AS avg_severity
        FROM sightings
        WHERE geom && ST_MakeEnvelope($1, $2, $3, $4, 4326)
        GROUP BY species_common
        ORDER BY n DESC
        """,
        *bbox.as_args(),
    )
