"""
Query-string number parsing shared by the spatial endpoints.

Coordinates arrive as raw strings so a bad value produces the endpoint's own
400 message instead of a generic validation error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException, status

BBOX_MESSAGE = "minLon, minLat, maxLon, maxLat must be numbers."


def _to_number(raw: str | None) -> float | None:
    # float() also takes "1_000" and "inf"; neither is a coordinate.
    if raw is None or "_" in raw:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_numbers(raw_values: list[str | None], *, message: str) -> list[float]:
    """
    Parse every value or fail with a single 400 naming the whole group.
    """
    values = [_to_number(raw) for raw in raw_values]
    if any(v is None for v in values):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    return [float(v) for v in values if v is not None]


@dataclass(frozen=True)
class BBox:
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def as_args(self) -> tuple[float, float, float, float]:
        # Argument order of ST_MakeEnvelope(xmin, ymin, xmax, ymax, srid).
        return (self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def as_dict(self) -> dict[str, Any]:
        return {
            "minLon": self.min_lon,
            "minLat": self.min_lat,
            "maxLon": self.max_lon,
            "maxLat": self.max_lat,
        }


def parse_bbox(
    min_lon: str | None,
    min_lat: str | None,
    max_lon: str | None,
    max_lat: str | None,
) -> BBox:
    nums = parse_numbers([min_lon, min_lat, max_lon, max_lat], message=BBOX_MESSAGE)
    return BBox(*nums)
