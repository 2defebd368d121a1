"""
Pydantic schemas for sighting endpoints.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

REQUIRED_FIELDS = ("species_common", "category", "observed_at")
REQUIRED_MESSAGE = "species_common, category, observed_at are required."
SEVERITY_MESSAGE = "severity must be a number between 1 and 5."
COORDINATES_MESSAGE = "lon and lat must be numbers."
AOI_MESSAGE = "Body must include { aoi: <GeoJSON Polygon/MultiPolygon> }"


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not numbers.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # JSON integers wider than a float.
        return False


class SightingCreate(BaseModel):
    """
    Body of POST /sightings.

    The checks in `_check_body` run in a fixed order on the raw JSON object so
    the first failing rule decides the error message.
    """

    species_common: str = Field(..., min_length=1)
    species_scientific: str | None = None
    category: str = Field(..., min_length=1)
    severity: int = Field(..., ge=1, le=5)
    observed_at: datetime
    observer: str | None = None
    notes: str | None = None
    lon: float
    lat: float

    @model_validator(mode="before")
    @classmethod
    def _check_body(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object.")

        if not all(data.get(name) for name in REQUIRED_FIELDS):
            raise ValueError(REQUIRED_MESSAGE)

        severity = data.get("severity")
        # Column is smallint: 2.5 is out, 3.0 is 3.
        if not _is_number(severity) or not 1 <= severity <= 5 or not float(severity).is_integer():
            raise ValueError(SEVERITY_MESSAGE)

        if not (_is_number(data.get("lon")) and _is_number(data.get("lat"))):
            raise ValueError(COORDINATES_MESSAGE)

        return {**data, "severity": int(severity)}


class WithinRequest(BaseModel):
    # Shape checks on the polygon are left to ST_GeomFromGeoJSON.
    aoi: Any = None

    @model_validator(mode="before")
    @classmethod
    def _check_aoi(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not data.get("aoi"):
            raise ValueError(AOI_MESSAGE)
        return data
