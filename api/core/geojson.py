"""
GeoJSON shaping for rows that carry a pre-serialized geometry column.

Queries select `ST_AsGeoJSON(geom)::json AS geom_geojson`; everything else in
the row becomes Feature properties.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

GEOMETRY_KEY = "geom_geojson"


def row_to_feature(row: Mapping[str, Any]) -> dict[str, Any]:
    properties = {k: v for k, v in row.items() if k != GEOMETRY_KEY}
    return {
        "type": "Feature",
        "geometry": row.get(GEOMETRY_KEY),
        "properties": properties,
    }


def features_to_collection(features: Iterable[dict[str, Any]]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}
