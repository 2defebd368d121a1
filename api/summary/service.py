"""
Summary service.
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg

from core.errors import backend_errors
from core.params import BBox

from . import repository

logger = logging.getLogger(__name__)


def _to_summary_row(row: dict[str, Any]) -> dict[str, Any]:
    avg = row.get("avg_severity")
    return {
        "species_common": row["species_common"],
        "n": int(row["n"]),
        # numeric arrives as Decimal; emit a plain JSON number.
        "avg_severity": float(avg) if avg is not None else None,
    }


async def summary_by_species(pool: asyncpg.Pool, bbox: BBox) -> dict[str, Any]:
    with backend_errors(logger, "summary", "Server error summarizing."):
        rows = await repository.species_counts_in_bbox(pool, bbox)
    return {"bbox": bbox.as_dict(), "rows": [_to_summary_row(r) for r in rows]}
