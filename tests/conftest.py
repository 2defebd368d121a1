from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core import db
from main import app


class FakePool:
    """
    Stands in for asyncpg.Pool: records statements, serves canned rows.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.rows: list[dict[str, Any]] = []
        self.error: Exception | None = None

    async def fetch(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self.calls.append((sql, args))
        if self.error is not None:
            raise self.error
        return list(self.rows)

    async def fetchrow(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self.calls.append((sql, args))
        if self.error is not None:
            raise self.error
        return self.rows[0] if self.rows else None


def sighting_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": 1,
        "species_common": "Zebra Mussel",
        "species_scientific": None,
        "category": "mollusk",
        "severity": 3,
        "observed_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "observer": None,
        "notes": None,
        "created_at": datetime(2024, 1, 2, 12, 30, tzinfo=timezone.utc),
        "geom_geojson": {"type": "Point", "coordinates": [-73.99, 40.73]},
    }
    row.update(overrides)
    return row


def summary_row(species: str, n: int, avg: str) -> dict[str, Any]:
    return {"species_common": species, "n": n, "avg_severity": Decimal(avg)}


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def client(fake_pool: FakePool):
    # No `with`: the lifespan (real pool) never runs in tests.
    app.dependency_overrides[db.get_pool] = lambda: fake_pool
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
