"""Tests for app wiring: health, CORS, error shape, body cap, startup"""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from core.limits import BodySizeLimitMiddleware
from main import app


class TestHealth:

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "service": "invasive-sightings-api"}

    def test_health_needs_no_database(self):
        resp = TestClient(app).get("/health")
        assert resp.status_code == 200


class TestCors:

    def test_any_origin_allowed(self, client):
        resp = client.get("/health", headers={"Origin": "https://maps.example.org"})
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_preflight(self, client):
        resp = client.options(
            "/sightings",
            headers={
                "Origin": "https://maps.example.org",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"


class TestErrorShape:

    def test_unknown_route(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not Found"}

    def test_wrong_method(self, client):
        resp = client.delete("/sightings")
        assert resp.status_code == 405
        assert "error" in resp.json()


class TestBodySizeLimit:

    def test_oversized_body_rejected(self, client, fake_pool):
        huge = {"aoi": {"type": "Polygon", "coordinates": [[[0, 0]] * 200_000]}}
        resp = client.post("/sightings/within", json=huge)
        assert resp.status_code == 413
        assert resp.json() == {"error": "Request body too large."}
        assert fake_pool.calls == []

    def test_body_under_limit_passes(self, client, fake_pool):
        aoi = {"type": "Polygon", "coordinates": [[[0, 0]] * 1000]}
        resp = client.post("/sightings/within", json={"aoi": aoi})
        assert resp.status_code == 200

    def test_streamed_body_rejected_without_content_length(self):
        reached_handler = []

        async def inner(scope, receive, send):
            while True:
                message = await receive()
                if not message.get("more_body"):
                    break
            reached_handler.append(True)
            await send({"type": "http.response.start", "status": 200, "headers": []})
            await send({"type": "http.response.body", "body": b"ok"})

        chunks = [
            {"type": "http.request", "body": b"x" * 8, "more_body": True},
            {"type": "http.request", "body": b"x" * 8, "more_body": False},
        ]
        sent = []

        async def receive():
            return chunks.pop(0)

        async def send(message):
            sent.append(message)

        middleware = BodySizeLimitMiddleware(inner, max_bytes=10)
        asyncio.run(middleware({"type": "http", "method": "POST", "headers": []}, receive, send))

        assert reached_handler == []
        assert sent[0]["type"] == "http.response.start"
        assert sent[0]["status"] == 413
        assert b"Request body too large." in sent[1]["body"]

    def test_non_http_scope_passes_through(self):
        seen = []

        async def inner(scope, receive, send):
            seen.append(scope["type"])

        middleware = BodySizeLimitMiddleware(inner, max_bytes=1)
        asyncio.run(middleware({"type": "lifespan"}, None, None))
        assert seen == ["lifespan"]


class TestStartup:

    def test_missing_database_url_aborts_startup(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError, match="DATABASE_URL is not set"):
            with TestClient(app):
                pass
