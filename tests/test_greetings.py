"""
Tests for the banner, ping and hello endpoints.
"""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient


def _parse_iso(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestBanner:
    def test_root_reports_status(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "ok",
            "message": "Bizyaab Railway-ready API",
            "hint": "Hit /api/ping from your Next.js frontend to test CORS.",
        }


class TestPing:
    def test_ping_returns_timestamp(self, client: TestClient) -> None:
        resp = client.get("/api/ping")
        assert resp.status_code == 200

        body = resp.json()
        assert body["message"].startswith("Pong from Railway!")
        assert body["timestamp"] is not None
        assert _parse_iso(body["timestamp"]).tzinfo is not None

    def test_request_id_is_echoed(self, client: TestClient) -> None:
        resp = client.get("/api/ping", headers={"x-request-id": "req-123"})
        assert resp.json()["requestId"] == "req-123"

    def test_request_id_defaults_to_null(self, client: TestClient) -> None:
        resp = client.get("/api/ping")
        assert resp.json()["requestId"] is None


class TestHello:
    def test_greets_trimmed_name(self, client: TestClient) -> None:
        resp = client.post("/api/hello", json={"name": "  Ada  "})
        assert resp.status_code == 200

        body = resp.json()
        assert body["message"] == "Hello Ada!"
        _parse_iso(body["timestamp"])

    @pytest.mark.parametrize(
        "payload",
        [{}, {"name": ""}, {"name": "   "}, {"name": 42}, {"name": None}, ["Ada"]],
    )
    def test_rejects_missing_or_blank_name(self, client: TestClient, payload: object) -> None:
        resp = client.post("/api/hello", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Name is required"}

    def test_rejects_malformed_json(self, client: TestClient) -> None:
        resp = client.post(
            "/api/hello",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Name is required"}

    def test_ignores_non_json_content_type(self, client: TestClient) -> None:
        resp = client.post(
            "/api/hello",
            content=b'{"name": "Ada"}',
            headers={"content-type": "text/plain"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "Name is required"}

    def test_accepts_json_with_charset(self, client: TestClient) -> None:
        resp = client.post(
            "/api/hello",
            content=b'{"name": "Ada"}',
            headers={"content-type": "application/json; charset=utf-8"},
        )
        assert resp.status_code == 200
        assert resp.json()["message"] == "Hello Ada!"

    def test_rejects_empty_body(self, client: TestClient) -> None:
        resp = client.post("/api/hello")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Name is required"}
