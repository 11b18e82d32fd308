"""
Tests for the boundary error translator.
"""

from __future__ import annotations

from core.errors import (
    BackendQueryError,
    BackendUnavailableError,
    CorsRejected,
    UnauthorizedError,
    ValidationError,
)


class TestTaxonomy:
    def test_status_codes(self) -> None:
        assert CorsRejected().status_code == 403
        assert ValidationError().status_code == 400
        assert UnauthorizedError().status_code == 401
        assert BackendUnavailableError().status_code == 500
        assert BackendQueryError().status_code == 500

    def test_status_override(self) -> None:
        exc = BackendQueryError(status_code=404)
        assert exc.status_code == 404
        assert exc.message == "Failed to fetch businesses"
        assert BackendQueryError().status_code == 500

    def test_message_override(self) -> None:
        assert str(BackendUnavailableError("Supabase is not configured")) == "Supabase is not configured"


class TestTranslation:
    def test_unknown_route_uses_envelope(self, client) -> None:
        resp = client.get("/does-not-exist")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not Found"}

    def test_wrong_method_uses_envelope(self, client) -> None:
        resp = client.delete("/api/ping")
        assert resp.status_code == 405
        assert set(resp.json()) == {"error"}

    def test_unexpected_error_is_generic_500(self, make_client, make_backend) -> None:
        client = make_client(
            backend=make_backend(error=RuntimeError("connection string leaked: postgres://secret")),
            raise_server_exceptions=False,
        )
        resp = client.get("/api/businesses")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
        assert "secret" not in resp.text

    def test_unexpected_error_keeps_cors_headers(self, make_client, make_backend) -> None:
        client = make_client(
            allowed_origins=("http://a.example",),
            backend=make_backend(error=RuntimeError("boom")),
        )
        resp = client.get("/api/businesses", headers={"origin": "http://a.example"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}
        assert resp.headers["access-control-allow-origin"] == "http://a.example"

    def test_unexpected_error_is_logged(self, make_client, make_backend, caplog) -> None:
        client = make_client(backend=make_backend(error=RuntimeError("boom in backend")))
        resp = client.get("/api/businesses")
        assert resp.status_code == 500
        assert "unhandled_error method=GET path=/api/businesses" in caplog.text
        assert "boom in backend" in caplog.text
