"""
Greeting and ping payloads.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.errors import ValidationError

SERVICE_MESSAGE = "Bizyaab Railway-ready API"
SERVICE_HINT = "Hit /api/ping from your Next.js frontend to test CORS."
PING_MESSAGE = "Pong from Railway! Just to make sure CORS is working correctly."


def utc_now_iso() -> str:
    # Millisecond precision with a trailing Z, as browsers print it.
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def banner() -> dict:
    return {"status": "ok", "message": SERVICE_MESSAGE, "hint": SERVICE_HINT}


def ping(request_id: str | None) -> dict:
    return {
        "message": PING_MESSAGE,
        "timestamp": utc_now_iso(),
        "requestId": request_id or None,
    }


def greet(name: object) -> dict:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")

    return {
        "message": f"Hello {name.strip()}!",
        "timestamp": utc_now_iso(),
    }
