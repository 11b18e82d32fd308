"""
Business listing logic shared by every backend variant.
"""

from __future__ import annotations

from .backends import BusinessBackend

MAX_BUSINESSES = 100


def _to_record(row: dict) -> dict:
    return {
        "id": row.get("id"),
        "name": row.get("name"),
        "created_at": row.get("created_at"),
    }


async def list_recent_businesses(backend: BusinessBackend, *, authorization: str | None = None) -> list[dict]:
    rows = await backend.fetch_recent(limit=MAX_BUSINESSES, authorization=authorization)
    return [_to_record(row) for row in rows[:MAX_BUSINESSES]]
