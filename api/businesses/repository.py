"""
Business record queries (raw SQL).
"""

from __future__ import annotations

import asyncpg

from core import db


async def list_recent_businesses(pool: asyncpg.Pool, *, limit: int) -> list[dict]:
    return await db.fetch_all(
        pool,
        """
        SELECT id, name, created_at
        FROM businesses
        ORDER BY created_at DESC
        LIMIT $1
        """,
        limit,
    )
