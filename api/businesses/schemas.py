"""
Pydantic schemas for the business listing endpoint.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class BusinessRecord(BaseModel):
    # Postgres may hand back ints or UUIDs; Supabase returns JSON scalars.
    id: Any
    name: str | None = None
    created_at: datetime | str | None = None


class BusinessListResponse(BaseModel):
    businesses: list[BusinessRecord]
