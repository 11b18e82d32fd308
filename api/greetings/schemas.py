"""
Pydantic response schemas for the greeting endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class BannerResponse(BaseModel):
    status: str
    message: str
    hint: str


class PingResponse(BaseModel):
    message: str
    timestamp: str
    requestId: str | None = None


class HelloResponse(BaseModel):
    message: str
    timestamp: str
