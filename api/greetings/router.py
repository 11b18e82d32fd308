"""
Banner, ping and hello endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Header, Request

from . import schemas, service

router = APIRouter()


async def _json_object(request: Request) -> dict[str, Any]:
    # Non-JSON content types, malformed or non-object bodies all read as "no name given".
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type != "application/json":
        return {}
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.get("/", response_model=schemas.BannerResponse)
def root() -> dict:
    return service.banner()


@router.get("/api/ping", response_model=schemas.PingResponse)
def ping(x_request_id: str | None = Header(default=None)) -> dict:
    return service.ping(x_request_id)


@router.post("/api/hello", response_model=schemas.HelloResponse)
async def hello(request: Request) -> dict:
    payload = await _json_object(request)
    return service.greet(payload.get("name"))
