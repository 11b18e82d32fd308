"""
Business listing API endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header

from . import schemas, service
from .backends import BusinessBackend
from .dependencies import get_business_backend

router = APIRouter()


@router.get("/api/businesses", response_model=schemas.BusinessListResponse)
async def list_businesses(
    authorization: str | None = Header(default=None),
    backend: BusinessBackend = Depends(get_business_backend),
) -> dict:
    businesses = await service.list_recent_businesses(backend, authorization=authorization)
    return {"businesses": businesses}
