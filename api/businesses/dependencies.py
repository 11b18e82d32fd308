"""
Dependency wiring for the business listing routes.
"""

from __future__ import annotations

from fastapi import Request

from core.errors import DATABASE_NOT_CONFIGURED

from .backends import BusinessBackend, DisabledBackend


def get_business_backend(request: Request) -> BusinessBackend:
    # Set by the lifespan; absent only when the app is served without it.
    backend = getattr(request.app.state, "business_backend", None)
    if backend is None:
        return DisabledBackend(DATABASE_NOT_CONFIGURED)
    return backend
