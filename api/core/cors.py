"""
Origin admission.

`CORS_ORIGIN` is a comma-separated allow-list. Empty or `*` opens the API to
every origin. Requests without an `Origin` header (curl, server-to-server,
same-origin) are always admitted.

Rejection happens in an ASGI middleware so it covers every route, preflights
included, before any handler runs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from .errors import CorsRejected, api_error_response
from .settings import WILDCARD_ORIGIN

logger = logging.getLogger(__name__)


def allows_any_origin(allowed_origins: Sequence[str]) -> bool:
    return len(allowed_origins) == 0 or WILDCARD_ORIGIN in allowed_origins


def is_origin_allowed(origin: str | None, allowed_origins: Sequence[str]) -> bool:
    if not origin:
        return True

    if allows_any_origin(allowed_origins):
        return True

    if origin in allowed_origins:
        return True

    logger.warning("Blocked by CORS: %s", origin)
    return False


class OriginAdmissionMiddleware:
    def __init__(self, app: ASGIApp, allowed_origins: Sequence[str] = ()) -> None:
        self.app = app
        self.allowed_origins = tuple(allowed_origins)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        if not is_origin_allowed(origin, self.allowed_origins):
            response = api_error_response(CorsRejected())
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)


def install(app: FastAPI, allowed_origins: Sequence[str]) -> None:
    # Added first so it sits inside the admission check.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[WILDCARD_ORIGIN] if allows_any_origin(allowed_origins) else list(allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(OriginAdmissionMiddleware, allowed_origins=allowed_origins)


def describe(allowed_origins: Sequence[str]) -> str:
    if allows_any_origin(allowed_origins):
        return "CORS is open to any origin. Set CORS_ORIGIN to lock it down."
    return f"Restricting CORS to: {', '.join(allowed_origins)}"
