"""
Error taxonomy and the boundary translator.

Every failure leaves the API as `{"error": "<message>"}`. The message is the
public one; causes and upstream bodies are logged, never returned.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

DATABASE_NOT_CONFIGURED = "Database connection is not configured"
SUPABASE_NOT_CONFIGURED = "Supabase is not configured"
INTERNAL_SERVER_ERROR = "Internal server error"

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class CorsRejected(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not allowed by CORS"


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Name is required"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Missing Authorization header"


class BackendUnavailableError(ApiError):
    message = DATABASE_NOT_CONFIGURED


class BackendQueryError(ApiError):
    message = "Failed to fetch businesses"


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def api_error_response(exc: ApiError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed method=%s path=%s status=%s error=%s cause=%r",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
            exc.__cause__,
        )
    else:
        logger.info(
            "request_rejected method=%s path=%s status=%s error=%s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return api_error_response(exc)


async def _handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("invalid_request path=%s errors=%s", request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)


class UnexpectedErrorMiddleware:
    """
    Turns unhandled exceptions into the generic 500 envelope.

    Installed inside CORSMiddleware so admitted cross-origin callers can read
    the error body. Exceptions after the response has started are re-raised.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.exception("unhandled_error method=%s path=%s", scope.get("method"), scope.get("path"))
            if response_started:
                raise
            response = error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)
            await response(scope, receive, send)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _handle_api_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
    # Must be added before cors.install() so it sits inside CORSMiddleware.
    app.add_middleware(UnexpectedErrorMiddleware)
