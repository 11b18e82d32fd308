import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from businesses import backends
from businesses import router as businesses_router
from core import cors, errors, settings
from greetings import router as greetings_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


def create_app(
    app_settings: settings.Settings | None = None,
    *,
    business_backend: backends.BusinessBackend | None = None,
) -> FastAPI:
    """
    Build the API. Tests pass explicit settings and a fake backend.
    """
    # Before load_settings() so configuration warnings use the same handler.
    configure_logging()
    app_settings = app_settings or settings.load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One backend handle (pool or HTTP client) per process.
        backend = business_backend or await backends.build_backend(app_settings)
        app.state.business_backend = backend
        logger.info("%s", cors.describe(app_settings.allowed_origins))
        try:
            yield
        finally:
            await backend.close()

    app = FastAPI(lifespan=lifespan)

    errors.install_exception_handlers(app)
    cors.install(app, app_settings.allowed_origins)

    app.include_router(greetings_router.router, tags=["greetings"])
    app.include_router(businesses_router.router, tags=["businesses"])
    return app


app = create_app()


def run() -> None:
    port = settings.port()
    logger.info("API listening on port %s", port)
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
