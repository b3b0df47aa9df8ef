"""
Main entrypoint for the Nuleaf API.

This module assembles the FastAPI application, sets up logging,
registers the error rendering and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``::

    uvicorn nuleaf_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Create the database file if needed and apply pending migrations.
    init_db()
    yield


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so later setup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
