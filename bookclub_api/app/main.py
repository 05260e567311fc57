"""
Main entrypoint for the Book Club API.

This module assembles the FastAPI application: it sets up logging,
attaches the shared collaborators (settings, identity verifier,
catalog gateway) to ``app.state``, registers the JSON error handlers
and includes the routers.  ``create_app`` builds the app, which is
then instantiated at module import time as ``app``, e.g.::

    uvicorn bookclub_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings
from .core.db import get_database_path, init_db
from .core.exceptions import AppError
from .core.identity import FirebaseIdentityVerifier
from .core.logging_config import setup_logging
from .services.catalog_service import CatalogGateway


logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``.
        Tests pass their own to point at a temporary database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    # Initialise logging before anything else so that the setup below can log.
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
    )
    app.state.settings = app_settings
    app.state.identity_verifier = FirebaseIdentityVerifier(app_settings)
    app.state.catalog_gateway = CatalogGateway(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse, tags=["health"])
    async def liveness() -> str:
        return "Backend connected!"

    app.include_router(api_router)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies pending migrations.
        db_path = get_database_path(app_settings.database_url)
        init_db(db_path)
        logger.info("Connected to SQLite database at %s", db_path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can locate it.
app = create_app()
