"""
Contacts API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   ``create_app()`` wires settings, the database accessor, services,
       middleware, exception handlers and routers into one app.
Who:   uvicorn imports ``contacts_api.main:app``; tests call ``create_app``
       with an accessor backed by in-memory storage.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Request ID  │→│  Access Log  │→│    CORS     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  /contacts   │ │    /users    │ │   /health   │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Storage→500   │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, connect to MongoDB (fail fast unless
               MONGODB_FAIL_FAST=false)
    Shutdown:  close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contacts_api import __version__
from contacts_api.config import Settings, settings
from contacts_api.database import DatabaseAccessor
from contacts_api.exceptions import (
    NotFoundError,
    NotInitializedError,
    StorageError,
    ValidationError,
)
from contacts_api.middleware.logging import RequestLoggingMiddleware
from contacts_api.middleware.request_id import RequestIDMiddleware, request_id_var
from contacts_api.routes import contacts, health, users
from contacts_api.services import ContactService, UserService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] contacts_api.access: GET /contacts 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Driver heartbeats and uvicorn's own access log duplicate our access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def build_lifespan(accessor: DatabaseAccessor, app_settings: Settings):
    """
    Return the lifespan context manager bound to ``accessor``.

    Connection failure policy:
        fail_fast=True   → the StorageError propagates and uvicorn aborts startup
        fail_fast=False  → the error is logged, the server starts, and every
                           storage route answers 500 (NotInitializedError)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(app_settings.log_level)
        logger.info("=" * 60)
        logger.info("Contacts API %s starting up...", __version__)

        try:
            app_settings.validate_required()
            await accessor.initialize()
        except (ValueError, StorageError) as e:
            if app_settings.mongodb_fail_fast:
                logger.error("Startup aborted: %s", str(e))
                raise
            logger.error(
                "Starting without a database connection (MONGODB_FAIL_FAST=false): %s",
                str(e),
            )

        logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)
        logger.info("API docs: http://%s:%d/api-docs", app_settings.host, app_settings.port)
        logger.info("=" * 60)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Contacts API shutting down...")
        await accessor.close()
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed JSON / wrong types)
        NotFoundError           → 404 Not Found
        NotInitializedError     → 500 Internal Server Error
        StorageError            → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Storage details are logged server-side only; clients get a generic message.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.info("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body is not a JSON object or a field has the wrong JSON type."""
        rid = request_id_var.get("")
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.info("[%s] Malformed request: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request body is malformed",
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotInitializedError)
    async def handle_not_initialized(request: Request, exc: NotInitializedError):
        rid = request_id_var.get("")
        logger.error("[%s] Database not initialized: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "database_unavailable",
                "message": "The database is not available. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    accessor: Optional[DatabaseAccessor] = None,
    app_settings: Settings = settings,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        accessor: Database accessor shared by all services. Built from
            ``app_settings`` when omitted.
        app_settings: Configuration to use; defaults to the module singleton.

    Returns:
        Configured FastAPI instance. ``app.state`` holds the accessor and the
        contact/user services used by the route dependencies.
    """
    if accessor is None:
        accessor = DatabaseAccessor.from_settings(app_settings)

    servers = None
    if app_settings.api_public_url:
        servers = [{"url": app_settings.api_public_url, "description": "Deployed server"}]

    app = FastAPI(
        title="Contacts API",
        description="API for managing contacts",
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        servers=servers,
        lifespan=build_lifespan(accessor, app_settings),
    )

    app.state.accessor = accessor
    app.state.contact_service = ContactService(accessor)
    app.state.user_service = UserService(accessor)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(contacts.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()
