"""
Notes API: FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       run() serves it with uvicorn on the configured host and port.
Who:   uvicorn (notes_api.main:app), the `notes-api` console script,
       `python -m notes_api`, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Req ID → Logging → CORS (any origin)  │
    │                                                     │
    │  Routes:                                            │
    │    GET/POST /notes                                  │
    │    GET/DELETE/PATCH /notes/{id}                     │
    │    GET /health                                      │
    │                                                     │
    │  Exception Handlers:                                │
    │    RowCountError → 404 raw result │ DB → 500        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the listening address
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notes_api import __version__
from notes_api.config import settings
from notes_api.database import dispose_engine
from notes_api.exceptions import (
    DatabaseError,
    NotesAPIError,
    RowCountError,
)
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    new_request_id,
    request_id_var,
)
from notes_api.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    When:   Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Replaced by notes_api.access and the SQL echo switch respectively
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and announce the listening address.
    Shutdown: close every pooled database connection.
    """
    setup_logging()
    logger.info("Notes API %s starting up", __version__)
    logger.info("Server is listening on %s:%d", settings.host, settings.port)

    yield

    logger.info("Notes API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions onto HTTP responses.

    Handler table:
        RowCountError (NotFoundError, UnexpectedRowCountError)
                         → 404, body is the raw query result
        DatabaseError    → 500, generic message
        NotesAPIError    → 500, generic message (catch-all for custom errors)
        Exception        → 500, generic message (unexpected errors)

    500 bodies never carry SQL, driver messages or stack traces;
    those are logged server-side with the request id.
    """

    @app.exception_handler(RowCountError)
    async def handle_row_count(request: Request, exc: RowCountError):
        """Keyed statement missed or over-matched; hand back the raw result."""
        rid = _request_id(request)
        logger.info("[%s] %s", rid, exc.message)
        return JSONResponse(
            status_code=404,
            content=exc.result.model_dump(mode="json", by_alias=True),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = _request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(NotesAPIError)
    async def handle_app_error(request: Request, exc: NotesAPIError):
        rid = _request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
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
        """
        Catch-all; the stack trace is logged, never returned.

        Starlette serves this handler outside RequestIDMiddleware, so the
        X-Request-ID header is set here.
        """
        rid = (
            _request_id(request)
            or request.headers.get(REQUEST_ID_HEADER)
            or new_request_id()
        )
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notes API",
        description="CRUD over a single notes table. Each endpoint runs one SQL statement.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes

    # Cross-origin requests are allowed from anywhere
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `notes_api.main:app` to be importable
app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run(
        "notes_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
