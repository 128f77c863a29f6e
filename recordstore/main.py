"""
RecordStore — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires settings → RecordStore →
       RecordService and returns a configured FastAPI instance.
Who:   uvicorn (`recordstore.main:app`), `python -m recordstore`, and tests
       (which pass their own settings and store).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌─────────────────┐ ┌──────┐ ┌────────────┐        │
    │  │ Request context │→│ GZip │→│ CORS (any) │        │
    │  └─────────────────┘ └──────┘ └────────────┘        │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────┐ ┌─────────────┐ ┌──────────┐  │
    │  │ /api/records[/id]│ │ GET /health │ │ / static │  │
    │  └──────────────────┘ └─────────────┘ └──────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ NotFound→404 │ Persistence→500 │ other→500    │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the data file as [] if it is missing
    3. Log listening address, data file and endpoint summary
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from recordstore import __version__
from recordstore.config import Settings
from recordstore.config import settings as default_settings
from recordstore.exceptions import (
    NotFoundError,
    PersistenceError,
    RecordStoreError,
)
from recordstore.middleware.request_context import RequestContextMiddleware, request_id_var
from recordstore.routes import health, records
from recordstore.schemas.envelope import ErrorEnvelope
from recordstore.services.record_service import RecordService
from recordstore.services.record_store import RecordStore

logger = logging.getLogger(__name__)

ENDPOINT_SUMMARY = (
    ("GET", "/api/records", "List all records"),
    ("POST", "/api/records", "Create a record"),
    ("PUT", "/api/records/:id", "Update a record"),
    ("DELETE", "/api/records/:id", "Delete a record"),
    ("DELETE", "/api/records", "Delete all records"),
)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, make sure the data file exists, then log the
    address and endpoint summary. A data file that cannot be created aborts
    startup.
    """
    settings: Settings = app.state.settings
    service: RecordService = app.state.record_service

    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("RecordStore starting up...")

    await service.store.ensure_initialized()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("Data file: %s", service.store.data_file)
    logger.info("API endpoints:")
    for method, path, summary in ENDPOINT_SUMMARY:
        logger.info("  %-6s %-18s - %s", method, path, summary)
    logger.info("=" * 60)

    yield

    logger.info("RecordStore shut down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=message).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes; every body is the error envelope.

    Handler hierarchy:
        NotFoundError           → 404 Not Found
        PersistenceError        → 500, generic message (context logged only)
        RecordStoreError (base) → 500, exception message
        RequestValidationError  → 500, body/parameter problem description
        HTTPException           → its own status (unknown path, bad method)
        Exception (fallback)    → 500, exception message; only reached by
                                  errors raised outside the record service,
                                  which wraps its own in UnexpectedError
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s", rid, exc.message)
        return _error(404, exc.message)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        rid = request_id_var.get("")
        logger.error("[%s] Persistence error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(RecordStoreError)
    async def handle_record_store_error(request: Request, exc: RecordStoreError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        ) or "Invalid request"
        logger.warning("[%s] Invalid request: %s", rid, message)
        return _error(500, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error(500, str(exc) or type(exc).__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Overrides the environment-derived settings singleton.
        store:    Overrides the RecordStore built from settings.data_file
                  (tests pass one backed by a temporary file).
    """
    settings = settings or default_settings
    store = store or RecordStore(settings.data_file)

    app = FastAPI(
        title="RecordStore API",
        description="Minimal JSON record storage backed by a single flat file.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.record_service = RecordService(
        store, serialize_writes=settings.serialize_writes
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestContext → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestContextMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(records.router)
    app.include_router(health.router)

    # Static files last so /api and /health win
    if settings.static_dir:
        app.mount(
            "/",
            StaticFiles(directory=settings.static_dir, html=True, check_dir=False),
            name="static",
        )

    return app


# uvicorn expects `recordstore.main:app` to be importable
app = create_app()
