"""
PetClinic Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn petclinic.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:  /owners  /pets  /visits  /vets  /health   │
    │                                                     │
    │  Exception Handlers:                                │
    │  NotFound→404 │ Mapping→500 │ Storage→503 │ Conn→503│
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Open the storage session (StoreConnectionError aborts startup)
    3. Seed reference lists when the schema is managed by the app
    Shutdown:
    1. Close the storage session (dispose the pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from petclinic import __version__
from petclinic.config import settings
from petclinic.database import open_session
from petclinic.exceptions import (
    MappingError,
    NotFoundError,
    PetClinicError,
    StorageError,
    StoreConnectionError,
    ValidationError,
)
from petclinic.middleware.logging import RequestLoggingMiddleware
from petclinic.middleware.request_id import RequestIDMiddleware, request_id_var
from petclinic.routes import health, owners, pets, vets, visits
from petclinic.services import VetService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before the store connection is opened.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("PetClinic Backend starting up...")

    try:
        session = await open_session(settings)
    except StoreConnectionError as e:
        logger.error("Store unreachable: %s | Context: %s", e.message, e.context)
        logger.error("Fix the store configuration and restart the server.")
        raise

    app.state.storage_session = session
    if settings.schema_action == "create_if_not_exists":
        await VetService(session).ensure_reference_lists()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("PetClinic Backend shutting down...")
    app.state.storage_session = None
    await session.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, code: str, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": request_id_var.get(""),
        },
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map each error kind to its own status and error code.

        ValidationError       → 400 validation_error
        NotFoundError         → 404 not_found
        MappingError          → 500 data_error
        StorageError          → 503 storage_error
        StoreConnectionError  → 503 store_unavailable
        PetClinicError (base) → 500 server_error
        Exception (fallback)  → 500 internal_server_error

    Context dicts (table names, keys) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, "validation_error", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, "not_found", exc.message)

    @app.exception_handler(MappingError)
    async def handle_mapping_error(request: Request, exc: MappingError):
        logger.error("[%s] Mapping error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error(500, "data_error", "Stored data could not be read. Please contact support.")

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error("[%s] Storage error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error(503, "storage_error", exc.message, headers={"Retry-After": "1"})

    @app.exception_handler(StoreConnectionError)
    async def handle_store_connection_error(request: Request, exc: StoreConnectionError):
        logger.error("[%s] Store unavailable: %s", request_id_var.get(""), exc.message)
        return _error(503, "store_unavailable", exc.message)

    @app.exception_handler(PetClinicError)
    async def handle_petclinic_error(request: Request, exc: PetClinicError):
        logger.error("[%s] Application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error(500, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return _error(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="PetClinic API",
        description=(
            "Owners, pets, visits and vets over a denormalized, partitioned store. "
            "Relational views are rebuilt from partition reads on every request."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.storage_session = None

    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location", "Retry-After"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(owners.router)
    app.include_router(pets.router)
    app.include_router(visits.router)
    app.include_router(vets.router)
    app.include_router(health.router)

    return app


app = create_app()
