"""
Coffee Menu Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn coffeemenu.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐             │
    │  │ Req ID   │→│ Logging  │→│  CORS    │→ Errors     │
    │  └──────────┘ └──────────┘ └──────────┘             │
    │                                                     │
    │  Routes:                                            │
    │  /api/login  /api/verify  /api/categories           │
    │  /api/items  /health                                │
    │                                                     │
    │  Exception Handlers:                                │
    │  Unauthorized→401 │ Store→500 │ Validation→400      │
    │  anything else→500 (UnexpectedErrorMiddleware)      │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, config check, create tables if missing
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coffeemenu import __version__
from coffeemenu.config import settings
from coffeemenu.database import dispose_engine, init_models
from coffeemenu.exceptions import CoffeeMenuError, StoreError, UnauthorizedError
from coffeemenu.middleware.errors import UnexpectedErrorMiddleware
from coffeemenu.middleware.logging import RequestLoggingMiddleware
from coffeemenu.middleware.request_id import RequestIDMiddleware, request_id_var
from coffeemenu.routes import auth, categories, health, items

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Warn about development admin credentials
        3. Create the catalog tables if the database is new
    Shutdown:
        1. Dispose database engine
    """
    setup_logging()
    logger.info("Coffee Menu Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: development setups run on the defaults
        logger.warning("%s", str(e))

    await init_models()
    logger.info("Database ready: %s", settings.database_url.split("@")[-1])
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Coffee Menu Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes. Every error body carries an
    `error` message.

        UnauthorizedError       → 401
        StoreError              → 500 (driver message passed through verbatim)
        CoffeeMenuError         → 500
        RequestValidationError  → 400 (malformed JSON body, e.g. a non-numeric price)

    Any other exception is caught by UnexpectedErrorMiddleware (500).
    """

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        rid = request_id_var.get("")
        logger.warning("[%s] Unauthorized %s %s", rid, request.method, request.url.path)
        return JSONResponse(status_code=401, content={"error": exc.message})

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(CoffeeMenuError)
    async def handle_app_error(request: Request, exc: CoffeeMenuError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s", rid, exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        logger.warning("[%s] Invalid request %s %s: %s", rid, request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message or "Invalid request"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in REVERSE order of addition:
    added Errors → CORS → Logging → RequestID,
    runs RequestID → Logging → CORS → Errors.
    """
    app = FastAPI(
        title="Coffee Menu API",
        description=(
            "Menu management backend: public category and item listings, "
            "admin-gated creation and deletion."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Innermost, so its 500 still passes back through CORS
    app.add_middleware(UnexpectedErrorMiddleware)

    # Bearer tokens travel in a header, not cookies, so credentials stay off
    # and a wildcard origin is allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(categories.router)
    app.include_router(items.router)
    app.include_router(health.router)

    return app


app = create_app()
