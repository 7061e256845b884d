"""
Document Store Gateway — FastAPI Application Factory
======================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers, routes and the
       static file mount, and returns the app. The store handle is opened by
       the lifespan handler, or injected directly (tests).
Who:   Called by uvicorn (`gateway.main:app`) and by `python -m gateway`.

Application Layout:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │    GET /                    welcome text            │
    │    /collections/{name}[/{id}]  list/get/insert/...  │
    │    /Images/*                static files            │
    │                                                     │
    │  Exception Handlers:                                │
    │    GatewayError → status + JSON   404/405 → text    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the document store (fatal on failure)
    3. Log startup complete

    Shutdown:
    1. Close the store client
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from gateway import __version__
from gateway.config import Settings, settings as default_settings
from gateway.database import StoreHandle, connect_store
from gateway.exceptions import GatewayError
from gateway.middleware.logging import RequestLoggingMiddleware
from gateway.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from gateway.routes import collections, root

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "File Not Found!"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before the store connection is attempted.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # RequestLoggingMiddleware already writes one line per request.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store connection before serving and close it afterwards.

    uvicorn runs this before binding its socket, so no request is accepted
    until the connection succeeds. A StoreConnectionError propagates and
    aborts startup.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Document Store Gateway %s starting up...", __version__)

    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        app.state.store = await connect_store(
            app_settings.connection_descriptor(),
            app_settings.db_name,
        )

    logger.info("App started on port %d", app_settings.port)

    yield

    logger.info("Document Store Gateway shutting down...")
    if owns_store:
        await app.state.store.close()
        app.state.store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to responses.

    Handler hierarchy:
        GatewayError        → exc.status_code, JSON {error, message, request_id}
        HTTPException 404   → 404 "File Not Found!" (plain text)
        HTTPException 405   → 404 "File Not Found!" (unknown verb on a known path)
        Exception           → 500 JSON (unexpected errors)

    Store errors and malformed ids are not distinguished in the response.
    """

    @app.exception_handler(GatewayError)
    async def handle_gateway_error(request: Request, exc: GatewayError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s",
            rid,
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return PlainTextResponse(NOT_FOUND_BODY, status_code=404)
        return await http_exception_handler(request, exc)

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
    app_settings: Optional[Settings] = None,
    store: Optional[StoreHandle] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the process-wide settings.
        store:        An already-open store handle. When given, the lifespan
                      does not connect and does not close it.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Document Store Gateway",
        description="REST access to the collections of a MongoDB database.",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = app_settings
    app.state.store = store

    # Last added runs first: RequestID → Logging → CORS → routes.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(root.router)
    app.include_router(collections.router)
    static_dir = Path(app_settings.static_dir)
    if static_dir.is_dir():
        app.mount(
            app_settings.static_prefix,
            StaticFiles(directory=static_dir),
            name="static",
        )
    else:
        # Requests under the prefix then fall through to the 404 handler.
        logger.warning(
            "Static directory %s not found; %s is not served",
            static_dir,
            app_settings.static_prefix,
        )

    return app


app = create_app()
