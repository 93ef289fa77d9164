"""
MemoPad — FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires settings, the memo store, middleware, exception
       handlers and routes, and returns a ready FastAPI instance.
Who:   uvicorn (`uvicorn memopad.main:app`), the `memopad` console script
       and the test suite (one fresh app per test).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access Log → CORS        │
    │                                                     │
    │  Routes:                                            │
    │    /memos, /memo, /memo/{id}     (memos.py)         │
    │    /api-docs, /swagger.json      (FastAPI built-in) │
    │    /, /server-info, /<file>      (pages.py)         │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError, MalformedBodyError → 400        │
    │    NotFoundError, unmatched route      → 404        │
    │    anything else                       → 500        │
    └─────────────────────────────────────────────────────┘

State:
    app.state.store        MemoStore (process memory only)
    app.state.server_info  Detected host/port (see network.py)
    app.state.static_root  Directory served for pages and assets
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from memopad import __version__
from memopad.config import Settings, settings
from memopad.exceptions import (
    ROUTE_NOT_FOUND_MESSAGE,
    MalformedBodyError,
    NotFoundError,
    ValidationError,
)
from memopad.middleware.logging import RequestLoggingMiddleware
from memopad.middleware.request_id import RequestIDMiddleware, request_id_var
from memopad.network import detect_server_info, server_urls
from memopad.routes import memos, pages
from memopad.schemas.memo import ServerInfo
from memopad.services.memo_store import MemoStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = settings.log_level) -> None:
    """
    Configure console logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] memopad.services.memo_store: Memo created: ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # memopad.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and print where the server can be reached.
    Shutdown: report how many memos are discarded with the process.
    """
    setup_logging(app.state.config.log_level)
    info: ServerInfo = app.state.server_info
    base_url = f"http://{info.host}:{info.port}"

    logger.info("=" * 60)
    logger.info("MemoPad server is running")
    logger.info("Server address: %s", base_url)
    logger.info("Local access:   http://localhost:%d", info.port)
    logger.info("API docs:       %s/api-docs", base_url)
    logger.info("Server info:    %s/server-info", base_url)
    logger.info("Environment:    %s", info.environment)
    logger.info("=" * 60)

    yield

    logger.info("MemoPad shutting down; %d memo(s) discarded.", len(app.state.store))


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _text(status_code: int, message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to plain-text responses.

    Handler hierarchy:
        ValidationError         → 400 (Korean message)
        MalformedBodyError      → 400 (Korean message)
        NotFoundError           → 404
        HTTPException 404/405   → 404 "NOT FOUND" (unmatched path or method)
        HTTPException (other)   → its own status and detail
        Exception (fallback)    → 500 with the exception message
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s %s", request_id_var.get(""), exc.message, exc.context)
        return _text(400, exc.message)

    @app.exception_handler(MalformedBodyError)
    async def handle_malformed_body(request: Request, exc: MalformedBodyError):
        logger.warning("[%s] Malformed body on %s %s", request_id_var.get(""), request.method, request.url.path)
        return _text(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _text(404, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return _text(404, ROUTE_NOT_FOUND_MESSAGE)
        return _text(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Internal tool: the raw fault message is returned to the caller.

        Runs outside the middleware stack, so the request ID is read back
        from request.state (set by RequestIDMiddleware) and re-attached.
        """
        rid = getattr(request.state, "request_id", "")
        logger.error(
            "[%s] Unexpected error on %s %s: %s",
            rid,
            request.method,
            request.url.path,
            exc,
            exc_info=True,
        )
        response = _text(500, str(exc) or type(exc).__name__)
        if rid:
            response.headers["X-Request-ID"] = rid
        return response


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    store: Optional[MemoStore] = None,
    config: Settings = settings,
    server_info: Optional[ServerInfo] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store:       Memo store to serve; a new empty one when omitted
        config:      Settings (defaults to the environment-loaded singleton)
        server_info: Pre-resolved address; detected from `config` when omitted

    Returns:
        Fully configured FastAPI instance.
    """
    if server_info is None:
        server_info = detect_server_info(config)

    app = FastAPI(
        title="메모 관리 REST API",
        description="메모 작성, 조회, 수정, 삭제를 위한 REST API 문서",
        version=__version__,
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/swagger.json",
        servers=server_urls(server_info),
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.store = store if store is not None else MemoStore()
    app.state.server_info = server_info
    app.state.static_root = Path(config.static_root)

    # ── Middleware (last added runs first) ────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # pages.router holds the static catch-all, so it goes last
    app.include_router(memos.router)
    app.include_router(pages.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve `app` on the detected host and port."""
    info: ServerInfo = app.state.server_info
    uvicorn.run(app, host=info.host, port=info.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
