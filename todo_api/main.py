"""FastAPI app factory: request logging, error mapping, health and API routes."""
from __future__ import annotations

import time
from collections.abc import Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pymongo.database import Database

from .api import router as api_router
from .api.errors import error_response, install_exception_handlers
from .config import Settings, get_settings
from .db import connect, ensure_indexes
from .domain.errors import UnexpectedError
from .logging_conf import get_logger, setup_logging

setup_logging(get_settings().log_level)
logger = get_logger("todo_api")


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
) -> FastAPI:
    """Build the application.

    `database` overrides the one derived from settings; tests pass an
    in-memory database here.
    """
    settings = settings or get_settings()
    app = FastAPI(title="Todo API", version=settings.app_version)
    app.state.settings = settings
    app.state.db = database if database is not None else connect(settings)

    @app.on_event("startup")
    def _on_startup() -> None:
        ensure_indexes(app.state.db)
        logger.info("startup", extra={"event": "startup", "database": app.state.db.name})

    @app.on_event("shutdown")
    def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """Log request start/end, echo X-Request-ID, render unhandled errors as a JSON 500."""
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "path": request.url.path,
                    "method": request.method,
                    "request_id": request_id,
                },
            )
            response = error_response(UnexpectedError(str(exc)))
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    install_exception_handlers(app)

    @app.get("/health", summary="Liveness check")
    def health() -> JSONResponse:
        return JSONResponse(content={"ok": True})

    app.include_router(api_router)
    return app


# ASGI entrypoint: `uvicorn todo_api.main:app --port 3000`
app = create_app()
