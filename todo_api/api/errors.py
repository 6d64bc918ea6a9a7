"""Translate domain and driver failures into HTTP responses."""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from ..domain.errors import ApiError, AuthenticationError, UnexpectedError, ValidationError
from ..logging_conf import get_logger

logger = get_logger("api.errors")


def _error_body(code: str, message: str, errors: list[dict] | None = None) -> dict:
    detail: dict = {"error_code": code, "error_message": message}
    if errors:
        detail["errors"] = errors
    return {"detail": detail}


def error_response(exc: ApiError) -> JSONResponse:
    """Render an ApiError; 5xx bodies never echo the underlying message."""
    if isinstance(exc, AuthenticationError):
        # 401 bodies are always empty
        return JSONResponse(status_code=exc.status_code, content={})
    if exc.status_code >= 500:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, "Internal server error"),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, str(exc), exc.errors),
    )


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request.failed",
            exc_info=exc,
            extra={"event": "request_failed", "path": request.url.path, "error_code": exc.code},
        )
    return error_response(exc)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(ValidationError.code, "request body is invalid", errors),
    )


async def handle_database_error(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error(
        "db.error",
        exc_info=exc,
        extra={"event": "db_error", "path": request.url.path, "method": request.method},
    )
    return error_response(UnexpectedError(str(exc)))


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(PyMongoError, handle_database_error)
