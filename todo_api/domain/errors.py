"""Error taxonomy shared by repositories, services and the HTTP layer.

Every error carries a stable machine `code` and the HTTP status it maps to,
so the API layer can render them without knowing individual types.
"""
from __future__ import annotations

from typing import Any

__all__ = [
    "ApiError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "AuthenticationError",
    "UnexpectedError",
]


class ApiError(Exception):
    """Base class for errors that translate to an HTTP response."""

    code: str = "api_error"
    status_code: int = 500

    def __init__(self, message: str = "", *, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors


class ValidationError(ApiError):
    """Malformed or missing request fields."""

    code = "validation_error"
    status_code = 400


class ConflictError(ApiError):
    """A unique field (e.g. email) is already taken."""

    code = "duplicate_key"
    status_code = 400


class NotFoundError(ApiError):
    """Identifier malformed or no matching document."""

    code = "not_found"
    status_code = 404


class AuthenticationError(ApiError):
    code = "unauthenticated"
    status_code = 401


class UnexpectedError(ApiError):
    code = "internal_error"
    status_code = 500
