from __future__ import annotations

from bson import ObjectId

from .errors import NotFoundError

__all__ = [
    "parse_object_id",
    "is_object_id",
]


def is_object_id(value: object) -> bool:
    """True for a 24-character hex string (the only textual ObjectId form we accept)."""
    return isinstance(value, str) and ObjectId.is_valid(value)


def parse_object_id(value: str, *, resource: str = "document") -> ObjectId:
    """Turn a path identifier into an ObjectId.

    Raises:
        NotFoundError: if the value is not a well-formed identifier. A malformed
            id can never match a document, so it is reported the same way as a
            missing one.
    """
    if not is_object_id(value):
        raise NotFoundError(f"{resource} not found")
    return ObjectId(value)
