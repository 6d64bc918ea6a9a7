from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from bson import ObjectId

__all__ = [
    "Todo",
    "now_ms",
    "normalize_text",
    "completion_fields",
]


def now_ms() -> int:
    """Return current time in epoch milliseconds."""
    return int(time.time() * 1000)


def normalize_text(text: object) -> str:
    """Trim a todo text and insist it is a non-empty string.

    Raises:
        ValueError: if the value is not a string or is blank after trimming.
    """
    if not isinstance(text, str):
        raise ValueError("text must be a string")
    stripped = text.strip()
    if not stripped:
        raise ValueError("text must not be empty")
    return stripped


def completion_fields(completed: bool | None, *, at_ms: int | None = None) -> dict[str, Any]:
    """Derive the stored `completed`/`completedAt` pair from a requested state.

    `completedAt` is set to the completion time when `completed` is true and
    cleared otherwise; an absent flag counts as not completed.
    """
    if completed is True:
        return {"completed": True, "completedAt": at_ms if at_ms is not None else now_ms()}
    return {"completed": False, "completedAt": None}


@dataclass
class Todo:
    id: ObjectId
    text: str
    completed: bool = False
    completed_at: int | None = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Todo":
        return cls(
            id=doc["_id"],
            text=doc["text"],
            completed=bool(doc.get("completed", False)),
            completed_at=doc.get("completedAt"),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "text": self.text,
            "completed": self.completed,
            "completedAt": self.completed_at,
        }
