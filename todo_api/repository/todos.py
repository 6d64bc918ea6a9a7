from __future__ import annotations

from typing import Any

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from ..db import TODOS
from ..domain.todo import Todo

__all__ = ["TodoRepository"]


class TodoRepository:
    """Persistence for todo documents.

    Lookups by id return None when nothing matches; the caller decides what a
    miss means.
    """

    def __init__(self, db: Database) -> None:
        self._col: Collection = db[TODOS]

    def create(self, text: str) -> Todo:
        doc = {"text": text, "completed": False, "completedAt": None}
        result = self._col.insert_one(doc)
        return Todo(id=result.inserted_id, text=text)

    def find_all(self) -> list[Todo]:
        return [Todo.from_document(d) for d in self._col.find()]

    def get_by_id(self, todo_id: ObjectId) -> Todo | None:
        doc = self._col.find_one({"_id": todo_id})
        return Todo.from_document(doc) if doc else None

    def delete_by_id(self, todo_id: ObjectId) -> Todo | None:
        doc = self._col.find_one_and_delete({"_id": todo_id})
        return Todo.from_document(doc) if doc else None

    def update_by_id(self, todo_id: ObjectId, fields: dict[str, Any]) -> Todo | None:
        """Apply `$set: fields` and return the updated todo."""
        doc = self._col.find_one_and_update(
            {"_id": todo_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return Todo.from_document(doc) if doc else None
