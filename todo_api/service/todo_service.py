from __future__ import annotations

from typing import Any

from ..domain.errors import NotFoundError, ValidationError
from ..domain.ids import parse_object_id
from ..domain.todo import Todo, completion_fields, normalize_text
from ..logging_conf import get_logger
from ..repository.todos import TodoRepository

logger = get_logger("service.todo")

_RESOURCE = "todo"


# ------------------------
# Use-cases
# ------------------------

def create_todo(*, repo: TodoRepository, text: object) -> Todo:
    """Validate `text` and persist a new, not-yet-completed todo."""
    try:
        clean = normalize_text(text)
    except ValueError as e:
        raise ValidationError(str(e), errors=[{"loc": ["body", "text"], "msg": str(e)}]) from e
    todo = repo.create(clean)
    logger.info("todo.create", extra={"event": "todo_create", "todo_id": str(todo.id)})
    return todo


def list_todos(*, repo: TodoRepository) -> list[Todo]:
    todos = repo.find_all()
    logger.info("todo.list", extra={"event": "todo_list", "count": len(todos)})
    return todos


def get_todo(*, repo: TodoRepository, todo_id: str) -> Todo:
    oid = parse_object_id(todo_id, resource=_RESOURCE)
    todo = repo.get_by_id(oid)
    if todo is None:
        raise NotFoundError("todo not found")
    return todo


def delete_todo(*, repo: TodoRepository, todo_id: str) -> Todo:
    """Delete and return the todo; it cannot be fetched afterwards."""
    oid = parse_object_id(todo_id, resource=_RESOURCE)
    todo = repo.delete_by_id(oid)
    if todo is None:
        raise NotFoundError("todo not found")
    logger.info("todo.delete", extra={"event": "todo_delete", "todo_id": todo_id})
    return todo


def update_todo(
    *,
    repo: TodoRepository,
    todo_id: str,
    text: object = None,
    text_set: bool = False,
    completed: bool | None = None,
) -> Todo:
    """Apply a partial update.

    `text_set` distinguishes "text omitted" from "text sent as null"; a
    provided text must still be a non-empty string. The completion pair is
    always rewritten from `completed` (absent means not completed).
    """
    oid = parse_object_id(todo_id, resource=_RESOURCE)

    fields: dict[str, Any] = {}
    if text_set:
        try:
            fields["text"] = normalize_text(text)
        except ValueError as e:
            raise ValidationError(
                str(e), errors=[{"loc": ["body", "text"], "msg": str(e)}]
            ) from e
    fields.update(completion_fields(completed))

    todo = repo.update_by_id(oid, fields)
    if todo is None:
        raise NotFoundError("todo not found")
    logger.info(
        "todo.update",
        extra={"event": "todo_update", "todo_id": todo_id, "completed": todo.completed},
    )
    return todo
