from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from ..repository.todos import TodoRepository
from ..service import todo_service
from .deps import get_todo_repository
from .models import (
    TodoCreateRequest,
    TodoListResponse,
    TodoOut,
    TodoResponse,
    TodoUpdateRequest,
)

router = APIRouter(prefix="/todos", tags=["todos"])


@router.post("", response_model=TodoOut, summary="Create a todo")
def create_todo(
    req: TodoCreateRequest,
    repo: TodoRepository = Depends(get_todo_repository),
) -> TodoOut:
    todo = todo_service.create_todo(repo=repo, text=req.text)
    return TodoOut.from_domain(todo)


@router.get("", response_model=TodoListResponse, summary="List all todos")
def list_todos(repo: TodoRepository = Depends(get_todo_repository)) -> TodoListResponse:
    todos = todo_service.list_todos(repo=repo)
    return TodoListResponse(todos=[TodoOut.from_domain(t) for t in todos])


@router.get("/{todo_id}", response_model=TodoResponse, summary="Fetch one todo")
def get_todo(
    todo_id: str,
    repo: TodoRepository = Depends(get_todo_repository),
) -> TodoResponse:
    todo = todo_service.get_todo(repo=repo, todo_id=todo_id)
    return TodoResponse(todo=TodoOut.from_domain(todo))


@router.delete("/{todo_id}", response_model=TodoResponse, summary="Delete a todo")
def delete_todo(
    todo_id: str,
    repo: TodoRepository = Depends(get_todo_repository),
) -> TodoResponse:
    """Delete the todo and echo it back."""
    todo = todo_service.delete_todo(repo=repo, todo_id=todo_id)
    return TodoResponse(todo=TodoOut.from_domain(todo))


@router.patch("/{todo_id}", response_model=TodoResponse, summary="Update text/completion")
def update_todo(
    todo_id: str,
    req: TodoUpdateRequest | None = Body(default=None),
    repo: TodoRepository = Depends(get_todo_repository),
) -> TodoResponse:
    """A missing body counts as `{}`: completion is cleared, text is kept."""
    if req is None:
        req = TodoUpdateRequest()
    todo = todo_service.update_todo(
        repo=repo,
        todo_id=todo_id,
        text=req.text,
        text_set="text" in req.model_fields_set,
        completed=req.completed,
    )
    return TodoResponse(todo=TodoOut.from_domain(todo))
