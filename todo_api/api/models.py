from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, field_validator

from ..domain.todo import Todo
from ..domain.user import User


# ------------------------
# Requests
# ------------------------
class TodoCreateRequest(BaseModel):
    """Body of POST /todos. Blank text is rejected by the service."""
    text: str


class TodoUpdateRequest(BaseModel):
    """Body of PATCH /todos/{id}; unknown keys are ignored."""
    text: str | None = None
    completed: StrictBool | None = None


class UserCredentials(BaseModel):
    """Body of POST /users and POST /users/login."""
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


# ------------------------
# Responses
# ------------------------
class TodoOut(BaseModel):
    """A todo as returned to clients."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    text: str
    completed: bool
    completed_at: int | None = Field(None, alias="completedAt")

    @classmethod
    def from_domain(cls, todo: Todo) -> "TodoOut":
        return cls(
            id=str(todo.id),
            text=todo.text,
            completed=todo.completed,
            completed_at=todo.completed_at,
        )


class TodoResponse(BaseModel):
    todo: TodoOut


class TodoListResponse(BaseModel):
    todos: list[TodoOut]


class UserOut(BaseModel):
    """Public user fields; the password hash and tokens never leave the server."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    email: str

    @classmethod
    def from_domain(cls, user: User) -> "UserOut":
        return cls(**user.public())
