"""FastAPI dependencies: per-request repositories and the auth gate."""
from __future__ import annotations

from fastapi import Depends, Header, Request

from ..config import Settings
from ..repository.todos import TodoRepository
from ..repository.users import UserRepository
from ..service import user_service
from ..service.user_service import AuthContext

AUTH_HEADER = "x-auth"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_todo_repository(request: Request) -> TodoRepository:
    return TodoRepository(request.app.state.db)


def get_user_repository(request: Request) -> UserRepository:
    return UserRepository(request.app.state.db)


def require_auth(
    x_auth: str | None = Header(None, alias=AUTH_HEADER),
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
) -> AuthContext:
    """Resolve the `x-auth` header or short-circuit the request with 401."""
    return user_service.authenticate(repo=repo, settings=settings, token=x_auth)
