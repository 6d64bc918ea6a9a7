"""Shared fixtures: an in-memory MongoDB reseeded for every test.

Each test gets a fresh `mongomock` database holding two todos and two users
(the first user holds one valid auth token), and a TestClient bound to an app
built on that database. The client is entered as a context manager so the
startup hook creates the same indexes production does.
"""
from __future__ import annotations

import mongomock
import pytest
from fastapi.testclient import TestClient

from todo_api.config import Settings
from todo_api.domain.todo import Todo
from todo_api.domain.user import User
from todo_api.main import create_app
from todo_api.seed import populate_todos, populate_users


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mongodb_url="mongodb://unused",
        mongodb_db="todo_test",
        jwt_secret="test-secret",
        jwt_algorithm="HS256",
        bcrypt_rounds=4,
        password_min_length=6,
        log_level="INFO",
        app_version="test",
    )


@pytest.fixture
def db():
    client = mongomock.MongoClient()
    yield client["todo_test"]
    client.close()


@pytest.fixture
def todos(db) -> list[Todo]:
    return populate_todos(db)


@pytest.fixture
def users(db, settings: Settings) -> list[User]:
    return populate_users(db, settings)


@pytest.fixture
def client(settings: Settings, db, todos, users):
    app = create_app(settings=settings, database=db)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_token(users: list[User]) -> str:
    """The token the first seeded user was created with."""
    return list(users[0].tokens)[0].token
