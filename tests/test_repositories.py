from __future__ import annotations

import pytest
from bson import ObjectId

from todo_api.db import ensure_indexes
from todo_api.domain.errors import ConflictError
from todo_api.domain.user import AuthToken
from todo_api.repository import TodoRepository, UserRepository


@pytest.fixture
def todo_repo(db) -> TodoRepository:
    return TodoRepository(db)


@pytest.fixture
def user_repo(db) -> UserRepository:
    ensure_indexes(db)
    return UserRepository(db)


class TestTodoRepository:
    def test_create_and_get(self, todo_repo):
        todo = todo_repo.create("write tests")

        fetched = todo_repo.get_by_id(todo.id)

        assert fetched == todo
        assert fetched.completed is False
        assert fetched.completed_at is None

    def test_misses_return_none(self, todo_repo):
        missing = ObjectId()
        assert todo_repo.get_by_id(missing) is None
        assert todo_repo.delete_by_id(missing) is None
        assert todo_repo.update_by_id(missing, {"text": "x"}) is None

    def test_update_returns_new_state(self, todo_repo):
        todo = todo_repo.create("a")

        updated = todo_repo.update_by_id(todo.id, {"completed": True, "completedAt": 99})

        assert (updated.completed, updated.completed_at) == (True, 99)
        assert updated.text == "a"

    def test_delete_returns_removed(self, todo_repo):
        todo = todo_repo.create("gone")

        assert todo_repo.delete_by_id(todo.id) == todo
        assert todo_repo.find_all() == []


class TestUserRepository:
    def test_create_and_lookup(self, user_repo):
        user = user_repo.create("a@example.com", "hash")

        assert user_repo.find_by_id(user.id).email == "a@example.com"
        assert user_repo.find_by_email("a@example.com").id == user.id
        assert user_repo.find_by_email("b@example.com") is None

    def test_duplicate_email_conflicts(self, user_repo):
        user_repo.create("a@example.com", "hash")

        with pytest.raises(ConflictError):
            user_repo.create("a@example.com", "other")

    def test_token_lifecycle(self, user_repo):
        user = user_repo.create("a@example.com", "hash")
        user_repo.add_token(user, AuthToken(token="t1"))
        user_repo.add_token(user, AuthToken(token="t2"))

        assert user_repo.find_by_token(user.id, "t1").id == user.id
        assert user_repo.find_by_token(ObjectId(), "t1") is None

        assert user_repo.delete_token(user, "t1") is True
        assert user_repo.delete_token(user, "t1") is False
        assert user_repo.find_by_token(user.id, "t1") is None
        assert [t.token for t in user_repo.find_by_id(user.id).tokens] == ["t2"]
        assert [t.token for t in user.tokens] == ["t2"]
