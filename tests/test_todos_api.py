"""API tests for the /todos endpoints."""
from __future__ import annotations

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from todo_api.repository.todos import TodoRepository


class TestCreateTodo:
    def test_creates_todo(self, client: TestClient, db):
        text = "Test todo text"

        response = client.post("/todos", json={"text": text})

        assert response.status_code == 200
        body = response.json()
        assert body["text"] == text
        assert body["completed"] is False
        assert body["completedAt"] is None
        assert ObjectId.is_valid(body["_id"])

        stored = list(db["todos"].find({"text": text}))
        assert len(stored) == 1
        assert stored[0]["text"] == text

    def test_created_todo_can_be_fetched(self, client: TestClient):
        todo_id = client.post("/todos", json={"text": "fetch me"}).json()["_id"]

        response = client.get(f"/todos/{todo_id}")

        assert response.status_code == 200
        todo = response.json()["todo"]
        assert todo["text"] == "fetch me"
        assert todo["completed"] is False
        assert todo["completedAt"] is None

    def test_trims_surrounding_whitespace(self, client: TestClient):
        response = client.post("/todos", json={"text": "  padded  "})

        assert response.status_code == 200
        assert response.json()["text"] == "padded"

    def test_rejects_empty_text(self, client: TestClient, db):
        response = client.post("/todos", json={"text": ""})

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "validation_error"
        assert db["todos"].count_documents({}) == 2

    def test_rejects_whitespace_only_text(self, client: TestClient, db):
        response = client.post("/todos", json={"text": "   "})

        assert response.status_code == 400
        assert db["todos"].count_documents({}) == 2

    def test_rejects_missing_or_non_string_text(self, client: TestClient, db):
        assert client.post("/todos", json={}).status_code == 400
        assert client.post("/todos", json={"text": 42}).status_code == 400
        assert db["todos"].count_documents({}) == 2


class TestListTodos:
    def test_lists_all_todos(self, client: TestClient):
        response = client.get("/todos")

        assert response.status_code == 200
        assert len(response.json()["todos"]) == 2

    def test_count_tracks_successful_creates(self, client: TestClient):
        client.post("/todos", json={"text": "one"})
        client.post("/todos", json={"text": ""})
        client.post("/todos", json={"text": "two"})

        first = client.get("/todos").json()["todos"]
        second = client.get("/todos").json()["todos"]

        assert len(first) == 4
        assert first == second


class TestGetTodo:
    def test_returns_todo(self, client: TestClient, todos):
        response = client.get(f"/todos/{todos[0].id}")

        assert response.status_code == 200
        assert response.json()["todo"]["text"] == todos[0].text

    def test_404_when_missing(self, client: TestClient):
        response = client.get(f"/todos/{ObjectId()}")

        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "not_found"

    def test_404_for_non_object_id(self, client: TestClient):
        assert client.get("/todos/1234").status_code == 404


class TestDeleteTodo:
    def test_removes_todo(self, client: TestClient, todos, db):
        hex_id = str(todos[1].id)

        response = client.delete(f"/todos/{hex_id}")

        assert response.status_code == 200
        assert response.json()["todo"]["_id"] == hex_id
        assert db["todos"].find_one({"_id": todos[1].id}) is None
        assert client.get(f"/todos/{hex_id}").status_code == 404
        assert len(client.get("/todos").json()["todos"]) == 1

    def test_404_when_missing(self, client: TestClient):
        assert client.delete(f"/todos/{ObjectId()}").status_code == 404

    def test_404_for_invalid_id(self, client: TestClient, db):
        assert client.delete("/todos/asdfagadsg").status_code == 404
        assert db["todos"].count_documents({}) == 2


class TestUpdateTodo:
    def test_updates_text_and_completion(self, client: TestClient, todos):
        response = client.patch(
            f"/todos/{todos[0].id}", json={"completed": True, "text": "New text"}
        )

        assert response.status_code == 200
        todo = response.json()["todo"]
        assert todo["text"] == "New text"
        assert todo["completed"] is True
        assert isinstance(todo["completedAt"], int)

    def test_clears_completed_at_when_not_completed(self, client: TestClient, todos):
        response = client.patch(f"/todos/{todos[1].id}", json={"completed": False})

        assert response.status_code == 200
        todo = response.json()["todo"]
        assert todo["completed"] is False
        assert todo["completedAt"] is None

    def test_completion_round_trip(self, client: TestClient, todos):
        path = f"/todos/{todos[0].id}"

        done = client.patch(path, json={"completed": True}).json()["todo"]
        reopened = client.patch(path, json={"completed": False}).json()["todo"]

        assert done["completedAt"] is not None
        assert reopened["completedAt"] is None
        assert reopened["text"] == todos[0].text

    def test_absent_completed_means_not_completed(self, client: TestClient, todos):
        response = client.patch(f"/todos/{todos[1].id}", json={"text": "renamed"})

        todo = response.json()["todo"]
        assert todo["text"] == "renamed"
        assert todo["completed"] is False
        assert todo["completedAt"] is None

    def test_rejects_blank_text(self, client: TestClient, todos, db):
        response = client.patch(f"/todos/{todos[0].id}", json={"text": "  "})

        assert response.status_code == 400
        assert db["todos"].find_one({"_id": todos[0].id})["text"] == todos[0].text

    def test_rejects_non_boolean_completed(self, client: TestClient, todos):
        response = client.patch(f"/todos/{todos[0].id}", json={"completed": "yes"})

        assert response.status_code == 400

    def test_missing_body_clears_completion(self, client: TestClient, todos):
        response = client.patch(f"/todos/{todos[1].id}")

        assert response.status_code == 200
        todo = response.json()["todo"]
        assert todo["text"] == todos[1].text
        assert todo["completed"] is False
        assert todo["completedAt"] is None

    def test_404_for_invalid_or_missing_id(self, client: TestClient):
        assert client.patch("/todos/1234", json={"completed": True}).status_code == 404
        assert client.patch(f"/todos/{ObjectId()}", json={"completed": True}).status_code == 404


class TestDatabaseFailure:
    def test_driver_error_maps_to_500(self, client: TestClient, monkeypatch):
        def boom(self):
            raise ServerSelectionTimeoutError("no servers")

        monkeypatch.setattr(TodoRepository, "find_all", boom)

        response = client.get("/todos")

        assert response.status_code == 500
        assert response.json()["detail"]["error_code"] == "internal_error"

    def test_unexpected_error_maps_to_json_500(self, client: TestClient, monkeypatch):
        def boom(self, todo_id):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(TodoRepository, "get_by_id", boom)

        response = client.get(f"/todos/{ObjectId()}", headers={"X-Request-ID": "req-500"})

        assert response.status_code == 500
        assert response.json() == {
            "detail": {"error_code": "internal_error", "error_message": "Internal server error"}
        }
        assert response.headers["X-Request-ID"] == "req-500"
