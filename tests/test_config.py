from __future__ import annotations

import pytest

from todo_api.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("MONGODB_URL", "MONGODB_DB", "BCRYPT_ROUNDS", "PASSWORD_MIN_LENGTH", "JWT_ALGORITHM"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.mongodb_url == "mongodb://localhost:27017"
    assert settings.mongodb_db == "TodoApp"
    assert settings.jwt_algorithm == "HS256"
    assert settings.bcrypt_rounds == 10
    assert settings.password_min_length == 6


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("MONGODB_DB", "other")
    monkeypatch.setenv("BCRYPT_ROUNDS", "12")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.mongodb_db == "other"
    assert settings.bcrypt_rounds == 12
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("BCRYPT_ROUNDS", "abc"),
        ("BCRYPT_ROUNDS", "3"),
        ("BCRYPT_ROUNDS", "21"),
        ("PASSWORD_MIN_LENGTH", "x"),
        ("PASSWORD_MIN_LENGTH", "0"),
    ],
)
def test_rejects_invalid_numbers(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        get_settings()
