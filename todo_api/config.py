"""Environment-driven settings for the API and its tooling.

Every value is read from the process environment with a development default.
`get_settings()` caches the result; tests call `get_settings.cache_clear()`
after patching the environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

__all__ = [
    "Settings",
    "get_settings",
    "get_bcrypt_rounds_from_env",
    "get_password_min_length_from_env",
]

# Development-only fallback; production deployments must set JWT_SECRET.
_DEV_SECRET = "abc123"


@dataclass(frozen=True)
class Settings:
    mongodb_url: str
    mongodb_db: str
    jwt_secret: str
    jwt_algorithm: str
    bcrypt_rounds: int
    password_min_length: int
    log_level: str
    app_version: str


def get_bcrypt_rounds_from_env() -> int:
    """Return BCRYPT_ROUNDS from environment, defaulting to 10."""
    raw = os.getenv("BCRYPT_ROUNDS", "10")
    try:
        val = int(raw, 10)
    except ValueError as e:
        raise ValueError("BCRYPT_ROUNDS must be an integer") from e
    if not (4 <= val <= 20):
        raise ValueError("BCRYPT_ROUNDS must be in [4,20]")
    return val


def get_password_min_length_from_env() -> int:
    """Return PASSWORD_MIN_LENGTH from environment, defaulting to 6."""
    raw = os.getenv("PASSWORD_MIN_LENGTH", "6")
    try:
        val = int(raw, 10)
    except ValueError as e:
        raise ValueError("PASSWORD_MIN_LENGTH must be an integer") from e
    if val < 1:
        raise ValueError("PASSWORD_MIN_LENGTH must be at least 1")
    return val


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        mongodb_url=os.getenv("MONGODB_URL", "mongodb://localhost:27017"),
        mongodb_db=os.getenv("MONGODB_DB", "TodoApp"),
        jwt_secret=os.getenv("JWT_SECRET", _DEV_SECRET),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        bcrypt_rounds=get_bcrypt_rounds_from_env(),
        password_min_length=get_password_min_length_from_env(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        app_version=os.getenv("APP_VERSION", "0.1.0"),
    )
