from __future__ import annotations

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from .config import Settings
from .logging_conf import get_logger

__all__ = [
    "TODOS",
    "USERS",
    "connect",
    "ensure_indexes",
]

TODOS = "todos"
USERS = "users"

logger = get_logger("db")


def connect(settings: Settings) -> Database:
    """Return the configured database; the client connects on first use."""
    client: MongoClient = MongoClient(settings.mongodb_url, connect=False)
    return client[settings.mongodb_db]


def ensure_indexes(db: Database) -> None:
    """Create the indexes the API relies on (idempotent)."""
    db[USERS].create_index([("email", ASCENDING)], unique=True, name="email_unique")
    db[USERS].create_index([("tokens.token", ASCENDING)], name="tokens_token")
    logger.info("db.indexes", extra={"event": "db_indexes", "database": db.name})
