#!/usr/bin/env python3
"""Reset a database to a known two-todo / two-user state.

Used by the test-suite fixtures and, via `todo-api-seed`, to prepare a local
database before running the smoke runner. The first user holds one valid
auth token; the second holds none.
"""
from __future__ import annotations

import argparse
import os
from dataclasses import replace

from bson import ObjectId
from pymongo.database import Database

from .config import Settings, get_settings
from .db import TODOS, USERS, connect, ensure_indexes
from .domain.passwords import hash_password
from .domain.todo import Todo, now_ms
from .domain.tokens import encode_auth_token
from .domain.user import AuthToken, TokenList, User
from .logging_conf import get_logger, setup_logging

logger = get_logger("seed")

SEED_PASSWORD = "userOnePass"


def build_todos() -> list[Todo]:
    return [
        Todo(id=ObjectId(), text="First test todo"),
        Todo(id=ObjectId(), text="Second test todo", completed=True, completed_at=now_ms()),
    ]


def build_users(settings: Settings) -> list[User]:
    first_id = ObjectId()
    token = encode_auth_token(
        user_id=str(first_id), secret=settings.jwt_secret, algorithm=settings.jwt_algorithm
    )
    return [
        User(
            id=first_id,
            email="andrew@example.com",
            password_hash=hash_password(SEED_PASSWORD, rounds=settings.bcrypt_rounds),
            tokens=TokenList([AuthToken(token=token)]),
        ),
        User(
            id=ObjectId(),
            email="jen@example.com",
            password_hash=hash_password("userTwoPass", rounds=settings.bcrypt_rounds),
        ),
    ]


def populate_todos(db: Database, todos: list[Todo] | None = None) -> list[Todo]:
    """Replace every todo with the seed set and return it."""
    todos = todos if todos is not None else build_todos()
    db[TODOS].delete_many({})
    db[TODOS].insert_many([t.to_document() for t in todos])
    return todos


def populate_users(
    db: Database, settings: Settings, users: list[User] | None = None
) -> list[User]:
    """Replace every user with the seed set and return it."""
    users = users if users is not None else build_users(settings)
    db[USERS].delete_many({})
    db[USERS].insert_many([u.to_document() for u in users])
    return users


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the todo API database")
    parser.add_argument("--mongodb-url", default=os.getenv("MONGODB_URL"))
    parser.add_argument("--db", default=os.getenv("MONGODB_DB"))
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level)
    if args.mongodb_url or args.db:
        settings = replace(
            settings,
            mongodb_url=args.mongodb_url or settings.mongodb_url,
            mongodb_db=args.db or settings.mongodb_db,
        )

    db = connect(settings)
    ensure_indexes(db)
    todos = populate_todos(db)
    users = populate_users(db, settings)
    logger.info(
        "seed.done",
        extra={"event": "seed_done", "todos": len(todos), "users": len(users), "database": db.name},
    )


if __name__ == "__main__":
    main()
