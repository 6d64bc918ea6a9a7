from __future__ import annotations

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from ..db import USERS
from ..domain.errors import ConflictError
from ..domain.user import AuthToken, TokenList, User

__all__ = ["UserRepository"]


class UserRepository:
    """Persistence for user documents and their embedded token lists."""

    def __init__(self, db: Database) -> None:
        self._col: Collection = db[USERS]

    def create(self, email: str, password_hash: str) -> User:
        """Insert a new user with no tokens.

        Raises:
            ConflictError: if the email is already registered.
        """
        if self._col.find_one({"email": email}, {"_id": 1}) is not None:
            raise ConflictError("email already in use")
        user = User(id=ObjectId(), email=email, password_hash=password_hash, tokens=TokenList())
        # the unique index still arbitrates concurrent registrations
        try:
            self._col.insert_one(user.to_document())
        except DuplicateKeyError as e:
            raise ConflictError("email already in use") from e
        return user

    def find_by_email(self, email: str) -> User | None:
        doc = self._col.find_one({"email": email})
        return User.from_document(doc) if doc else None

    def find_by_id(self, user_id: ObjectId) -> User | None:
        doc = self._col.find_one({"_id": user_id})
        return User.from_document(doc) if doc else None

    def find_by_token(self, user_id: ObjectId, token: str) -> User | None:
        """The user `user_id`, but only while it still holds `token`."""
        doc = self._col.find_one(
            {"_id": user_id, "tokens": {"$elemMatch": {"token": token, "access": "auth"}}}
        )
        return User.from_document(doc) if doc else None

    def add_token(self, user: User, token: AuthToken) -> None:
        self._col.update_one({"_id": user.id}, {"$push": {"tokens": token.to_document()}})
        user.tokens.add(token)

    def delete_token(self, user: User, token: str) -> bool:
        """Remove `token` from the user; return whether it was held."""
        result = self._col.update_one({"_id": user.id}, {"$pull": {"tokens": {"token": token}}})
        user.tokens.remove(token)
        return result.modified_count > 0
