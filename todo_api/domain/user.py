from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from bson import ObjectId

__all__ = [
    "AUTH_ACCESS",
    "AuthToken",
    "TokenList",
    "User",
]

AUTH_ACCESS = "auth"


@dataclass(frozen=True)
class AuthToken:
    """One issued credential embedded in a user record."""

    token: str
    access: str = AUTH_ACCESS

    def to_document(self) -> dict[str, str]:
        return {"access": self.access, "token": self.token}


class TokenList:
    """Ordered collection of the tokens a user currently holds.

    Insertion order is preserved; removing a token drops every entry with
    that exact value.
    """

    def __init__(self, tokens: Iterable[AuthToken] = ()) -> None:
        self._tokens: list[AuthToken] = list(tokens)

    @classmethod
    def from_documents(cls, docs: Iterable[dict[str, Any]] | None) -> "TokenList":
        return cls(
            AuthToken(token=d["token"], access=d.get("access", AUTH_ACCESS)) for d in docs or ()
        )

    def add(self, token: AuthToken) -> None:
        self._tokens.append(token)

    def remove(self, token: str) -> bool:
        """Drop `token`; return whether anything was removed."""
        kept = [t for t in self._tokens if t.token != token]
        removed = len(kept) != len(self._tokens)
        self._tokens = kept
        return removed

    def to_documents(self) -> list[dict[str, str]]:
        return [t.to_document() for t in self._tokens]

    def __contains__(self, token: object) -> bool:
        return any(t.token == token for t in self._tokens)

    def __iter__(self) -> Iterator[AuthToken]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)


@dataclass
class User:
    id: ObjectId
    email: str
    password_hash: str = field(repr=False)
    tokens: TokenList = field(default_factory=TokenList)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "User":
        return cls(
            id=doc["_id"],
            email=doc["email"],
            password_hash=doc["password"],
            tokens=TokenList.from_documents(doc.get("tokens")),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "email": self.email,
            "password": self.password_hash,
            "tokens": self.tokens.to_documents(),
        }

    def public(self) -> dict[str, str]:
        """The only user fields ever sent to clients."""
        return {"_id": str(self.id), "email": self.email}
