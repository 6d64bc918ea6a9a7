from __future__ import annotations

from uuid import uuid4

from jose import JWTError, jwt
from pydantic import BaseModel, Field, ValidationError

from .ids import is_object_id
from .user import AUTH_ACCESS

__all__ = [
    "TokenPayload",
    "TokenError",
    "InvalidSignatureError",
    "MalformedTokenError",
    "encode_auth_token",
    "decode_auth_token",
]


# ------------------------
# Errors
# ------------------------
class TokenError(ValueError):
    """Base class for auth-token errors.

    The `code` attribute is what gets logged when a request is rejected.
    """

    code: str = "invalid_token"


class InvalidSignatureError(TokenError):
    code = "invalid_signature"


class MalformedTokenError(TokenError):
    code = "malformed_token"


# ------------------------
# Schema
# ------------------------
class TokenPayload(BaseModel):
    """Claims signed into every auth token."""

    sub: str = Field(..., min_length=24, max_length=24)  # user id, hex
    access: str = AUTH_ACCESS
    jti: str  # makes two tokens for the same user distinct


# ------------------------
# Public encode/decode
# ------------------------

def encode_auth_token(*, user_id: str, secret: str, algorithm: str = "HS256") -> str:
    """Sign a fresh auth token for `user_id`."""
    payload = TokenPayload(sub=user_id, access=AUTH_ACCESS, jti=uuid4().hex)
    return jwt.encode(payload.model_dump(), secret, algorithm=algorithm)


def decode_auth_token(token: str, *, secret: str, algorithm: str = "HS256") -> TokenPayload:
    """Verify the signature of `token` and return its claims.

    Raises a specific `TokenError` subclass if verification or validation fails.
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as e:
        raise InvalidSignatureError("Token signature could not be verified") from e

    try:
        payload = TokenPayload(**claims)
    except ValidationError as e:
        raise MalformedTokenError(f"Token claims invalid: {e}") from e

    if payload.access != AUTH_ACCESS or not is_object_id(payload.sub):
        raise MalformedTokenError("Token is not an auth token")
    return payload
