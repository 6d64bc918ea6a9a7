"""bcrypt password hashing.

Hashes are salted per call, so hashing the same password twice gives two
different strings; use `verify_password` to compare. bcrypt only reads the
first 72 bytes of its input and newer releases reject anything longer, so
callers must keep passwords within `MAX_PASSWORD_BYTES`.
"""
from __future__ import annotations

import bcrypt

__all__ = ["MAX_PASSWORD_BYTES", "hash_password", "verify_password"]

MAX_PASSWORD_BYTES = 72


def hash_password(password: str, *, rounds: int = 10) -> str:
    """Hash `password`.

    Raises:
        ValueError: if the password is longer than MAX_PASSWORD_BYTES.
    """
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(raw, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of `password` against a stored hash.

    A hash that is not in bcrypt format, or an over-long password, simply
    does not match.
    """
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
    except (ValueError, AttributeError):
        return False
