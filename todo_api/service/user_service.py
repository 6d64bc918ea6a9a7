from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..domain.errors import AuthenticationError, ValidationError
from ..domain.ids import parse_object_id
from ..domain.passwords import MAX_PASSWORD_BYTES, hash_password, verify_password
from ..domain.tokens import TokenError, decode_auth_token, encode_auth_token
from ..domain.user import AuthToken, User
from ..logging_conf import get_logger
from ..repository.users import UserRepository

logger = get_logger("service.user")


@dataclass(frozen=True)
class AuthContext:
    """The user a request authenticated as, and the token it presented."""

    user: User
    token: str


def _check_password(password: str, *, min_length: int) -> None:
    if len(password) < min_length:
        msg = f"password must be at least {min_length} characters"
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        msg = f"password must be at most {MAX_PASSWORD_BYTES} bytes"
    else:
        return
    raise ValidationError(msg, errors=[{"loc": ["body", "password"], "msg": msg}])


def _issue_token(*, repo: UserRepository, user: User, settings: Settings) -> str:
    token = encode_auth_token(
        user_id=str(user.id), secret=settings.jwt_secret, algorithm=settings.jwt_algorithm
    )
    repo.add_token(user, AuthToken(token=token))
    return token


# ------------------------
# Use-cases
# ------------------------

def create_user(
    *, repo: UserRepository, settings: Settings, email: str, password: str
) -> tuple[User, str]:
    """Register a user and log them in; return the user and its first token.

    Raises:
        ValidationError: if the password is too short.
        ConflictError: if the email is already registered.
    """
    _check_password(password, min_length=settings.password_min_length)
    password_hash = hash_password(password, rounds=settings.bcrypt_rounds)
    user = repo.create(email, password_hash)
    token = _issue_token(repo=repo, user=user, settings=settings)
    logger.info("user.create", extra={"event": "user_create", "user_id": str(user.id)})
    return user, token


def login(
    *, repo: UserRepository, settings: Settings, email: str, password: str
) -> tuple[User, str]:
    """Check credentials and issue an additional token.

    Unknown email and wrong password are reported identically.
    """
    user = repo.find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("user.login_failed", extra={"event": "user_login_failed"})
        raise ValidationError("invalid email or password")
    token = _issue_token(repo=repo, user=user, settings=settings)
    logger.info("user.login", extra={"event": "user_login", "user_id": str(user.id)})
    return user, token


def authenticate(*, repo: UserRepository, settings: Settings, token: str | None) -> AuthContext:
    """Resolve an `x-auth` header value to the user holding it.

    Raises:
        AuthenticationError: header missing, signature/claims invalid, or no
            user currently holds the token.
    """
    if not token:
        raise AuthenticationError("missing token")
    try:
        payload = decode_auth_token(
            token, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm
        )
    except TokenError as e:
        logger.info("auth.reject", extra={"event": "auth_reject", "reason": e.code})
        raise AuthenticationError(str(e)) from e

    user = repo.find_by_token(parse_object_id(payload.sub, resource="user"), token)
    if user is None:
        logger.info("auth.reject", extra={"event": "auth_reject", "reason": "unknown_token"})
        raise AuthenticationError("token not recognized")
    return AuthContext(user=user, token=token)


def logout(*, repo: UserRepository, auth: AuthContext) -> None:
    """Revoke the token the request authenticated with."""
    repo.delete_token(auth.user, auth.token)
    logger.info("user.logout", extra={"event": "user_logout", "user_id": str(auth.user.id)})
