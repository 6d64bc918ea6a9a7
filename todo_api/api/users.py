from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from ..config import Settings
from ..repository.users import UserRepository
from ..service import user_service
from ..service.user_service import AuthContext
from .deps import AUTH_HEADER, get_app_settings, get_user_repository, require_auth
from .models import UserCredentials, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, summary="Register a user")
def create_user(
    req: UserCredentials,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
) -> UserOut:
    """Create the account and return its first token in the `x-auth` header."""
    user, token = user_service.create_user(
        repo=repo, settings=settings, email=req.email, password=req.password
    )
    response.headers[AUTH_HEADER] = token
    return UserOut.from_domain(user)


@router.post("/login", response_model=UserOut, summary="Exchange credentials for a token")
def login(
    req: UserCredentials,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
) -> UserOut:
    user, token = user_service.login(
        repo=repo, settings=settings, email=req.email, password=req.password
    )
    response.headers[AUTH_HEADER] = token
    return UserOut.from_domain(user)


@router.get("/me", response_model=UserOut, summary="The authenticated user")
def get_me(auth: AuthContext = Depends(require_auth)) -> UserOut:
    return UserOut.from_domain(auth.user)


@router.delete("/me/token", status_code=status.HTTP_200_OK, summary="Revoke the presented token")
def logout(
    auth: AuthContext = Depends(require_auth),
    repo: UserRepository = Depends(get_user_repository),
) -> Response:
    user_service.logout(repo=repo, auth=auth)
    return Response(status_code=status.HTTP_200_OK)
