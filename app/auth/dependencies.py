"""Auth domain dependencies.

Authentication dependencies for FastAPI routes including get_current_user
and type aliases for authenticated user injection.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from app.auth.exceptions import AdminRequiredError, MissingTokenError, NotOwnerError
from app.auth.security import decode_access_token
from app.core.settings import Settings, get_settings
from app.db.engine import get_session
from app.user.exceptions import UserNotFoundError
from app.user.models import User

security = HTTPBearer(auto_error=False)


def get_current_user(
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ] = None,
) -> User:
    """Verify the bearer token and return the stored User.

    The role is read from the database row, not from the token, so role
    changes take effect immediately.

    Raises:
        MissingTokenError: If no bearer token was sent (401)
        InvalidTokenError: If the token is invalid or expired (403)
        UserNotFoundError: If the token's user no longer exists (404)
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    claims = decode_access_token(credentials.credentials, settings)

    user = session.get(User, claims.user_id)
    if user is None:
        raise UserNotFoundError()

    return user


# Type aliases for dependency injection
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_auth(_user: CurrentUserDep) -> None:
    """Require authentication without injecting user into path operation.

    Use as a router-level dependency when all routes require auth:
        router = APIRouter(dependencies=[Depends(require_auth)])

    For endpoints that need the user object, still use CurrentUserDep directly.
    FastAPI caches dependencies, so there's no duplicate auth overhead.
    """
    pass  # Authentication already validated by CurrentUserDep


def get_admin_user(user: CurrentUserDep) -> User:
    """Verify the current user has admin privileges.

    Raises:
        AdminRequiredError: If user is not an admin
    """
    if not user.is_admin:
        raise AdminRequiredError()
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def require_admin(_user: AdminUserDep) -> None:
    """Require admin privileges without injecting user into path operation.

    Use as a router-level or endpoint-level dependency:
        router = APIRouter(dependencies=[Depends(require_admin)])
        @router.get("/", dependencies=[Depends(require_admin)])

    For endpoints that need the admin user object, use AdminUserDep directly.
    """
    pass  # Admin check already validated by AdminUserDep


def ensure_owner_or_admin(
    user: User, owner_id: object, message: str | None = None
) -> None:
    """Allow the resource owner or any admin, reject everyone else."""
    if user.is_admin or owner_id == user.id:
        return
    if message:
        raise NotOwnerError(message)
    raise NotOwnerError()
