"""Password hashing and bearer token helpers.

Passwords are hashed with bcrypt through passlib. Access tokens are HS256
JWTs carrying the user id (``sub``), email and role.
"""

import uuid
from dataclasses import dataclass

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.auth.exceptions import InvalidTokenError
from app.core.mixins import utc_now
from app.core.settings import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class TokenClaims:
    """Verified access token payload."""

    user_id: uuid.UUID
    email: str
    role: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str | None) -> bool:
    """Check a password; accounts without a password never match."""
    if not password_hash:
        return False
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(
    *, user_id: uuid.UUID, email: str, role: str, settings: Settings
) -> str:
    expires_at = utc_now() + settings.access_token_expires_in
    claims = {"sub": str(user_id), "email": email, "role": role, "exp": expires_at}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenClaims:
    """Verify signature and expiry of an access token.

    Raises:
        InvalidTokenError: If the token cannot be trusted.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
        return TokenClaims(
            user_id=uuid.UUID(payload["sub"]),
            email=payload.get("email", ""),
            role=payload.get("role", ""),
        )
    except (JWTError, KeyError, ValueError) as e:
        raise InvalidTokenError() from e
