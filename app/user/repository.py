"""Credential store.

All reads and writes of ``users`` rows go through UserRepository. Lookup
misses return None; callers decide whether that is a 404.
"""

import logging
import secrets
import uuid
from collections.abc import Sequence
from datetime import timedelta
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from app.core.mixins import as_utc, utc_now
from app.user.exceptions import EmailExistsError
from app.user.models import User, UserRole
from app.user.schemas import UserStats

logger = logging.getLogger(__name__)

RESET_TOKEN_BYTES = 32


def generate_reset_token() -> str:
    """Return 32 random bytes as a 64 character hex string."""
    return secrets.token_hex(RESET_TOKEN_BYTES)


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: uuid.UUID) -> User | None:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.session.exec(select(User).where(User.email == email)).first()

    def list_verified(self) -> Sequence[User]:
        statement = (
            select(User)
            .where(User.email_verified == True)  # noqa: E712
            .order_by(col(User.created_at).desc())
        )
        return self.session.exec(statement).all()

    def create(
        self,
        *,
        email: str,
        name: str,
        password_hash: str | None = None,
        role: UserRole = UserRole.user,
        mobile: str = "",
        email_verified: bool = True,
    ) -> User:
        """Insert a user.

        Raises:
            EmailExistsError: If the email is already registered, including
                when a concurrent insert wins the unique constraint race.
        """
        if self.get_by_email(email) is not None:
            raise EmailExistsError()

        user = User(
            email=email,
            name=name,
            password_hash=password_hash,
            role=role,
            mobile=mobile,
            email_verified=email_verified,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise EmailExistsError() from e
        self.session.refresh(user)
        logger.info("Created user %s (%s)", user.id, user.role.value)
        return user

    def update(self, user: User, **fields: Any) -> User:
        """Apply an arbitrary subset of column values."""
        for key, value in fields.items():
            setattr(user, key, value)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def set_role(self, user: User, role: UserRole) -> User:
        return self.update(user, role=role)

    def set_password(self, user: User, password_hash: str) -> User:
        return self.update(user, password_hash=password_hash)

    def delete(self, user: User) -> None:
        """Delete a user; their applications (and media rows) cascade."""
        self.session.delete(user)
        self.session.commit()
        logger.info("Deleted user %s", user.id)

    def stats(self) -> UserStats:
        def _count(*conditions: Any) -> int:
            statement = select(func.count()).select_from(User)
            for condition in conditions:
                statement = statement.where(condition)
            return self.session.exec(statement).one()

        admins = _count(User.role == UserRole.admin)
        total = _count()
        return UserStats(
            total_users=total,
            verified_users=_count(User.email_verified == True),  # noqa: E712
            admin_users=admins,
            regular_users=total - admins,
        )

    def issue_reset_token(self, email: str, *, expires_in: timedelta) -> str | None:
        """Store a fresh reset token for the account, if one exists."""
        user = self.get_by_email(email)
        if user is None:
            return None
        token = generate_reset_token()
        self.update(user, reset_token=token, reset_token_expiry=utc_now() + expires_in)
        return token

    def get_by_reset_token(self, token: str) -> User | None:
        """Return the account holding an unexpired reset token."""
        user = self.session.exec(select(User).where(User.reset_token == token)).first()
        if user is None or user.reset_token_expiry is None:
            return None
        if as_utc(user.reset_token_expiry) <= utc_now():
            return None
        return user

    def clear_reset_token(self, user: User) -> User:
        return self.update(user, reset_token=None, reset_token_expiry=None)
