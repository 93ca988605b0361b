"""Tests for app/auth/dependencies.py - bearer auth dependencies."""

import uuid
from unittest.mock import MagicMock

import pytest

from app.auth.dependencies import (
    ensure_owner_or_admin,
    get_admin_user,
    get_current_user,
)
from app.auth.exceptions import (
    AdminRequiredError,
    InvalidTokenError,
    MissingTokenError,
    NotOwnerError,
)
from app.auth.security import create_access_token
from app.user.exceptions import UserNotFoundError
from app.user.models import User, UserRole


def _credentials(token: str):
    credentials = MagicMock()
    credentials.credentials = token
    return credentials


def test_get_current_user_valid_token(session, settings, user):
    """Test get_current_user with a valid bearer token returns the stored user."""
    token = create_access_token(
        user_id=user.id, email=user.email, role="user", settings=settings
    )

    result = get_current_user(session, settings, _credentials(token))

    assert result.id == user.id
    assert result.email == user.email


def test_get_current_user_reads_role_from_database(session, settings, user):
    """A token minted before a promotion still yields the current role."""
    token = create_access_token(
        user_id=user.id, email=user.email, role="user", settings=settings
    )
    user.role = UserRole.admin
    session.add(user)
    session.commit()

    result = get_current_user(session, settings, _credentials(token))

    assert result.is_admin


def test_get_current_user_missing_credentials(session, settings):
    """Test get_current_user without a token raises MissingTokenError (401)."""
    with pytest.raises(MissingTokenError) as exc_info:
        get_current_user(session, settings, None)

    assert exc_info.value.status_code == 401


def test_get_current_user_invalid_token(session, settings):
    """Test get_current_user with a malformed token raises InvalidTokenError (403)."""
    with pytest.raises(InvalidTokenError) as exc_info:
        get_current_user(session, settings, _credentials("garbage"))

    assert exc_info.value.status_code == 403


def test_get_current_user_deleted_account(session, settings):
    """Test a valid token for a user that no longer exists raises UserNotFoundError."""
    token = create_access_token(
        user_id=uuid.uuid4(), email="gone@example.com", role="user", settings=settings
    )

    with pytest.raises(UserNotFoundError):
        get_current_user(session, settings, _credentials(token))


def test_get_admin_user_allows_admin(admin_user):
    assert get_admin_user(admin_user) is admin_user


def test_get_admin_user_rejects_regular_user(user):
    with pytest.raises(AdminRequiredError) as exc_info:
        get_admin_user(user)

    assert exc_info.value.status_code == 403


class TestEnsureOwnerOrAdmin:
    def test_owner_allowed(self):
        owner = User(id=uuid.uuid4(), email="o@example.com", role=UserRole.user)
        ensure_owner_or_admin(owner, owner.id)

    def test_admin_allowed_on_foreign_resource(self):
        admin = User(id=uuid.uuid4(), email="a@example.com", role=UserRole.admin)
        ensure_owner_or_admin(admin, uuid.uuid4())

    def test_stranger_rejected_with_custom_message(self):
        stranger = User(id=uuid.uuid4(), email="s@example.com", role=UserRole.user)

        with pytest.raises(NotOwnerError, match="your own bookings"):
            ensure_owner_or_admin(
                stranger, uuid.uuid4(), "You can only view your own bookings"
            )

    def test_unowned_resource_rejected_for_users(self):
        user = User(id=uuid.uuid4(), email="u@example.com", role=UserRole.user)

        with pytest.raises(NotOwnerError):
            ensure_owner_or_admin(user, None)
