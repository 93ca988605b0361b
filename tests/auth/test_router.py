"""Tests for auth domain router."""

from datetime import timedelta
from unittest.mock import patch

from sqlmodel import Session, select

from app.core.mixins import utc_now
from app.user.models import User, UserRole

# --- POST /auth/register ---


def test_register_new_user(client, session: Session):
    """Test POST /auth/register creates a user with a hashed password."""
    response = client.post(
        "/api/auth/register",
        json={
            "email": "new@example.com",
            "password": "secret123",
            "name": "New User",
            "mobile": "+39 111",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["user"]["email"] == "new@example.com"
    assert body["data"]["user"]["role"] == "user"
    assert body["data"]["user"]["emailVerified"] is True
    assert body["data"]["user"]["mobile"] == "+39 111"
    assert "passwordHash" not in body["data"]["user"]

    stored = session.exec(select(User).where(User.email == "new@example.com")).one()
    assert stored.password_hash is not None
    assert stored.password_hash != "secret123"


def test_register_normalises_domain_only(client, session: Session):
    """The domain of the address is lower-cased, the local part is kept."""
    response = client.post(
        "/api/auth/register",
        json={"email": "Alice@Example.COM", "password": "secret123", "name": "Alice"},
    )

    assert response.status_code == 201
    assert response.json()["data"]["user"]["email"] == "Alice@example.com"
    assert session.exec(select(User).where(User.email == "Alice@example.com")).one()

    login = client.post(
        "/api/auth/login", json={"email": "Alice@EXAMPLE.com", "password": "secret123"}
    )
    assert login.status_code == 200

    other_case = client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
    )
    assert other_case.status_code == 401


def test_register_duplicate_email(client, user):
    """Test POST /auth/register with an existing email returns 409."""
    response = client.post(
        "/api/auth/register",
        json={"email": user.email, "password": "secret123", "name": "Again"},
    )

    assert response.status_code == 409
    body = response.json()
    assert body == {
        "success": False,
        "message": "User with this email already exists",
        "error": "email_exists",
    }


def test_register_completes_preprovisioned_account(client, session: Session):
    """A passwordless account is completed in place and answered with 200."""
    provisioned = User(email="invited@example.com", name="Invited", mobile="+39 222")
    session.add(provisioned)
    session.commit()
    session.refresh(provisioned)

    response = client.post(
        "/api/auth/register",
        json={"email": "invited@example.com", "password": "secret123", "name": "Invited Talent"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Password set successfully"
    assert body["data"]["user"]["id"] == str(provisioned.id)
    assert body["data"]["user"]["name"] == "Invited Talent"
    assert body["data"]["user"]["mobile"] == "+39 222"

    session.refresh(provisioned)
    assert provisioned.password_hash is not None


def test_register_short_password(client):
    """Test POST /auth/register rejects passwords under 6 characters with 400."""
    response = client.post(
        "/api/auth/register",
        json={"email": "short@example.com", "password": "12345", "name": "Short"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_register_invalid_email(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "not-an-email", "password": "secret123", "name": "Bad"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


# --- POST /auth/login ---


def test_login_success(client, user):
    """Test POST /auth/login returns a bearer token usable on /auth/me."""
    response = client.post(
        "/api/auth/login", json={"email": user.email, "password": "secret123"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["tokenType"] == "bearer"
    assert data["user"]["id"] == str(user.id)

    me = client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert me.status_code == 200
    assert me.json()["data"]["email"] == user.email


def test_login_wrong_password(client, user):
    response = client.post(
        "/api/auth/login", json={"email": user.email, "password": "wrong-password"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "invalid_credentials"


def test_login_unknown_email_matches_wrong_password(client, user):
    """Unknown emails produce the same answer as a wrong password."""
    unknown = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"}
    )
    wrong = client.post(
        "/api/auth/login", json={"email": user.email, "password": "wrong-password"}
    )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


def test_login_passwordless_account(client, session: Session):
    """Test a pre-provisioned account cannot log in before setting a password."""
    session.add(User(email="invited@example.com", name="Invited"))
    session.commit()

    response = client.post(
        "/api/auth/login", json={"email": "invited@example.com", "password": "anything"}
    )

    assert response.status_code == 401


# --- GET /auth/me ---


def test_me_without_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "message": "Access token required",
        "error": "missing_token",
    }


def test_me_with_invalid_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 403
    assert response.json()["error"] == "invalid_token"


def test_me_after_account_deleted(client, session: Session, user, user_headers):
    session.delete(user)
    session.commit()

    response = client.get("/api/auth/me", headers=user_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "user_not_found"


def test_me_returns_profile(client, admin_user, admin_headers):
    response = client.get("/api/auth/me", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["role"] == "admin"
    assert set(data) == {"id", "email", "name", "role", "emailVerified", "mobile"}


# --- Password reset ---


def test_forgot_password_unknown_email(client):
    """The answer does not reveal whether the account exists."""
    response = client.post(
        "/api/auth/forgot-password", json={"email": "nobody@example.com"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "If an account with that email exists, a password reset link has been sent",
    }


def test_forgot_password_returns_token_when_email_not_configured(
    client, session: Session, user, settings
):
    response = client.post("/api/auth/forgot-password", json={"email": user.email})

    assert response.status_code == 200
    body = response.json()
    session.refresh(user)
    assert body["resetToken"] == user.reset_token
    assert len(user.reset_token) == 64
    assert body["resetUrl"].endswith(f"/reset-password?token={user.reset_token}")
    assert user.reset_token_expiry is not None


def test_forgot_password_hides_token_when_email_sent(client, user):
    with patch("app.auth.router.send_password_reset_email", return_value=True) as send:
        response = client.post("/api/auth/forgot-password", json={"email": user.email})

    assert response.status_code == 200
    assert "resetToken" not in response.json()
    send.assert_called_once()
    assert send.call_args[0][0] == user.email


def test_reset_password_flow(client, session: Session, user):
    """Token from forgot-password sets a new password exactly once."""
    token = client.post(
        "/api/auth/forgot-password", json={"email": user.email}
    ).json()["resetToken"]

    response = client.post(
        "/api/auth/reset-password", json={"token": token, "newPassword": "brand-new"}
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Password reset successfully"}

    login = client.post(
        "/api/auth/login", json={"email": user.email, "password": "brand-new"}
    )
    assert login.status_code == 200

    reused = client.post(
        "/api/auth/reset-password", json={"token": token, "newPassword": "another-one"}
    )
    assert reused.status_code == 400
    assert reused.json()["error"] == "invalid_reset_token"


def test_reset_password_expired_token(client, session: Session, user):
    user.reset_token = "a" * 64
    user.reset_token_expiry = utc_now() - timedelta(minutes=1)
    session.add(user)
    session.commit()

    response = client.post(
        "/api/auth/reset-password", json={"token": "a" * 64, "newPassword": "brand-new"}
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired reset token"


def test_reset_password_short_password(client):
    response = client.post(
        "/api/auth/reset-password", json={"token": "abc", "newPassword": "123"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_registered_user_role_is_user(client, session: Session):
    client.post(
        "/api/auth/register",
        json={"email": "role@example.com", "password": "secret123", "name": "Role"},
    )

    stored = session.exec(select(User).where(User.email == "role@example.com")).one()
    assert stored.role == UserRole.user
