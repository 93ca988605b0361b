"""Tests for user domain router."""

import uuid

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.media.models import MediaUpload
from app.talent.models import TalentApplication
from app.user.models import User, UserRole

# --- GET /users ---


def test_list_users_admin(client: TestClient, user, other_user, admin_headers):
    """Test GET /users lists verified users newest first for admins."""
    response = client.get("/api/users", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 3
    emails = {item["email"] for item in body["data"]}
    assert emails == {"talent@example.com", "other@example.com", "admin@example.com"}
    assert all("passwordHash" not in item for item in body["data"])
    assert all(item["hasPassword"] is True for item in body["data"])


def test_list_users_excludes_unverified(client, session: Session, admin_headers):
    session.add(User(email="pending@example.com", name="Pending", email_verified=False))
    session.commit()

    response = client.get("/api/users", headers=admin_headers)

    emails = [item["email"] for item in response.json()["data"]]
    assert "pending@example.com" not in emails


def test_list_users_forbidden_for_regular_user(client, user_headers):
    response = client.get("/api/users", headers=user_headers)

    assert response.status_code == 403
    assert response.json()["error"] == "admin_required"


def test_list_users_requires_token(client):
    assert client.get("/api/users").status_code == 401


# --- POST /users ---


def test_provision_user(client, session: Session, admin_headers):
    """Test POST /users creates a passwordless verified account."""
    response = client.post(
        "/api/users",
        json={"email": "invited@example.com", "name": "Invited", "mobile": "+39 1"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["hasPassword"] is False
    assert data["emailVerified"] is True

    stored = session.exec(select(User).where(User.email == "invited@example.com")).one()
    assert stored.password_hash is None


def test_provision_existing_email_updates(client, user, admin_headers):
    response = client.post(
        "/api/users",
        json={"email": user.email, "name": "Renamed"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == str(user.id)
    assert data["name"] == "Renamed"
    assert data["hasPassword"] is True


# --- GET /users/stats, GET /users/{id} ---


def test_user_stats(client, user, other_user, admin_headers):
    response = client.get("/api/users/stats", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalUsers": 3,
        "verifiedUsers": 3,
        "adminUsers": 1,
        "regularUsers": 2,
    }


def test_get_user(client, user, admin_headers):
    response = client.get(f"/api/users/{user.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["email"] == user.email


def test_get_user_not_found(client, admin_headers):
    response = client.get(f"/api/users/{uuid.uuid4()}", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "user_not_found"


# --- PATCH /users/{id}/role ---


def test_promote_user(client, session: Session, user, admin_headers, user_headers):
    """A promotion takes effect on the user's existing token."""
    response = client.patch(
        f"/api/users/{user.id}/role", json={"role": "admin"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["role"] == "admin"

    session.refresh(user)
    assert user.role == UserRole.admin
    assert client.get("/api/users/stats", headers=user_headers).status_code == 200


def test_update_role_invalid(client, user, admin_headers):
    response = client.patch(
        f"/api/users/{user.id}/role", json={"role": "superuser"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_role"


def test_update_role_unknown_user(client, admin_headers):
    response = client.patch(
        f"/api/users/{uuid.uuid4()}/role", json={"role": "user"}, headers=admin_headers
    )

    assert response.status_code == 404


# --- PATCH /users/{id}/mobile ---


def test_update_own_mobile(client, user, user_headers):
    response = client.patch(
        f"/api/users/{user.id}/mobile", json={"mobile": "+39 999"}, headers=user_headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["mobile"] == "+39 999"


def test_update_foreign_mobile_forbidden(client, other_user, user_headers):
    response = client.patch(
        f"/api/users/{other_user.id}/mobile",
        json={"mobile": "+39 999"},
        headers=user_headers,
    )

    assert response.status_code == 403
    assert response.json()["message"] == "You can only update your own mobile number"


def test_admin_updates_foreign_mobile(client, user, admin_headers):
    response = client.patch(
        f"/api/users/{user.id}/mobile", json={"mobile": "+39 123"}, headers=admin_headers
    )

    assert response.status_code == 200


def test_update_mobile_empty(client, user, user_headers):
    response = client.patch(
        f"/api/users/{user.id}/mobile", json={"mobile": ""}, headers=user_headers
    )

    assert response.status_code == 400


# --- DELETE /users/{id} ---


def test_delete_user_cascades(
    client, session: Session, storage, user, admin_headers, make_application
):
    """Deleting a user removes their applications, media rows and stored files."""
    application = make_application(user)
    storage.files["talent-media-kits/a.png"] = b"png"
    session.add(
        MediaUpload(
            user_id=user.id,
            talent_id=application.id,
            filename="a.png",
            original_name="a.png",
            url="https://cdn.test/talent-media-kits/a.png",
            provider_id="talent-media-kits/a.png",
            storage_backend="fake",
            file_size=3,
            mime_type="image/png",
        )
    )
    session.commit()
    user_id, application_id = user.id, application.id

    response = client.delete(f"/api/users/{user_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "User deleted successfully"}
    session.expire_all()
    assert session.get(User, user_id) is None
    assert session.get(TalentApplication, application_id) is None
    assert session.exec(select(MediaUpload)).all() == []
    assert storage.files == {}


def test_delete_user_tolerates_storage_failure(
    client, session: Session, storage, user, admin_headers, make_application
):
    application = make_application(user)
    session.add(
        MediaUpload(
            user_id=user.id,
            talent_id=application.id,
            filename="b.png",
            original_name="b.png",
            url="https://cdn.test/b.png",
            provider_id="talent-media-kits/b.png",
            file_size=3,
            mime_type="image/png",
        )
    )
    session.commit()
    storage.fail_on_delete = True

    response = client.delete(f"/api/users/{user.id}", headers=admin_headers)

    assert response.status_code == 200


def test_delete_unknown_user(client, admin_headers):
    response = client.delete(f"/api/users/{uuid.uuid4()}", headers=admin_headers)

    assert response.status_code == 404
