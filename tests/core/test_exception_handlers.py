"""Tests for app/core/exception_handlers.py - unified error envelope."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import OperationalError

from app.core.exception_handlers import error_content, register_exception_handlers
from app.core.exceptions import (
    BadRequestError,
    ConflictError,
    DependencyError,
    InternalError,
    NotFoundError,
)


class Payload(BaseModel):
    name: str
    age: int


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/not-found")
    async def not_found():
        raise NotFoundError("Thing not found")

    @app.get("/conflict")
    async def conflict():
        raise ConflictError("Already there", {"existing": {"id": "1"}})

    @app.get("/bad-request")
    async def bad_request():
        raise BadRequestError("Nope")

    @app.get("/dependency")
    async def dependency():
        raise DependencyError("Upstream down")

    @app.get("/internal")
    async def internal():
        raise InternalError()

    @app.get("/database")
    async def database():
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    @app.get("/crash")
    async def crash():
        raise RuntimeError("secret details")

    @app.post("/payload")
    async def payload(body: Payload):
        return body

    return app


client = TestClient(_build_app(), raise_server_exceptions=False)


def test_error_content_shape():
    assert error_content("m", "t") == {"success": False, "message": "m", "error": "t"}


def test_app_exception_status_and_envelope():
    response = client.get("/not-found")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Thing not found",
        "error": "not_found",
    }


def test_details_are_merged_into_envelope():
    response = client.get("/conflict")

    assert response.status_code == 409
    assert response.json()["existing"] == {"id": "1"}
    assert response.json()["error"] == "conflict"


def test_bad_request():
    assert client.get("/bad-request").status_code == 400


def test_dependency_failure():
    response = client.get("/dependency")

    assert response.status_code == 500
    assert response.json()["error"] == "dependency_failure"


def test_internal_error():
    assert client.get("/internal").status_code == 500


def test_database_error_maps_to_dependency_failure():
    response = client.get("/database")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Database operation failed",
        "error": "dependency_failure",
    }


def test_unhandled_exception_hides_details():
    response = client.get("/crash")

    assert response.status_code == 500
    assert "secret" not in response.text
    assert response.json()["error"] == "internal_error"


def test_validation_error_is_400_with_field_names():
    response = client.post("/payload", json={"age": "old"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert "name" in body["message"]
    assert "age" in body["message"]


def test_unknown_route_uses_envelope():
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found", "error": "http_error"}
