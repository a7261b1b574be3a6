"""End-to-end tests of the HTTP API against an in-memory database."""

import pytest
from fastapi.testclient import TestClient

from src.user_service.api.http.app import create_app
from src.user_service.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
    UsersConfig,
)
from tests.utils import user_payload

JANE = {
    "login": "jane_smith",
    "firstName": "Jane",
    "lastName": "Smith",
    "gender": "female",
    "age": 25,
    "email": "jane.smith@example.com",
}


def _create(client: TestClient, **overrides) -> dict:
    response = client.post("/users", json=user_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def _assert_error(response, status_code: int, error: str, path: str) -> dict:
    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["error"] == error
    assert body["statusCode"] == status_code
    assert body["path"] == path
    assert body["timestamp"]
    assert body["message"]
    return body


class TestCreateUser:
    def test_create_user(self, client: TestClient):
        body = _create(client)

        assert body["id"]
        assert body["login"] == "john_doe"
        assert body["firstName"] == "John"
        assert body["middleName"] == "Michael"
        assert body["fullName"] == "John Doe"
        assert body["initials"] == "JD"
        assert body["gender"] == "male"
        assert body["status"] == "active"
        assert body["createdAt"] == body["updatedAt"]

    def test_create_with_snake_case_fields(self, client: TestClient):
        payload = {
            "login": "snake_case",
            "first_name": "Sam",
            "last_name": "Snake",
            "gender": "other",
            "age": 40,
            "email": "sam@example.com",
        }

        response = client.post("/users", json=payload)

        assert response.status_code == 201
        assert response.json()["firstName"] == "Sam"

    def test_duplicate_email(self, client: TestClient):
        _create(client)

        response = client.post("/users", json=user_payload(login="other_login"))

        body = _assert_error(response, 409, "Conflict", "/users")
        assert body["message"] == "User with this email already exists"

    def test_duplicate_login(self, client: TestClient):
        _create(client)

        response = client.post("/users", json=user_payload(email="other@example.com"))

        body = _assert_error(response, 409, "Conflict", "/users")
        assert body["message"] == "User with this login already exists"

    @pytest.mark.parametrize("age", [-1, 151])
    def test_age_out_of_bounds(self, client: TestClient, age):
        response = client.post("/users", json=user_payload(age=age))

        body = _assert_error(response, 400, "Bad Request", "/users")
        assert body["message"] == "Age must be between 0 and 150"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"login": "x"},
            {"email": "not-an-email"},
            {"gender": "unknown"},
            {"phone": "123"},
            {"status": "inactive"},
        ],
    )
    def test_validation_errors(self, client: TestClient, overrides):
        response = client.post("/users", json=user_payload(**overrides))

        _assert_error(response, 400, "Bad Request", "/users")

    def test_malformed_json(self, client: TestClient):
        response = client.post(
            "/users", content="{not json", headers={"Content-Type": "application/json"}
        )

        _assert_error(response, 400, "Bad Request", "/users")


class TestReadUsers:
    def test_list_newest_first(self, client: TestClient):
        john = _create(client)
        jane = client.post("/users", json=JANE).json()

        response = client.get("/users")

        assert response.status_code == 200
        assert [u["id"] for u in response.json()] == [jane["id"], john["id"]]

    def test_list_empty(self, client: TestClient):
        assert client.get("/users").json() == []

    def test_get_by_id_email_login(self, client: TestClient):
        created = _create(client)

        assert client.get(f"/users/{created['id']}").json() == created
        assert client.get("/users/email/john.doe@example.com").json() == created
        assert client.get("/users/login/john_doe").json() == created

    def test_get_unknown_id(self, client: TestClient):
        response = client.get("/users/unknown-id")

        body = _assert_error(response, 404, "Not Found", "/users/unknown-id")
        assert body["message"] == "User with ID unknown-id not found"

    def test_get_unknown_email(self, client: TestClient):
        response = client.get("/users/email/nobody@example.com")

        _assert_error(response, 404, "Not Found", "/users/email/nobody@example.com")

    def test_get_by_email_uses_create_normalization(self, client: TestClient):
        created = _create(client, email="John@Example.COM")

        response = client.get("/users/email/John@Example.COM")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]
        assert response.json()["email"] == created["email"]

    def test_get_by_malformed_email(self, client: TestClient):
        response = client.get("/users/email/not-an-email")

        _assert_error(response, 400, "Bad Request", "/users/email/not-an-email")

    def test_get_unknown_login(self, client: TestClient):
        response = client.get("/users/login/nobody")

        body = _assert_error(response, 404, "Not Found", "/users/login/nobody")
        assert body["message"] == "User with login nobody not found"


class TestUpdateUser:
    def test_partial_update(self, client: TestClient):
        created = _create(client)

        response = client.patch(f"/users/{created['id']}", json={"firstName": "Johnny", "phone": None})

        assert response.status_code == 200
        body = response.json()
        assert body["firstName"] == "Johnny"
        assert body["fullName"] == "Johnny Doe"
        assert body["phone"] is None
        assert body["email"] == created["email"]
        assert body["createdAt"] == created["createdAt"]

    def test_same_email_is_not_a_conflict(self, client: TestClient):
        created = _create(client)

        response = client.patch(f"/users/{created['id']}", json={"email": created["email"]})

        assert response.status_code == 200

    def test_email_conflict(self, client: TestClient):
        _create(client)
        jane = client.post("/users", json=JANE).json()

        response = client.patch(f"/users/{jane['id']}", json={"email": "john.doe@example.com"})

        _assert_error(response, 409, "Conflict", f"/users/{jane['id']}")

    def test_null_required_field(self, client: TestClient):
        created = _create(client)

        response = client.patch(f"/users/{created['id']}", json={"login": None})

        _assert_error(response, 400, "Bad Request", f"/users/{created['id']}")

    def test_update_unknown(self, client: TestClient):
        response = client.patch("/users/unknown-id", json={"age": 20})

        _assert_error(response, 404, "Not Found", "/users/unknown-id")


class TestUpdateStatus:
    def test_change_status(self, client: TestClient):
        created = _create(client)

        response = client.patch(f"/users/{created['id']}/status", json={"status": "suspended"})

        assert response.status_code == 200
        assert response.json()["status"] == "suspended"

    def test_invalid_status(self, client: TestClient):
        created = _create(client)

        response = client.patch(f"/users/{created['id']}/status", json={"status": "deleted"})

        _assert_error(response, 400, "Bad Request", f"/users/{created['id']}/status")

    def test_unknown_user(self, client: TestClient):
        response = client.patch("/users/unknown-id/status", json={"status": "inactive"})

        _assert_error(response, 404, "Not Found", "/users/unknown-id/status")


class TestDeleteUser:
    def test_delete(self, client: TestClient):
        created = _create(client)

        response = client.delete(f"/users/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/users/{created['id']}").status_code == 404

    def test_delete_unknown(self, client: TestClient):
        response = client.delete("/users/unknown-id")

        _assert_error(response, 404, "Not Found", "/users/unknown-id")


class TestAvatarUpload:
    def test_upload_returns_user_unchanged(self, client: TestClient):
        created = _create(client)

        response = client.post(
            f"/users/{created['id']}/avatar",
            files={"avatar": ("avatar.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 200
        assert response.json() == created

    def test_upload_without_file(self, client: TestClient):
        created = _create(client)

        assert client.post(f"/users/{created['id']}/avatar").status_code == 200

    def test_upload_unknown_user(self, client: TestClient):
        response = client.post("/users/unknown-id/avatar")

        _assert_error(response, 404, "Not Found", "/users/unknown-id/avatar")


class TestApplication:
    def test_unknown_route_uses_envelope(self, client: TestClient):
        response = client.get("/nope")

        _assert_error(response, 404, "Not Found", "/nope")

    def test_request_id_is_echoed(self, client: TestClient):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "user-service"}

    def test_readiness(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["database"] == {"status": "healthy", "type": "sqlite"}

    def test_configured_age_bounds(self):
        config = ConfigData(
            database=DatabaseConfig(url="sqlite://"),
            logging=LoggingConfig(file=None, level="WARNING"),
            users=UsersConfig(min_age=18, max_age=120),
        )

        with TestClient(create_app(config)) as client:
            response = client.post("/users", json=user_payload(age=17))

        assert response.status_code == 400
        assert response.json()["message"] == "Age must be between 18 and 120"
