"""
Integration tests for the users endpoints.
Uses TestClient with the DI container wired to an in-memory repository (no real DB).
"""
import pytest

pytestmark = pytest.mark.integration

USERS = "/routes/users"
MISSING_ID = "65f1c2a9e4b0a1b2c3d4e5f6"


def _create(client, **payload):
    return client.post(USERS, json=payload)


class TestCreateUser:
    """POST /routes/users"""

    def test_create_success(self, client):
        response = _create(client, name="Ann", email="ann@x.com")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "CREATE new user success"
        data = body["data"]
        assert data["email"] == "ann@x.com"
        assert data["age"] is None
        assert len(data["id"]) == 24
        assert data["createdAt"] == data["updatedAt"]
        assert data["createdAt"].endswith("Z")

    def test_create_normalizes_fields(self, client):
        response = _create(client, name="  Ann ", email=" ANN@X.com ", age=31, address="  Elm St ")

        data = response.json()["data"]
        assert data["name"] == "Ann"
        assert data["email"] == "ann@x.com"
        assert data["age"] == 31
        assert data["address"] == "Elm St"

    def test_duplicate_email_case_insensitive(self, client, memory_repo):
        assert _create(client, name="Ann", email="ann@x.com").status_code == 201

        response = _create(client, name="Other Ann", email="ANN@x.com")

        assert response.status_code == 409
        assert response.json() == {"message": "Email already exists", "data": None}
        assert [u.email for u in memory_repo.users.values()] == ["ann@x.com"]

    @pytest.mark.parametrize("payload", [{}, {"name": "Ann"}, {"email": "ann@x.com"}, {"name": "", "email": "ann@x.com"}])
    def test_missing_required_fields(self, client, memory_repo, payload):
        response = client.post(USERS, json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": "Name and email are required", "data": None}
        assert "create" not in memory_repo.calls

    def test_missing_body(self, client):
        response = client.post(USERS)
        assert response.status_code == 400
        assert response.json()["message"] == "Name and email are required"

    def test_field_validation_failure(self, client, memory_repo):
        response = _create(client, name="Ann", email="not-an-email", age=200)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["errors"] == ["Please enter a valid email", "Age must be less than 150"]
        assert body["data"] is None
        assert memory_repo.users == {}

    def test_wrong_type_is_validation_failure(self, client):
        response = _create(client, name="Ann", email="ann@x.com", age="old")

        assert response.status_code == 400
        assert response.json() == {
            "message": "Validation failed",
            "data": None,
            "errors": ["Age must be an integer"],
        }

    def test_presence_checked_before_types(self, client, memory_repo):
        response = _create(client, email="ann@x.com", age="abc")

        assert response.status_code == 400
        assert response.json() == {"message": "Name and email are required", "data": None}
        assert "create" not in memory_repo.calls

    def test_scalar_values_are_cast(self, client):
        response = _create(client, name=123, email="ann@x.com", age="42")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "123"
        assert data["age"] == 42

    @pytest.mark.parametrize("payload", [[], ["Ann", "ann@x.com"], "Ann"])
    def test_non_object_body_has_no_fields(self, client, payload):
        response = client.post(USERS, json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": "Name and email are required", "data": None}

    def test_unknown_fields_dropped(self, client):
        response = _create(client, name="Ann", email="ann@x.com", role="admin", createdAt="1999-01-01T00:00:00Z")

        data = response.json()["data"]
        assert "role" not in data
        assert not data["createdAt"].startswith("1999")

    def test_persistence_failure_is_server_error(self, client, memory_repo, monkeypatch):
        async def broken_create(user):
            raise RuntimeError("Error creating user: connection refused")

        monkeypatch.setattr(memory_repo, "create", broken_create)

        response = _create(client, name="Ann", email="ann@x.com")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Server error",
            "data": None,
            "serverMessage": "Error creating user: connection refused",
        }


class TestListUsers:
    """GET /routes/users"""

    def test_empty_list(self, client):
        response = client.get(USERS)

        assert response.status_code == 200
        assert response.json() == {"message": "GET all users success", "data": [], "total": 0}

    def test_newest_first(self, client):
        for index in range(3):
            _create(client, name=f"User {index}", email=f"user{index}@x.com")

        body = client.get(USERS).json()

        assert body["total"] == 3
        assert [u["name"] for u in body["data"]] == ["User 2", "User 1", "User 0"]

    def test_created_user_listed_once(self, client):
        created = _create(client, name="Ann", email="ann@x.com").json()["data"]

        listed = [u for u in client.get(USERS).json()["data"] if u["email"] == "ann@x.com"]

        assert listed == [created]

    def test_persistence_failure(self, client, memory_repo, monkeypatch):
        async def broken_find_all():
            raise RuntimeError("Error listing users: timeout")

        monkeypatch.setattr(memory_repo, "find_all", broken_find_all)

        response = client.get(USERS)

        assert response.status_code == 500
        assert response.json()["serverMessage"] == "Error listing users: timeout"


class TestGetUser:
    """GET /routes/users/{id}"""

    def test_found(self, client):
        created = _create(client, name="Ann", email="ann@x.com").json()["data"]

        response = client.get(f"{USERS}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "GET user by ID success", "data": created}

    def test_malformed_id(self, client, memory_repo):
        response = client.get(f"{USERS}/not-an-id")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid user ID format", "data": None}
        assert "find_by_id" not in memory_repo.calls

    def test_not_found(self, client):
        response = client.get(f"{USERS}/{MISSING_ID}")

        assert response.status_code == 404
        assert response.json() == {"message": "User not found", "data": None}


class TestUpdateUser:
    """PATCH /routes/users/{id}"""

    def test_update_address_only(self, client):
        created = _create(client, name="Ann", email="ann@x.com", age=30).json()["data"]

        response = client.patch(f"{USERS}/{created['id']}", json={"address": "Elm St"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "UPDATE user success"
        data = body["data"]
        assert data["address"] == "Elm St"
        assert data["name"] == created["name"]
        assert data["email"] == created["email"]
        assert data["age"] == created["age"]
        assert data["createdAt"] == created["createdAt"]
        assert data["updatedAt"] > created["updatedAt"]

    def test_empty_body_leaves_document_unchanged(self, client, memory_repo):
        created = _create(client, name="Ann", email="ann@x.com").json()["data"]

        response = client.patch(f"{USERS}/{created['id']}", json={})

        assert response.status_code == 400
        assert response.json() == {"message": "No fields to update", "data": None}
        assert "update_by_id" not in memory_repo.calls
        assert client.get(f"{USERS}/{created['id']}").json()["data"] == created

    @pytest.mark.parametrize("payload", [[], [{"name": "Bo"}], "Bo"])
    def test_non_object_body_has_no_fields(self, client, memory_repo, payload):
        created = _create(client, name="Ann", email="ann@x.com").json()["data"]

        response = client.patch(f"{USERS}/{created['id']}", json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": "No fields to update", "data": None}
        assert "update_by_id" not in memory_repo.calls

    def test_only_unknown_fields(self, client):
        created = _create(client, name="Ann", email="ann@x.com").json()["data"]

        response = client.patch(f"{USERS}/{created['id']}", json={"role": "admin"})

        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"

    def test_explicit_null_clears_age(self, client):
        created = _create(client, name="Ann", email="ann@x.com", age=30).json()["data"]

        data = client.patch(f"{USERS}/{created['id']}", json={"age": None}).json()["data"]

        assert data["age"] is None

    def test_validation_failure(self, client):
        created = _create(client, name="Ann", email="ann@x.com").json()["data"]

        response = client.patch(f"{USERS}/{created['id']}", json={"name": "   ", "age": -5})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["errors"] == ["Name is required", "Age must be positive"]

    def test_duplicate_email(self, client):
        _create(client, name="Ann", email="ann@x.com")
        bo = _create(client, name="Bo", email="bo@x.com").json()["data"]

        response = client.patch(f"{USERS}/{bo['id']}", json={"email": "ANN@x.com"})

        assert response.status_code == 409
        assert response.json() == {"message": "Email already exists", "data": None}

    def test_keeping_own_email_is_not_a_conflict(self, client):
        ann = _create(client, name="Ann", email="ann@x.com").json()["data"]

        response = client.patch(f"{USERS}/{ann['id']}", json={"email": "Ann@X.com", "name": "Ann Lee"})

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Ann Lee"

    def test_malformed_id(self, client, memory_repo):
        response = client.patch(f"{USERS}/123", json={"name": "Bo"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid user ID format", "data": None}
        assert "update_by_id" not in memory_repo.calls

    def test_not_found(self, client):
        response = client.patch(f"{USERS}/{MISSING_ID}", json={"name": "Bo"})

        assert response.status_code == 404
        assert response.json() == {"message": "User not found", "data": None}


class TestDeleteUser:
    """DELETE /routes/users/{id}"""

    def test_delete_then_get_is_not_found(self, client):
        created = _create(client, name="Ann", email="ann@x.com").json()["data"]

        response = client.delete(f"{USERS}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "DELETE user success", "data": created}
        assert client.get(f"{USERS}/{created['id']}").status_code == 404

    def test_email_reusable_after_delete(self, client):
        created = _create(client, name="Ann", email="ann@x.com").json()["data"]
        client.delete(f"{USERS}/{created['id']}")

        assert _create(client, name="Ann", email="ann@x.com").status_code == 201

    def test_malformed_id(self, client, memory_repo):
        response = client.delete(f"{USERS}/xyz")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid user ID format", "data": None}
        assert "delete_by_id" not in memory_repo.calls

    def test_not_found(self, client):
        response = client.delete(f"{USERS}/{MISSING_ID}")

        assert response.status_code == 404
        assert response.json() == {"message": "User not found", "data": None}
