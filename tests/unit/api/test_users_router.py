"""HTTP tests for the user endpoints."""

from fastapi.testclient import TestClient
from sqlmodel import Session

from src.user_api.api.http.deps import get_user_repository
from src.user_api.api.http.routers.users import ERROR_STATUS
from src.user_api.core.errors import UserErrorKind
from src.user_api.entities.user import UserRepository

ALICE = {"username": "alice", "email": "alice@example.com", "name": "Alice"}
BOB = {"username": "bob", "email": "bob@example.com", "name": "Bob"}


def _create(client: TestClient, payload: dict) -> dict:
    response = client.post("/api/users", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateUser:
    def test_created(self, client: TestClient):
        response = client.post("/api/users", json=ALICE)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "user created successfully"
        assert body["data"]["id"] is not None
        assert body["data"]["username"] == "alice"
        assert body["data"]["email"] == "alice@example.com"
        assert body["data"]["name"] == "Alice"
        assert "count" not in body

    def test_duplicate_username(self, client: TestClient):
        _create(client, ALICE)

        response = client.post(
            "/api/users", json={**ALICE, "email": "other@example.com"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body == {"success": False, "message": "username already exists: alice"}

    def test_duplicate_email(self, client: TestClient):
        _create(client, ALICE)

        response = client.post("/api/users", json={**BOB, "email": ALICE["email"]})

        assert response.status_code == 400
        assert "alice@example.com" in response.json()["message"]

    def test_missing_field_is_bad_request(self, client: TestClient):
        response = client.post("/api/users", json={"username": "alice"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "email" in body["message"]
        assert "name" in body["message"]


class TestReadUsers:
    def test_get_by_id(self, client: TestClient):
        created = _create(client, ALICE)

        response = client.get(f"/api/users/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"] == created
        assert "message" not in body

    def test_get_by_id_missing(self, client: TestClient):
        response = client.get("/api/users/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "user not found, id: 999"}

    def test_get_by_id_not_an_integer(self, client: TestClient):
        response = client.get("/api/users/abc")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_get_by_username(self, client: TestClient):
        created = _create(client, ALICE)

        response = client.get("/api/users/username/alice")

        assert response.status_code == 200
        assert response.json()["data"] == created

    def test_get_by_username_missing(self, client: TestClient):
        response = client.get("/api/users/username/nobody")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "user not found, username: nobody",
        }

    def test_list_empty(self, client: TestClient):
        response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": [], "count": 0}

    def test_list_all(self, client: TestClient):
        _create(client, ALICE)
        _create(client, BOB)

        body = client.get("/api/users").json()

        assert body["count"] == 2
        assert [u["username"] for u in body["data"]] == ["alice", "bob"]


class TestUpdateUser:
    def test_updated(self, client: TestClient):
        created = _create(client, ALICE)

        response = client.put(
            f"/api/users/{created['id']}",
            json={"username": "alicia", "email": "alicia@example.com", "name": "Alicia"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "user updated successfully"
        assert body["data"]["id"] == created["id"]
        assert body["data"]["username"] == "alicia"

    def test_keep_own_username_and_email(self, client: TestClient):
        created = _create(client, ALICE)

        response = client.put(
            f"/api/users/{created['id']}", json={**ALICE, "name": "Alice Liddell"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Alice Liddell"

    def test_username_taken(self, client: TestClient):
        created = _create(client, ALICE)
        _create(client, BOB)

        response = client.put(f"/api/users/{created['id']}", json={**ALICE, "username": "bob"})

        assert response.status_code == 400
        assert response.json()["message"] == "username already exists: bob"

    def test_missing_user(self, client: TestClient):
        response = client.put("/api/users/999", json=ALICE)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "user not found, id: 999"}


class TestDeleteUser:
    def test_deleted(self, client: TestClient):
        created = _create(client, ALICE)

        response = client.delete(f"/api/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "user deleted successfully"}
        assert client.get(f"/api/users/{created['id']}").status_code == 404

    def test_missing_user(self, client: TestClient):
        response = client.delete("/api/users/999")

        assert response.status_code == 400
        assert "999" in response.json()["message"]


def test_every_error_kind_has_a_status():
    assert set(ERROR_STATUS) == set(UserErrorKind)
    assert set(ERROR_STATUS.values()) == {400}


def test_user_lifecycle_scenario(client: TestClient):
    """Create, duplicate, missing reads and writes, double delete."""
    response = client.post(
        "/api/users",
        json={"username": "testuser", "email": "test@example.com", "name": "Test"},
    )
    assert response.status_code == 201
    created = response.json()["data"]
    assert created["id"] is not None
    assert created["username"] == "testuser"

    response = client.post(
        "/api/users",
        json={"username": "testuser", "email": "other@example.com", "name": "Other"},
    )
    assert response.status_code == 400
    assert "testuser" in response.json()["message"]

    assert client.get("/api/users/999").status_code == 404

    response = client.put(
        "/api/users/999",
        json={"username": "x", "email": "x@example.com", "name": "X"},
    )
    assert response.status_code == 400
    assert "999" in response.json()["message"]

    assert client.delete(f"/api/users/{created['id']}").status_code == 200
    assert client.delete(f"/api/users/{created['id']}").status_code == 400


def test_request_id_header(client: TestClient):
    response = client.get("/api/users", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestOutOfRangeId:
    """Ids beyond the signed 64-bit range are rejected before reaching storage."""

    TOO_BIG = 2**63

    def test_get(self, client: TestClient):
        response = client.get(f"/api/users/{self.TOO_BIG}")

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "user_id" in response.json()["message"]

    def test_update(self, client: TestClient):
        response = client.put(f"/api/users/{self.TOO_BIG}", json=ALICE)

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_delete(self, client: TestClient):
        response = client.delete(f"/api/users/{-(2**63) - 1}")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_largest_id_is_a_plain_miss(self, client: TestClient):
        largest = 2**63 - 1

        response = client.get(f"/api/users/{largest}")

        assert response.status_code == 404
        assert response.json()["message"] == f"user not found, id: {largest}"


class StaleCheckRepository(UserRepository):
    """Existence checks that miss a concurrent insert, as in a create race."""

    def exists_by_username(self, username: str) -> bool:
        return False

    def exists_by_email(self, email: str) -> bool:
        return False


def test_create_race_loser_gets_bad_request(client: TestClient, session: Session):
    _create(client, ALICE)
    client.app.dependency_overrides[get_user_repository] = lambda: StaleCheckRepository(session)

    response = client.post("/api/users", json={**ALICE, "email": "other@example.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "username already exists: alice"}
