import importlib.util
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from core.container import Container
from services.auth_service import IAuthService
from services.task_service import ITaskService
from tests.conftest import U1, U2, U3

# Import cmd.api.main by path to avoid conflict with stdlib cmd
file_path = Path(__file__).resolve().parent.parent / "cmd" / "api" / "main.py"
spec = importlib.util.spec_from_file_location("cmd.api.main", file_path)
main_module = importlib.util.module_from_spec(spec)
sys.modules["cmd.api.main"] = main_module
spec.loader.exec_module(main_module)
create_app = main_module.create_app


@pytest.fixture
def client(task_service, auth_service):
    Container.register(ITaskService, task_service)
    Container.register(IAuthService, auth_service)
    # Lifespan is not entered, so no MongoDB connection is attempted
    yield TestClient(create_app(), raise_server_exceptions=False)
    Container.clear()


@pytest.fixture
def auth_headers(auth_service, user_repository):
    def headers_for(user_id):
        token = auth_service.create_access_token(user_repository.users[user_id])
        return {"Authorization": f"Bearer {token}"}

    return headers_for


def task_payload(**overrides):
    payload = {
        "title": "Fix bug",
        "description": "Crash on login",
        "status": "Pending",
        "assignedUser": U1,
        "dueDate": "2024-06-01T00:00:00.000Z",
    }
    payload.update(overrides)
    return payload


def create_task(client, auth_headers, caller=U2, **overrides):
    response = client.post("/api/tasks", json=task_payload(**overrides), headers=auth_headers(caller))
    assert response.status_code == 201
    return response.json()["data"]


def test_create_task_returns_expanded_task(client, auth_headers):
    data = create_task(client, auth_headers)

    assert data["title"] == "Fix bug"
    assert data["status"] == "Pending"
    assert data["dueDate"] == "2024-06-01T00:00:00.000Z"
    assert data["assignedUser"] == {"_id": U1, "username": "alice", "firstName": "Alice", "lastName": "Nguyen"}
    assert data["createdBy"]["_id"] == U2
    assert data["createdAt"].endswith("Z")


def test_requests_without_token_are_rejected(client):
    response = client.get("/api/tasks")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    body = response.json()
    assert body["error_code"] == 3
    assert body["data"] is None


def test_invalid_token_is_rejected(client):
    response = client.get("/api/tasks", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_create_with_missing_assignee(client, auth_headers):
    response = client.post(
        "/api/tasks",
        json=task_payload(assignedUser="665f1c2e8f1b2a3c4d5e6fff"),
        headers=auth_headers(U2),
    )

    assert response.status_code == 404
    assert response.json() == {
        "error_code": 5,
        "message": "Assigned user not found",
        "data": {"reason": "AssignedUserMissing"},
    }


def test_create_validation_errors(client, auth_headers):
    response = client.post(
        "/api/tasks",
        json=task_payload(status="Done", dueDate="tomorrow"),
        headers=auth_headers(U2),
    )

    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == 2
    fields = {error["field"] for error in body["data"]["errors"]}
    assert "body.status" in fields
    assert "body.dueDate" in fields


def test_list_only_returns_callers_tasks(client, auth_headers):
    create_task(client, auth_headers, title="mine")
    create_task(client, auth_headers, title="theirs", assignedUser=U3)

    response = client.get("/api/tasks", headers=auth_headers(U1))

    assert response.status_code == 200
    assert [t["title"] for t in response.json()["data"]] == ["mine"]


def test_list_ignores_assigned_user_query(client, auth_headers):
    create_task(client, auth_headers, assignedUser=U3)

    response = client.get(f"/api/tasks?assignedUser={U3}", headers=auth_headers(U1))

    assert response.json()["data"] == []


def test_list_filters(client, auth_headers):
    create_task(client, auth_headers, title="Urgent fix", dueDate="2024-01-31T18:00:00Z")
    create_task(client, auth_headers, title="Later", dueDate="2024-02-01T00:00:00Z")
    create_task(client, auth_headers, title="Done urgent", status="Completed", dueDate="2024-01-10T00:00:00Z")

    headers = auth_headers(U1)

    response = client.get("/api/tasks", params={"search": "URGENT"}, headers=headers)
    assert sorted(t["title"] for t in response.json()["data"]) == ["Done urgent", "Urgent fix"]

    response = client.get("/api/tasks", params={"status": "Completed"}, headers=headers)
    assert [t["title"] for t in response.json()["data"]] == ["Done urgent"]

    response = client.get(
        "/api/tasks",
        params={"dueDateFrom": "2024-01-01", "dueDateTo": "2024-01-31"},
        headers=headers,
    )
    assert sorted(t["title"] for t in response.json()["data"]) == ["Done urgent", "Urgent fix"]


def test_list_rejects_bad_filters(client, auth_headers):
    headers = auth_headers(U1)

    response = client.get("/api/tasks", params={"status": "Done"}, headers=headers)
    assert response.status_code == 422

    response = client.get("/api/tasks", params={"dueDateFrom": "yesterday"}, headers=headers)
    assert response.status_code == 422
    assert response.json()["error_code"] == 2


def test_get_task_is_assignee_only(client, auth_headers):
    task = create_task(client, auth_headers)

    assert client.get(f"/api/tasks/{task['_id']}", headers=auth_headers(U1)).status_code == 200
    assert client.get(f"/api/tasks/{task['_id']}", headers=auth_headers(U2)).status_code == 404
    assert client.get("/api/tasks/not-an-id", headers=auth_headers(U1)).status_code == 404


def test_update_task_permissions(client, auth_headers):
    task = create_task(client, auth_headers)
    url = f"/api/tasks/{task['_id']}"

    response = client.patch(url, json={"status": "Completed"}, headers=auth_headers(U1))
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Completed"
    assert response.json()["data"]["title"] == "Fix bug"

    response = client.patch(url, json={"status": "Pending"}, headers=auth_headers(U3))
    assert response.status_code == 403
    assert response.json()["error_code"] == 4


def test_delete_task_permissions(client, auth_headers):
    task = create_task(client, auth_headers)
    url = f"/api/tasks/{task['_id']}"

    assert client.delete(url, headers=auth_headers(U1)).status_code == 403

    response = client.delete(url, headers=auth_headers(U2))
    assert response.status_code == 200
    assert response.json() == {"error_code": 0, "message": "Task deleted successfully", "data": None}

    assert client.delete(url, headers=auth_headers(U2)).status_code == 404


def test_stats(client, auth_headers):
    create_task(client, auth_headers)
    create_task(client, auth_headers, status="In Progress")

    response = client.get("/api/tasks/stats", headers=auth_headers(U1))

    assert response.status_code == 200
    assert response.json()["data"] == {"Pending": 1, "In Progress": 1, "Completed": 0, "total": 2}


def test_register_login_and_profile(client):
    response = client.post(
        "/api/auth/register",
        json={
            "email": "dave@example.com",
            "username": "dave",
            "password": "secret123",
            "firstName": "Dave",
            "lastName": "Pham",
        },
    )
    assert response.status_code == 201
    user = response.json()["data"]
    assert "password" not in user

    response = client.post("/api/auth/login", json={"username": "dave", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["data"]["accessToken"]

    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["data"]["_id"] == user["_id"]

    response = client.get("/api/auth/users", headers={"Authorization": f"Bearer {token}"})
    assert len(response.json()["data"]) == 4


def test_register_duplicate_and_bad_login(client):
    response = client.post(
        "/api/auth/register",
        json={
            "email": "alice@example.com",
            "username": "alice",
            "password": "secret123",
            "firstName": "Alice",
            "lastName": "Nguyen",
        },
    )
    assert response.status_code == 409
    assert response.json()["error_code"] == 6

    response = client.post("/api/auth/login", json={"username": "alice", "password": "wrong"})
    assert response.status_code == 401


def test_unexpected_errors_use_envelope(client, auth_headers, task_service):
    async def boom(caller_id=None):
        raise RuntimeError("database exploded")

    task_service.get_stats = boom

    response = client.get("/api/tasks/stats", headers=auth_headers(U1))

    assert response.status_code == 500
    assert response.json() == {"error_code": 1, "message": "Internal server error", "data": None}


def test_root_and_health_without_database(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "running"

    response = client.get("/health")
    body = response.json()
    assert body["error_code"] == 1
    assert body["data"]["database"] == "disconnected"


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["error_code"] == 1


def test_update_due_date_is_converted_to_utc(client, auth_headers):
    task = create_task(client, auth_headers)

    response = client.patch(
        f"/api/tasks/{task['_id']}",
        json={"dueDate": "2024-07-01T09:00:00+02:00"},
        headers=auth_headers(U2),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["dueDate"] == "2024-07-01T07:00:00.000Z"
    assert data["title"] == "Fix bug"
    assert data["status"] == "Pending"


@pytest.mark.parametrize("email", ["a@b..com", "x@-bad-.com", "user@@x.io", "not-an-email"])
def test_register_rejects_malformed_email(client, email):
    response = client.post(
        "/api/auth/register",
        json={
            "email": email,
            "username": "dave",
            "password": "secret123",
            "firstName": "Dave",
            "lastName": "Pham",
        },
    )

    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == 2
    assert "body.email" in {error["field"] for error in body["data"]["errors"]}
