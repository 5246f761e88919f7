"""
Tests for the local Report Service endpoints:
- report contract (list, create, patch, put, delete)
- server-side lifecycle enforcement
- registration and login
"""

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from ireporter.main import app
from ireporter.models.user import UserCreate
from ireporter.services.report_repository import get_report_repository
from ireporter.services.user_service import get_user_service

client = TestClient(app)


@pytest.fixture
def new_report_body():
    return {
        "type": "RED_FLAG",
        "title": "Bribe at the ports",
        "description": "Clearing agent asked for an unofficial fee",
        "incidentDate": "2024-05-01",
        "reportDate": "2024-05-02",
        "location": {"latitude": 6.45, "longitude": 3.39},
        "userId": "user-1",
    }


def create(body) -> dict:
    resp = client.post("/report", json=body)
    assert resp.status_code == 201
    return resp.json()["newReport"]


def test_root_and_health():
    assert client.get("/").json()["status"] == "running"
    assert client.get("/health").json()["status"] == "healthy"


def test_create_returns_pending_report(new_report_body):
    report = create(new_report_body)
    assert report["id"]
    assert report["status"] == "PENDING"
    assert report["incidentDate"] == "2024-05-01"


def test_create_without_location(new_report_body):
    new_report_body["location"] = {"latitude": None, "longitude": None}
    assert create(new_report_body)["location"] is None


def test_create_future_incident_is_rejected(new_report_body):
    new_report_body["incidentDate"] = (date.today() + timedelta(days=1)).isoformat()
    resp = client.post("/report", json=new_report_body)
    assert resp.status_code == 400
    assert "future" in resp.json()["message"]


def test_create_missing_title_is_422_with_message(new_report_body):
    del new_report_body["title"]
    resp = client.post("/report", json=new_report_body)
    assert resp.status_code == 422
    assert "title" in resp.json()["message"]


def test_lists_all_and_per_user(new_report_body):
    create(new_report_body)
    new_report_body["userId"] = "user-2"
    create(new_report_body)

    assert len(client.get("/reports").json()["reports"]) == 2
    mine = client.get("/report/user-1").json()["reports"]
    assert len(mine) == 1


def test_patch_pending_report(new_report_body):
    report = create(new_report_body)
    resp = client.patch(f"/report/{report['id']}", json={"title": "Bribe at Apapa port"})
    assert resp.status_code == 200
    assert resp.json()["report"]["title"] == "Bribe at Apapa port"
    assert resp.json()["report"]["type"] == "RED_FLAG"


def test_patch_after_investigation_started_is_refused(new_report_body):
    report = create(new_report_body)
    client.put(f"/report/{report['id']}", json={"status": "UNDER_INVESTIGATION"})

    resp = client.patch(f"/report/{report['id']}", json={"title": "Too late"})

    assert resp.status_code == 409
    assert "no longer editable" in resp.json()["message"]


def test_status_walks_forward_only(new_report_body):
    report = create(new_report_body)
    url = f"/report/{report['id']}"

    assert client.put(url, json={"status": "UNDER_INVESTIGATION"}).status_code == 200
    assert client.put(url, json={"status": "PENDING"}).status_code == 400
    assert client.put(url, json={"status": "RESOLVED"}).status_code == 200
    assert client.put(url, json={"status": "REJECTED"}).status_code == 400


def test_status_cannot_return_to_draft(new_report_body):
    report = create(new_report_body)
    resp = client.put(f"/report/{report['id']}", json={"status": "draft"})
    assert resp.status_code == 400


def test_delete_pending_then_missing(new_report_body):
    report = create(new_report_body)
    assert client.delete(f"/report/{report['id']}").status_code == 200
    assert client.delete(f"/report/{report['id']}").status_code == 404


def test_delete_resolved_is_refused(new_report_body):
    report = create(new_report_body)
    client.put(f"/report/{report['id']}", json={"status": "RESOLVED"})
    assert client.delete(f"/report/{report['id']}").status_code == 409


def test_register_and_login():
    resp = client.post("/auth/register", json={"name": "Ada", "email": "ada@example.com", "password": "secret1"})
    assert resp.status_code == 201

    login = client.post("/auth/login", json={"email": "ADA@example.com", "password": "secret1"})
    assert login.status_code == 200
    body = login.json()
    assert body["token"]
    assert body["user"]["userId"]
    assert body["user"]["isAdmin"] is False


def test_duplicate_registration_conflicts():
    body = {"name": "Ada", "email": "ada@example.com", "password": "secret1"}
    client.post("/auth/register", json=body)
    resp = client.post("/auth/register", json=body)
    assert resp.status_code == 409
    assert "already exists" in resp.json()["message"]


def test_wrong_password_is_401():
    get_user_service().create_user(UserCreate(name="Ada", email="ada@example.com", password="secret1"))
    resp = client.post("/auth/login", json={"email": "ada@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid email or password"


@pytest.mark.parametrize("location", [
    {"latitude": 200, "longitude": 3.39},
    {"latitude": 6.45, "longitude": -181},
])
def test_create_out_of_range_location_is_422(new_report_body, location):
    new_report_body["location"] = location
    resp = client.post("/report", json=new_report_body)
    assert resp.status_code == 422
    assert "location" in resp.json()["message"]
    assert client.get("/reports").json()["reports"] == []


def test_stored_password_is_bcrypt_hash():
    service = get_user_service()
    service.create_user(UserCreate(name="Ada", email="ada@example.com", password="secret1"))
    stored = service._users["ada@example.com"]["password_hash"]

    assert stored.startswith("$2")
    assert "secret1" not in stored
    assert service.authenticate("ada@example.com", "secret1") is not None
    assert service.authenticate("ada@example.com", "secret2") is None


def test_report_owner_is_tracked(new_report_body):
    report = create(new_report_body)
    assert get_report_repository().owner_of(report["id"]) == "user-1"


def test_blank_title_is_422(new_report_body):
    new_report_body["title"] = "   "
    resp = client.post("/report", json=new_report_body)
    assert resp.status_code == 422
    assert "title" in resp.json()["message"]
