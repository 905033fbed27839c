"""Tests for the REST contract served by server.app."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from server.app import app


@pytest.fixture
def client(tmp_path):
    with patch("server.data.JOBS_FILE", tmp_path / "jobs.json"), \
            patch("server.data.ACTIVITIES_FILE", tmp_path / "activities.json"):
        yield TestClient(app)


def _auth(user: str) -> dict:
    return {"Authorization": f"Bearer {user}"}


def test_job_lifecycle(client):
    create_resp = client.post("/api/jobs", json={"title": "PM", "company": "Acme", "status": "saved"})
    assert create_resp.status_code == 201
    job = create_resp.json()
    assert job["userId"] == "demo-user-1"
    assert job["createdAt"]

    assert client.get(f"/api/jobs/{job['id']}").json()["title"] == "PM"

    update_resp = client.put(f"/api/jobs/{job['id']}", json={"status": "applied"})
    assert update_resp.status_code == 200
    assert update_resp.json()["status"] == "applied"
    assert update_resp.json()["company"] == "Acme"

    list_resp = client.get("/api/jobs")
    assert [j["id"] for j in list_resp.json()] == [job["id"]]

    delete_resp = client.delete(f"/api/jobs/{job['id']}")
    assert delete_resp.status_code == 200
    assert delete_resp.json() == {"ok": True}
    assert client.get(f"/api/jobs/{job['id']}").status_code == 404


def test_create_requires_title_and_status(client):
    resp = client.post("/api/jobs", json={"company": "Acme", "status": "saved"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "title and status are required fields"
    assert client.post("/api/jobs", json={"title": "PM"}).status_code == 400


def test_jobs_scoped_to_bearer_identity(client):
    job = client.post("/api/jobs", json={"title": "PM", "status": "saved"}, headers=_auth("alice")).json()

    assert job["userId"] == "alice"
    assert client.get("/api/jobs", headers=_auth("bob")).json() == []
    assert client.get(f"/api/jobs/{job['id']}", headers=_auth("bob")).status_code == 404
    assert client.put(f"/api/jobs/{job['id']}", json={"title": "X"}, headers=_auth("bob")).status_code == 404
    assert client.delete(f"/api/jobs/{job['id']}", headers=_auth("bob")).status_code == 404


def test_activity_endpoints(client):
    job = client.post("/api/jobs", json={"title": "PM", "status": "saved"}).json()

    create_resp = client.post(
        f"/api/jobs/{job['id']}/activities",
        json={"type": "follow_up", "title": "Sent email", "description": "to recruiter"},
    )
    assert create_resp.status_code == 201
    activity = create_resp.json()
    assert activity["jobId"] == job["id"]
    assert activity["date"]

    assert [a["id"] for a in client.get(f"/api/jobs/{job['id']}/activities").json()] == [activity["id"]]

    assert client.delete(f"/api/activities/{activity['id']}").status_code == 200
    assert client.get(f"/api/jobs/{job['id']}/activities").json() == []


def test_activity_validation_and_missing_job(client):
    job = client.post("/api/jobs", json={"title": "PM", "status": "saved"}).json()
    assert client.post(f"/api/jobs/{job['id']}/activities", json={"title": "x"}).status_code == 400
    assert client.post("/api/jobs/missing/activities", json={"type": "note", "title": "x"}).status_code == 404
    assert client.delete("/api/activities/missing").status_code == 404
