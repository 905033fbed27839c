"""
Job Deck backend API client.

One function per backend operation. Each takes the operation's identifiers
and payload plus an optional bearer token, and returns the decoded JSON body.
Non-success responses raise RequestError (NotFoundError for 404).

Usage:
    from job_deck import api

    jobs = api.list_jobs(token="...")
    job = api.create_job({"title": "PM", "company": "Acme", "status": "saved"})
    api.create_activity(job["id"], {"type": "note", "title": "Called recruiter"})
"""

from typing import Optional

from job_deck import http


# --- Jobs ---


def list_jobs(token: Optional[str] = None) -> list[dict]:
    return http.get("/api/jobs", token=token)


def get_job(job_id: str, token: Optional[str] = None) -> dict:
    return http.get(f"/api/jobs/{job_id}", token=token)


def create_job(payload: dict, token: Optional[str] = None) -> dict:
    return http.post("/api/jobs", token=token, json=payload)


def update_job(job_id: str, changes: dict, token: Optional[str] = None) -> dict:
    return http.put(f"/api/jobs/{job_id}", token=token, json=changes)


def delete_job(job_id: str, token: Optional[str] = None) -> Optional[dict]:
    return http.delete(f"/api/jobs/{job_id}", token=token)


# --- Activities ---


def list_activities(job_id: str, token: Optional[str] = None) -> list[dict]:
    return http.get(f"/api/jobs/{job_id}/activities", token=token)


def create_activity(job_id: str, payload: dict, token: Optional[str] = None) -> dict:
    return http.post(f"/api/jobs/{job_id}/activities", token=token, json=payload)


def delete_activity(activity_id: str, token: Optional[str] = None) -> Optional[dict]:
    return http.delete(f"/api/activities/{activity_id}", token=token)
