"""In-memory backend for local-only mode.

Exposes the same functions as job_deck.api so the stores can run against it
unchanged. Ids are generated client-side and every call resolves immediately.
"""

import copy
import uuid
from typing import Optional

from job_deck.errors import NotFoundError, RequestError
from job_deck.models import utc_now

JOB_FIELDS = ("title", "company", "status", "location", "source", "url", "tags")


class LocalApi:
    """Stand-in for the REST backend that never leaves the process."""

    is_local = True

    def __init__(self, user_id: str = "local-user"):
        self.user_id = user_id
        self._jobs: dict[str, dict] = {}
        self._activities: dict[str, dict] = {}

    def _owned_job(self, job_id: str) -> dict:
        job = self._jobs.get(job_id)
        if job is None or job["userId"] != self.user_id:
            raise NotFoundError("Job not found")
        return job

    # --- Jobs ---

    def list_jobs(self, token: Optional[str] = None) -> list[dict]:
        # Insertion order is creation order; newest first
        jobs = [j for j in reversed(self._jobs.values()) if j["userId"] == self.user_id]
        return copy.deepcopy(jobs)

    def get_job(self, job_id: str, token: Optional[str] = None) -> dict:
        return copy.deepcopy(self._owned_job(job_id))

    def create_job(self, payload: dict, token: Optional[str] = None) -> dict:
        if not payload.get("title") or not payload.get("status"):
            raise RequestError("title and status are required fields", 400)
        now = utc_now()
        job = {"id": uuid.uuid4().hex, "userId": self.user_id}
        for field in JOB_FIELDS:
            job[field] = payload.get(field)
        job["tags"] = list(payload.get("tags") or [])
        job["createdAt"] = now
        job["updatedAt"] = now
        self._jobs[job["id"]] = job
        return copy.deepcopy(job)

    def update_job(self, job_id: str, changes: dict, token: Optional[str] = None) -> dict:
        job = self._owned_job(job_id)
        for field in JOB_FIELDS:
            if changes.get(field) is not None:
                job[field] = changes[field]
        job["updatedAt"] = utc_now()
        return copy.deepcopy(job)

    def delete_job(self, job_id: str, token: Optional[str] = None) -> dict:
        self._owned_job(job_id)
        del self._jobs[job_id]
        self._activities = {
            aid: a for aid, a in self._activities.items() if a["jobId"] != job_id
        }
        return {"ok": True}

    # --- Activities ---

    def list_activities(self, job_id: str, token: Optional[str] = None) -> list[dict]:
        return copy.deepcopy([a for a in self._activities.values() if a["jobId"] == job_id])

    def create_activity(self, job_id: str, payload: dict, token: Optional[str] = None) -> dict:
        self._owned_job(job_id)
        if not payload.get("type") or not payload.get("title"):
            raise RequestError("type and title are required fields", 400)
        now = utc_now()
        activity = {
            "id": uuid.uuid4().hex,
            "jobId": job_id,
            "type": payload["type"],
            "title": payload["title"],
            "description": payload.get("description"),
            "date": payload.get("date") or now,
            "createdAt": now,
        }
        self._activities[activity["id"]] = activity
        return copy.deepcopy(activity)

    def delete_activity(self, activity_id: str, token: Optional[str] = None) -> dict:
        activity = self._activities.get(activity_id)
        if activity is None:
            raise NotFoundError("Activity not found")
        self._owned_job(activity["jobId"])
        del self._activities[activity_id]
        return {"ok": True}

    def seed(self, jobs: list, activities: list) -> None:
        """Load previously saved jobs (newest first) and activities (models or wire dicts)."""
        for job in reversed(list(jobs)):
            data = job.to_wire() if hasattr(job, "to_wire") else dict(job)
            data.setdefault("userId", self.user_id)
            data.setdefault("tags", [])
            self._jobs[data["id"]] = data
        for activity in activities:
            data = activity.to_wire() if hasattr(activity, "to_wire") else dict(activity)
            self._activities[data["id"]] = data
