"""Data layer for the job_deck reference server - JSON file read/write helpers.

Every job read and write is scoped to the owning user. Activities belong to
a job and go away with it.
"""

import json
import uuid
from pathlib import Path
from typing import Optional

from job_deck.config import get_settings
from job_deck.models import Activity, Job, utc_now

DATA_DIR = get_settings().data_dir
JOBS_FILE = DATA_DIR / "jobs.json"
ACTIVITIES_FILE = DATA_DIR / "activities.json"

JOB_FIELDS = ("title", "company", "status", "location", "source", "url")


class JobNotFoundError(Exception):
    """Raised when a job id does not exist or belongs to another user."""
    pass


class ActivityNotFoundError(Exception):
    pass


# --- File Operations ---


def _read_json(path: Path, default: dict) -> dict:
    """Read JSON file, return default if not exists or invalid.

    Args:
        path: Path to JSON file
        default: Value to return if file missing or malformed
    """
    if not path.exists():
        return default
    try:
        data = json.loads(path.read_text())
        # Must be a dict, not a list
        if not isinstance(data, dict):
            return default
        return data
    except (json.JSONDecodeError, IOError):
        return default


def _write_json(path: Path, data: dict) -> None:
    """Write JSON file with pretty formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))


def _load_jobs() -> list[dict]:
    return _read_json(JOBS_FILE, {"jobs": []}).get("jobs", [])


def _save_jobs(jobs: list[dict]) -> None:
    _write_json(JOBS_FILE, {"jobs": jobs})


def _load_activities() -> list[dict]:
    return _read_json(ACTIVITIES_FILE, {"activities": []}).get("activities", [])


def _save_activities(activities: list[dict]) -> None:
    _write_json(ACTIVITIES_FILE, {"activities": activities})


def _find_owned(jobs: list[dict], user_id: str, job_id: str) -> Optional[dict]:
    return next((j for j in jobs if j["id"] == job_id and j["userId"] == user_id), None)


# --- Jobs API ---


def list_jobs(user_id: str) -> list[Job]:
    """User's jobs, newest created first."""
    jobs = [Job.model_validate(j) for j in _load_jobs() if j["userId"] == user_id]
    # File order is creation order; reverse first so equal timestamps stay newest first
    jobs.reverse()
    jobs.sort(key=lambda j: j.created_at or "", reverse=True)
    return jobs


def get_job(user_id: str, job_id: str) -> Job:
    job = _find_owned(_load_jobs(), user_id, job_id)
    if job is None:
        raise JobNotFoundError(job_id)
    return Job.model_validate(job)


def create_job(user_id: str, fields: dict) -> Job:
    """Create a job. Caller has already checked title and status."""
    now = utc_now()
    job = Job(
        id=f"job_{uuid.uuid4().hex[:12]}",
        user_id=user_id,
        created_at=now,
        updated_at=now,
        **{k: fields.get(k) for k in JOB_FIELDS},
    )
    jobs = _load_jobs()
    jobs.append(job.to_wire())
    _save_jobs(jobs)
    return job


def update_job(user_id: str, job_id: str, fields: dict) -> Job:
    """Merge provided, non-null fields into the job and refresh updatedAt.

    Raises:
        JobNotFoundError: If job_id doesn't exist for this user
    """
    jobs = _load_jobs()
    existing = _find_owned(jobs, user_id, job_id)
    if existing is None:
        raise JobNotFoundError(job_id)

    for key in JOB_FIELDS:
        if fields.get(key) is not None:
            existing[key] = fields[key]
    existing["updatedAt"] = utc_now()
    _save_jobs(jobs)
    return Job.model_validate(existing)


def delete_job(user_id: str, job_id: str) -> None:
    """Delete a job and every activity attached to it."""
    jobs = _load_jobs()
    if _find_owned(jobs, user_id, job_id) is None:
        raise JobNotFoundError(job_id)
    _save_jobs([j for j in jobs if j["id"] != job_id])

    activities = _load_activities()
    remaining = [a for a in activities if a["jobId"] != job_id]
    if len(remaining) < len(activities):
        _save_activities(remaining)


# --- Activities API ---


def list_activities(user_id: str, job_id: str) -> list[Activity]:
    """Activities for one of the user's jobs. Unknown jobs have none."""
    if _find_owned(_load_jobs(), user_id, job_id) is None:
        return []
    return [Activity.model_validate(a) for a in _load_activities() if a["jobId"] == job_id]


def create_activity(user_id: str, job_id: str, fields: dict) -> Activity:
    """Attach an activity to a job. Date defaults to now.

    Raises:
        JobNotFoundError: If job_id doesn't exist for this user
    """
    if _find_owned(_load_jobs(), user_id, job_id) is None:
        raise JobNotFoundError(job_id)

    now = utc_now()
    activity = Activity(
        id=f"act_{uuid.uuid4().hex[:12]}",
        job_id=job_id,
        type=fields["type"],
        title=fields["title"],
        description=fields.get("description"),
        date=fields.get("date") or now,
        created_at=now,
    )
    activities = _load_activities()
    activities.append(activity.to_wire())
    _save_activities(activities)
    return activity


def delete_activity(user_id: str, activity_id: str) -> None:
    activities = _load_activities()
    activity = next((a for a in activities if a["id"] == activity_id), None)
    if activity is None or _find_owned(_load_jobs(), user_id, activity["jobId"]) is None:
        raise ActivityNotFoundError(activity_id)
    _save_activities([a for a in activities if a["id"] != activity_id])
