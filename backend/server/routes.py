"""API routes for jobs and activities."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel

from job_deck.config import get_settings
from server.data import (
    ActivityNotFoundError,
    JobNotFoundError,
    create_activity,
    create_job,
    delete_activity,
    delete_job,
    get_job,
    list_activities,
    list_jobs,
    update_job,
)

router = APIRouter(prefix="/api")


def get_user_id(authorization: Optional[str] = Header(None)) -> str:
    """Caller identity: the bearer token as-is, or the default demo user."""
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        if token:
            return token
    return get_settings().default_user


# --- Request Models ---


class JobRequest(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    status: Optional[str] = None
    location: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None


class ActivityRequest(BaseModel):
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None


# --- Jobs ---


@router.get("/jobs")
def read_jobs(user_id: str = Depends(get_user_id)):
    return [job.to_wire() for job in list_jobs(user_id)]


@router.post("/jobs", status_code=201)
def add_job(req: JobRequest, user_id: str = Depends(get_user_id)):
    if not req.title or not req.status:
        raise HTTPException(status_code=400, detail="title and status are required fields")
    return create_job(user_id, req.model_dump()).to_wire()


@router.get("/jobs/{job_id}")
def read_job(job_id: str, user_id: str = Depends(get_user_id)):
    try:
        return get_job(user_id, job_id).to_wire()
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")


@router.put("/jobs/{job_id}")
def edit_job(job_id: str, req: JobRequest, user_id: str = Depends(get_user_id)):
    try:
        return update_job(user_id, job_id, req.model_dump(exclude_none=True)).to_wire()
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")


@router.delete("/jobs/{job_id}")
def remove_job(job_id: str, user_id: str = Depends(get_user_id)):
    try:
        delete_job(user_id, job_id)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")
    return {"ok": True}


# --- Activities ---


@router.get("/jobs/{job_id}/activities")
def read_activities(job_id: str, user_id: str = Depends(get_user_id)):
    return [a.to_wire() for a in list_activities(user_id, job_id)]


@router.post("/jobs/{job_id}/activities", status_code=201)
def add_activity(job_id: str, req: ActivityRequest, user_id: str = Depends(get_user_id)):
    if not req.type or not req.title:
        raise HTTPException(status_code=400, detail="type and title are required fields")
    try:
        return create_activity(user_id, job_id, req.model_dump()).to_wire()
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")


@router.delete("/activities/{activity_id}")
def remove_activity(activity_id: str, user_id: str = Depends(get_user_id)):
    try:
        delete_activity(user_id, activity_id)
    except ActivityNotFoundError:
        raise HTTPException(status_code=404, detail="Activity not found")
    return {"ok": True}
