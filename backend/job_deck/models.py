"""Pydantic models for job_deck data structures."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


STATUSES = ("saved", "applied", "assessment", "interview", "offer", "rejected")
DEFAULT_STATUS = "saved"

ACTIVITY_TYPES = ("applied", "follow_up", "interview", "offer", "note")


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string, the format the backend emits."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class WireModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Job Models ---


class Job(WireModel):
    id: str
    user_id: Optional[str] = None
    title: str
    company: Optional[str] = None
    # Stored as given; views treat unknown or missing values as "saved"
    status: Optional[str] = DEFAULT_STATUS
    location: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)  # client display only
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        """Handle null tags from backends that do not store them."""
        if v is None:
            return []
        return dedupe_tags(list(v))


class JobCreate(WireModel):
    """Body of POST /api/jobs."""
    title: str
    company: Optional[str] = None
    status: str = DEFAULT_STATUS
    location: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        if v is None:
            return []
        return dedupe_tags(list(v))


# --- Activity Models ---


class Activity(WireModel):
    id: str
    job_id: str
    type: str
    title: str
    description: Optional[str] = None
    date: Optional[str] = None
    created_at: Optional[str] = None


class ActivityCreate(WireModel):
    """Body of POST /api/jobs/{job_id}/activities."""
    type: str
    title: str
    description: Optional[str] = None
    date: Optional[str] = None


# --- Filters ---


class JobFilters(BaseModel):
    status: str = "all"
    source: str = "all"
    search: str = ""


def dedupe_tags(tags: list[str]) -> list[str]:
    """Drop repeated tags, keeping first-seen order for display."""
    seen = set()
    out = []
    for tag in tags:
        if tag not in seen:
            seen.add(tag)
            out.append(tag)
    return out
