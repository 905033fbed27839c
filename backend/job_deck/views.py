"""Derived views over the job and activity caches.

Pure functions: every call recomputes from the lists it is given.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from job_deck.models import DEFAULT_STATUS, STATUSES, Activity, Job, JobFilters

UPCOMING_LIMIT = 5


class DashboardStats(BaseModel):
    total_jobs: int = 0
    applied_count: int = 0
    interview_count: int = 0
    offer_count: int = 0
    this_week_count: int = 0
    status_counts: dict[str, int] = Field(default_factory=lambda: {s: 0 for s in STATUSES})
    source_counts: dict[str, int] = Field(default_factory=dict)  # first-seen order
    upcoming_activities: list[Activity] = Field(default_factory=list)


# --- Helpers ---


def status_of(job: Job) -> str:
    """Pipeline bucket for a job. Missing or unknown status counts as saved."""
    if job.status in STATUSES:
        return job.status
    return DEFAULT_STATUS


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date or datetime into an aware datetime.

    Naive values are local time, so a date-only value such as "2026-10-21"
    is local midnight of that day rather than UTC midnight.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def _local_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now().astimezone()
    if now.tzinfo is None:
        return now.astimezone()
    return now


def start_of_day(now: Optional[datetime] = None) -> datetime:
    now = _local_now(now)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: Optional[datetime] = None) -> datetime:
    """Monday 00:00 of the week containing now."""
    today = start_of_day(now)
    return today - timedelta(days=today.weekday())


# --- Views ---


def upcoming_activities(
    activities: Iterable[Activity],
    now: Optional[datetime] = None,
    limit: int = UPCOMING_LIMIT,
) -> list[Activity]:
    """Soonest activities dated today or later, ascending by date."""
    today = start_of_day(now)
    dated = []
    for activity in activities:
        when = parse_timestamp(activity.date)
        if when is not None and when >= today:
            dated.append((when, activity))
    dated.sort(key=lambda pair: pair[0])
    return [activity for _, activity in dated[:limit]]


def dashboard_stats(
    jobs: Iterable[Job],
    activities: Iterable[Activity],
    now: Optional[datetime] = None,
) -> DashboardStats:
    now = _local_now(now)
    week_start = start_of_week(now)
    stats = DashboardStats()

    for job in jobs:
        stats.total_jobs += 1
        status = status_of(job)
        stats.status_counts[status] += 1

        source = job.source or "Other"
        stats.source_counts[source] = stats.source_counts.get(source, 0) + 1

        created = parse_timestamp(job.created_at)
        if created is not None and week_start <= created <= now:
            stats.this_week_count += 1

    stats.applied_count = stats.status_counts["applied"]
    stats.interview_count = stats.status_counts["interview"]
    stats.offer_count = stats.status_counts["offer"]
    stats.upcoming_activities = upcoming_activities(activities, now)
    return stats


def pipeline(jobs: Iterable[Job]) -> dict[str, list[Job]]:
    """Jobs bucketed by status, in pipeline order. Each bucket keeps store order."""
    grouped: dict[str, list[Job]] = {s: [] for s in STATUSES}
    for job in jobs:
        grouped[status_of(job)].append(job)
    return grouped


def filter_jobs(
    jobs: Iterable[Job],
    status: str = "all",
    source: str = "all",
    search: str = "",
) -> list[Job]:
    """Jobs matching status AND source AND a case-insensitive title+company search."""
    needle = (search or "").strip().lower()
    matched = []
    for job in jobs:
        if status and status != "all" and status_of(job) != status:
            continue
        if source and source != "all" and (job.source or "") != source:
            continue
        if needle:
            haystack = f"{job.title or ''} {job.company or ''}".lower()
            if needle not in haystack:
                continue
        matched.append(job)
    return matched


def apply_filters(jobs: Iterable[Job], filters: JobFilters) -> list[Job]:
    return filter_jobs(jobs, filters.status, filters.source, filters.search)
