"""Job Deck client core: API client, normalized caches and derived views."""

from job_deck.activities import ActivitiesState, ActivitiesStore
from job_deck.errors import (
    JobDeckError,
    NotFoundError,
    PersistenceWarning,
    RequestError,
    ValidationError,
)
from job_deck.jobs import JobsState, JobsStore
from job_deck.local import LocalApi
from job_deck.models import ACTIVITY_TYPES, STATUSES, Activity, Job, JobCreate, JobFilters
from job_deck.persistence import LocalSnapshot
from job_deck.tracker import Tracker
from job_deck.views import DashboardStats, dashboard_stats, filter_jobs, pipeline

__all__ = [
    # Stores
    "JobsStore",
    "JobsState",
    "ActivitiesStore",
    "ActivitiesState",
    "Tracker",
    "LocalApi",
    "LocalSnapshot",
    # Models
    "Job",
    "JobCreate",
    "Activity",
    "JobFilters",
    "STATUSES",
    "ACTIVITY_TYPES",
    # Views
    "DashboardStats",
    "dashboard_stats",
    "filter_jobs",
    "pipeline",
    # Errors
    "JobDeckError",
    "ValidationError",
    "RequestError",
    "NotFoundError",
    "PersistenceWarning",
]
