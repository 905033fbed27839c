"""Use-case layer over the job and activity caches.

Tracker owns one JobsStore and one ActivitiesStore, hydrates them from a
local snapshot before any fetch, mirrors every change back to it, and runs
the cross-store steps (job delete followed by activity eviction) that
neither store does on its own.
"""

import logging
from typing import Optional

from pydantic import ValidationError as ModelValidationError

from job_deck import views
from job_deck.activities import ActivitiesStore
from job_deck.config import get_settings
from job_deck.errors import ValidationError
from job_deck.jobs import JobsStore
from job_deck.models import STATUSES, Activity, Job, JobFilters
from job_deck.persistence import LocalSnapshot

logger = logging.getLogger(__name__)


class Tracker:
    def __init__(
        self,
        api=None,
        token: Optional[str] = None,
        snapshot: Optional[LocalSnapshot] = None,
    ):
        self.jobs = JobsStore(api, token)
        self.activities = ActivitiesStore(self.jobs.api, token)
        self.snapshot = snapshot
        self.filters = JobFilters()
        self._saved_content = None
        self._unsubscribers = []

        if snapshot is not None:
            self._restore(snapshot)
            if getattr(self.jobs.api, "is_local", False):
                # Local-only data lives nowhere else; reseed the in-memory backend
                self.jobs.api.seed(self.jobs.select_all(), self.activities.all_activities())
            self._saved_content = self._content(self.jobs.snapshot(), self.activities.snapshot())
            self._unsubscribers = [
                self.jobs.subscribe(self._persist),
                self.activities.subscribe(self._persist),
            ]

    @classmethod
    def from_settings(cls) -> "Tracker":
        """Build a tracker from environment settings."""
        settings = get_settings()
        if settings.local_only:
            from job_deck.local import LocalApi
            api = LocalApi()
        else:
            api = None
        snapshot = LocalSnapshot(settings.snapshot_path) if settings.persist else None
        return cls(api=api, token=settings.api_token or None, snapshot=snapshot)

    def close(self) -> None:
        """Stop mirroring to the snapshot."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def __enter__(self) -> "Tracker":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- Persistence ---

    def _restore(self, snapshot: LocalSnapshot) -> None:
        data = snapshot.load()
        if data is None:
            return
        try:
            self.jobs.hydrate(data["jobs"])
            self.activities.hydrate(data["activities"])
        except ModelValidationError as e:
            logger.warning("Discarding unreadable snapshot: %s", e)
            self.jobs.hydrate({})
            self.activities.hydrate({})

    @staticmethod
    def _content(jobs: dict, activities: dict) -> tuple:
        return jobs["byId"], jobs["allIds"], activities["byJobId"]

    def _persist(self) -> None:
        """Mirror both stores. Fetch status transitions alone do not rewrite the file."""
        jobs, activities = self.jobs.snapshot(), self.activities.snapshot()
        content = self._content(jobs, activities)
        if content == self._saved_content:
            return
        if self.snapshot.save(jobs, activities):
            self._saved_content = content

    # --- Jobs ---

    async def load(self) -> list[Job]:
        return await self.jobs.fetch_all()

    async def add_job(self, **fields) -> Job:
        return await self.jobs.create(fields)

    async def update_job(self, job_id: str, **changes) -> Job:
        return await self.jobs.update(job_id, changes)

    async def move_job(self, job_id: str, status: str) -> Job:
        """Move a job to another pipeline stage."""
        if status not in STATUSES:
            raise ValidationError(f"Invalid status: {status}. Use: {', '.join(STATUSES)}")
        return await self.jobs.update(job_id, {"status": status})

    async def delete_job(self, job_id: str) -> None:
        """Delete a job, then evict its activities. Two steps, not a transaction."""
        await self.jobs.remove(job_id)
        self.activities.clear_for_job(job_id)

    # --- Activities ---

    async def open_job(self, job_id: str) -> list[Activity]:
        """Load a job's activities."""
        return await self.activities.fetch_for_job(job_id)

    async def add_activity(self, job_id: str, **fields) -> Activity:
        return await self.activities.add(job_id, fields)

    async def delete_activity(self, job_id: str, activity_id: str) -> None:
        await self.activities.remove(job_id, activity_id)

    # --- Views ---

    def set_filters(self, **changes) -> JobFilters:
        """Merge partial filter changes into the current filters."""
        self.filters = self.filters.model_copy(update=changes)
        return self.filters

    def filtered(self, status: Optional[str] = None, source: Optional[str] = None,
                 search: Optional[str] = None) -> list[Job]:
        """Jobs matching the current filters, overridden by any argument given."""
        filters = self.filters
        return views.filter_jobs(
            self.jobs.select_all(),
            status=filters.status if status is None else status,
            source=filters.source if source is None else source,
            search=filters.search if search is None else search,
        )

    def pipeline(self) -> dict[str, list[Job]]:
        return views.pipeline(self.jobs.select_all())

    def dashboard(self, now=None) -> views.DashboardStats:
        return views.dashboard_stats(
            self.jobs.select_all(),
            self.activities.all_activities(),
            now=now,
        )
