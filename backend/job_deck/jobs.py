"""Normalized cache of job records, kept in step with the backend."""

import logging
from typing import Optional, Union

from pydantic import Field
from pydantic.alias_generators import to_snake

from job_deck.errors import ValidationError
from job_deck.models import DEFAULT_STATUS, Job, JobCreate, WireModel, dedupe_tags, utc_now
from job_deck.store import Store, wire_keys

logger = logging.getLogger(__name__)


class JobsState(WireModel):
    by_id: dict[str, Job] = Field(default_factory=dict)
    all_ids: list[str] = Field(default_factory=list)  # display order, newest first
    status: str = "idle"  # idle | loading | succeeded | failed, for the last full fetch
    error: Optional[str] = None


def normalize_jobs(jobs: list[Job]) -> tuple[dict[str, Job], list[str]]:
    """Build by_id/all_ids from a server list. Repeated ids keep their first position."""
    by_id: dict[str, Job] = {}
    all_ids: list[str] = []
    for job in jobs:
        if job.id not in by_id:
            all_ids.append(job.id)
        by_id[job.id] = job
    return by_id, all_ids


def _keep_client_tags(job: Job, tags: Optional[list[str]]) -> Job:
    """The backend may not store tags; keep the ones the client sent."""
    if tags and not job.tags:
        return job.model_copy(update={"tags": dedupe_tags(list(tags))})
    return job


class JobsStore(Store):
    """Jobs keyed by id plus an explicit ordering list.

    The cache only changes on confirmed success. Full fetches replace it;
    create and upsert-on-missing prepend; a normal update keeps position.
    """

    def __init__(self, api=None, token: Optional[str] = None, state: Optional[JobsState] = None):
        super().__init__(api, token)
        self.state = state or JobsState()

    # --- Operations ---

    async def fetch_all(self) -> list[Job]:
        """Replace the whole cache with the server's list."""
        self.state = self.state.model_copy(update={"status": "loading", "error": None})
        self._notify()
        try:
            raw = await self._call("list_jobs")
            jobs = [Job.model_validate(item) for item in raw]
        except Exception as e:
            logger.warning("Failed to load jobs: %s", e)
            self.state = self.state.model_copy(
                update={"status": "failed", "error": str(e) or "Failed to load jobs"}
            )
            self._notify()
            raise

        by_id, all_ids = normalize_jobs(jobs)
        self.state = JobsState(by_id=by_id, all_ids=all_ids, status="succeeded", error=None)
        logger.debug("Loaded %d jobs", len(all_ids))
        self._notify()
        return self.select_all()

    async def get(self, job_id: str) -> Job:
        """Fetch one job from the backend and upsert it."""
        job = Job.model_validate(await self._call("get_job", job_id))
        self._upsert(job)
        return job

    async def create(self, payload: Union[dict, JobCreate]) -> Job:
        if isinstance(payload, JobCreate):
            payload = payload.model_dump(exclude_none=True)
        if not payload.get("title"):
            raise ValidationError("title is required")
        fields = dict(payload)
        if not fields.get("status"):
            fields["status"] = DEFAULT_STATUS
        body = JobCreate.model_validate(fields).to_wire()

        job = Job.model_validate(await self._call("create_job", body))
        job = _keep_client_tags(job, body.get("tags"))
        self.receive(job)
        return job

    async def update(self, job_id: str, changes: dict) -> Job:
        body = wire_keys(changes)
        job = Job.model_validate(await self._call("update_job", job_id, body))
        if "tags" in body:
            tags = body["tags"]
        else:
            cached = self.state.by_id.get(job_id)
            tags = cached.tags if cached is not None else None
        job = _keep_client_tags(job, tags)
        self._upsert(job)
        return job

    async def remove(self, job_id: str) -> str:
        """Delete on the backend, then drop from the cache.

        Activities for the job are not touched here; see Tracker.delete_job.
        """
        await self._call("delete_job", job_id)
        by_id = dict(self.state.by_id)
        by_id.pop(job_id, None)
        all_ids = [i for i in self.state.all_ids if i != job_id]
        self.state = self.state.model_copy(update={"by_id": by_id, "all_ids": all_ids})
        logger.debug("Removed job %s", job_id)
        self._notify()
        return job_id

    # --- Local mutations ---

    def receive(self, job: Job) -> None:
        """Insert a created job. Prepends its id only if not already present."""
        self._upsert(job)

    def update_local(self, job_id: str, changes: dict) -> Optional[Job]:
        """Merge changes into a cached job without a network call."""
        existing = self.state.by_id.get(job_id)
        if existing is None:
            return None
        data = existing.model_dump()
        for key, value in changes.items():
            key = to_snake(key)
            if key not in ("id", "created_at"):
                data[key] = value
        data["updated_at"] = utc_now()
        updated = Job.model_validate(data)
        self._upsert(updated)
        return updated

    def hydrate(self, data: dict) -> None:
        """Replace state from a saved snapshot."""
        state = JobsState.model_validate(data)
        by_id, all_ids = state.by_id, [i for i in state.all_ids if i in state.by_id]
        missing = [i for i in by_id if i not in all_ids]
        self.state = state.model_copy(
            update={"all_ids": all_ids + missing, "status": "idle"}
        )
        self._notify()

    def snapshot(self) -> dict:
        return self.state.model_dump(mode="json", by_alias=True)

    def _upsert(self, job: Job) -> None:
        by_id = dict(self.state.by_id)
        by_id[job.id] = job
        all_ids = self.state.all_ids
        if job.id not in all_ids:
            all_ids = [job.id] + all_ids
        self.state = self.state.model_copy(update={"by_id": by_id, "all_ids": all_ids})
        self._notify()

    # --- Selectors ---

    def select_all(self) -> list[Job]:
        return [self.state.by_id[i] for i in self.state.all_ids]

    def select_by_id(self, job_id: str) -> Optional[Job]:
        return self.state.by_id.get(job_id)

    @property
    def status(self) -> str:
        return self.state.status

    @property
    def error(self) -> Optional[str]:
        return self.state.error
