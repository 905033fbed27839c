"""Activity cache grouped by owning job."""

import logging
from typing import Optional

from pydantic import Field

from job_deck.errors import ValidationError
from job_deck.models import ACTIVITY_TYPES, Activity, ActivityCreate, WireModel
from job_deck.store import Store

logger = logging.getLogger(__name__)


class ActivitiesState(WireModel):
    by_job_id: dict[str, list[Activity]] = Field(default_factory=dict)
    status_by_job_id: dict[str, str] = Field(default_factory=dict)
    error_by_job_id: dict[str, Optional[str]] = Field(default_factory=dict)


class ActivitiesStore(Store):
    """Per-job activity lists. Fetch state is tracked independently per job."""

    def __init__(self, api=None, token: Optional[str] = None, state: Optional[ActivitiesState] = None):
        super().__init__(api, token)
        self.state = state or ActivitiesState()

    def _set(self, **updates) -> None:
        self.state = self.state.model_copy(update=updates)
        self._notify()

    # --- Operations ---

    async def fetch_for_job(self, job_id: str) -> list[Activity]:
        """Replace the job's list with the server's."""
        self._set(
            status_by_job_id={**self.state.status_by_job_id, job_id: "loading"},
            error_by_job_id={**self.state.error_by_job_id, job_id: None},
        )
        try:
            raw = await self._call("list_activities", job_id)
            activities = [Activity.model_validate(item) for item in raw]
        except Exception as e:
            logger.warning("Failed to load activities for %s: %s", job_id, e)
            self._set(
                status_by_job_id={**self.state.status_by_job_id, job_id: "failed"},
                error_by_job_id={
                    **self.state.error_by_job_id,
                    job_id: str(e) or "Failed to load activities",
                },
            )
            raise

        self._set(
            by_job_id={**self.state.by_job_id, job_id: activities},
            status_by_job_id={**self.state.status_by_job_id, job_id: "succeeded"},
        )
        return list(activities)

    async def add(self, job_id: str, fields: dict) -> Activity:
        """Create an activity and append it to the job's list.

        No dedup: adding the same activity twice stores it twice.
        """
        if not fields.get("type") or not fields.get("title"):
            raise ValidationError("type and title are required")
        if fields["type"] not in ACTIVITY_TYPES:
            raise ValidationError(
                f"Invalid activity type: {fields['type']}. Use: {', '.join(ACTIVITY_TYPES)}"
            )
        body = ActivityCreate.model_validate(fields).to_wire()

        activity = Activity.model_validate(await self._call("create_activity", job_id, body))
        current = self.state.by_job_id.get(job_id, [])
        self._set(by_job_id={**self.state.by_job_id, job_id: current + [activity]})
        return activity

    async def remove(self, job_id: str, activity_id: str) -> str:
        await self._call("delete_activity", activity_id)
        current = self.state.by_job_id.get(job_id)
        if current is not None:
            self._set(
                by_job_id={
                    **self.state.by_job_id,
                    job_id: [a for a in current if a.id != activity_id],
                }
            )
        return activity_id

    def clear_for_job(self, job_id: str) -> None:
        """Evict a job's activities from the cache. No network call."""
        by_job_id = {k: v for k, v in self.state.by_job_id.items() if k != job_id}
        status = {k: v for k, v in self.state.status_by_job_id.items() if k != job_id}
        errors = {k: v for k, v in self.state.error_by_job_id.items() if k != job_id}
        self._set(by_job_id=by_job_id, status_by_job_id=status, error_by_job_id=errors)

    def hydrate(self, data: dict) -> None:
        """Replace state from a saved snapshot. In-flight statuses are dropped."""
        state = ActivitiesState.model_validate(data)
        status = {k: v for k, v in state.status_by_job_id.items() if v != "loading"}
        self.state = state.model_copy(update={"status_by_job_id": status})
        self._notify()

    def snapshot(self) -> dict:
        return self.state.model_dump(mode="json", by_alias=True)

    # --- Selectors ---

    def for_job(self, job_id: str) -> list[Activity]:
        return list(self.state.by_job_id.get(job_id, []))

    def status_for(self, job_id: str) -> str:
        return self.state.status_by_job_id.get(job_id, "idle")

    def error_for(self, job_id: str) -> Optional[str]:
        return self.state.error_by_job_id.get(job_id)

    def all_activities(self) -> list[Activity]:
        """Every cached activity, job by job. Order across jobs is unspecified."""
        return [a for activities in self.state.by_job_id.values() for a in activities]
