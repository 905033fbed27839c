"""Tests for the per-job activity cache."""

import asyncio

import pytest

from job_deck.activities import ActivitiesStore
from job_deck.errors import RequestError, ValidationError


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def job_ids(fake_api):
    a = fake_api.backend.create_job({"title": "A", "status": "saved"})
    b = fake_api.backend.create_job({"title": "B", "status": "applied"})
    return a["id"], b["id"]


@pytest.fixture
def store(fake_api):
    return ActivitiesStore(fake_api)


class TestFetchForJob:
    def test_replaces_list_wholesale(self, store, fake_api, job_ids):
        job_a, _ = job_ids
        fake_api.backend.create_activity(job_a, {"type": "note", "title": "Server note"})
        stale = run(store.add(job_a, {"type": "note", "title": "Stale"}))
        fake_api.backend.delete_activity(stale.id)

        activities = run(store.fetch_for_job(job_a))

        assert [a.title for a in activities] == ["Server note"]
        assert [a.title for a in store.for_job(job_a)] == ["Server note"]
        assert store.status_for(job_a) == "succeeded"

    def test_status_is_per_job(self, store, fake_api, job_ids):
        job_a, job_b = job_ids
        run(store.fetch_for_job(job_a))
        fake_api.failures["list_activities"] = RequestError("boom", 500)

        with pytest.raises(RequestError):
            run(store.fetch_for_job(job_b))

        assert store.status_for(job_a) == "succeeded"
        assert store.status_for(job_b) == "failed"
        assert store.error_for(job_b) == "boom"
        assert store.error_for(job_a) is None
        assert store.status_for("never-fetched") == "idle"

    def test_concurrent_fetches_do_not_interfere(self, store, fake_api, job_ids):
        job_a, job_b = job_ids
        fake_api.backend.create_activity(job_a, {"type": "note", "title": "A1"})
        fake_api.backend.create_activity(job_b, {"type": "interview", "title": "B1"})

        async def both():
            await asyncio.gather(store.fetch_for_job(job_a), store.fetch_for_job(job_b))

        run(both())
        assert [a.title for a in store.for_job(job_a)] == ["A1"]
        assert [a.title for a in store.for_job(job_b)] == ["B1"]


class TestAdd:
    def test_appends_and_creates_list(self, store, job_ids):
        job_a, _ = job_ids
        first = run(store.add(job_a, {"type": "applied", "title": "Sent CV"}))
        second = run(store.add(job_a, {"type": "follow_up", "title": "Pinged", "description": "email"}))

        assert [a.id for a in store.for_job(job_a)] == [first.id, second.id]
        assert second.description == "email"
        assert first.date is not None

    def test_requires_type_and_title(self, store, fake_api, job_ids):
        job_a, _ = job_ids
        with pytest.raises(ValidationError):
            run(store.add(job_a, {"title": "No type"}))
        with pytest.raises(ValidationError):
            run(store.add(job_a, {"type": "note"}))
        with pytest.raises(ValidationError):
            run(store.add(job_a, {"type": "party", "title": "Bad type"}))
        assert fake_api.calls == []

    def test_failure_leaves_cache(self, store, fake_api, job_ids):
        job_a, _ = job_ids
        fake_api.failures["create_activity"] = RequestError("API error", 500)
        with pytest.raises(RequestError):
            run(store.add(job_a, {"type": "note", "title": "x"}))
        assert store.for_job(job_a) == []
        assert job_a not in store.state.by_job_id


class TestRemoveAndClear:
    def test_remove_filters_activity(self, store, job_ids):
        job_a, _ = job_ids
        keep = run(store.add(job_a, {"type": "note", "title": "Keep"}))
        drop = run(store.add(job_a, {"type": "note", "title": "Drop"}))

        run(store.remove(job_a, drop.id))

        assert [a.id for a in store.for_job(job_a)] == [keep.id]

    def test_remove_without_cached_list_is_noop(self, store, fake_api, job_ids):
        job_a, job_b = job_ids
        created = fake_api.backend.create_activity(job_a, {"type": "note", "title": "x"})
        before = store.snapshot()

        run(store.remove(job_b, created["id"]))

        assert store.snapshot() == before

    def test_clear_for_job_is_local_only(self, store, fake_api, job_ids):
        job_a, job_b = job_ids
        run(store.add(job_a, {"type": "note", "title": "A"}))
        run(store.add(job_b, {"type": "note", "title": "B"}))
        run(store.fetch_for_job(job_a))
        calls = len(fake_api.calls)

        store.clear_for_job(job_a)

        assert len(fake_api.calls) == calls
        assert store.for_job(job_a) == []
        assert store.status_for(job_a) == "idle"
        assert [a.title for a in store.for_job(job_b)] == ["B"]

    def test_all_activities_flattens(self, store, job_ids):
        job_a, job_b = job_ids
        run(store.add(job_a, {"type": "note", "title": "A1"}))
        run(store.add(job_b, {"type": "note", "title": "B1"}))
        run(store.add(job_a, {"type": "note", "title": "A2"}))

        titles = [a.title for a in store.all_activities()]
        assert sorted(titles) == ["A1", "A2", "B1"]
        assert titles.index("A1") < titles.index("A2")

    def test_for_job_returns_copy(self, store, job_ids):
        job_a, _ = job_ids
        run(store.add(job_a, {"type": "note", "title": "A1"}))
        store.for_job(job_a).clear()
        assert len(store.for_job(job_a)) == 1
