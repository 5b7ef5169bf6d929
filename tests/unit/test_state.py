"""
Tests for recruitdesk.sync.state: dashboard snapshots and job selection.
"""

import pytest

from recruitdesk.auth.session import SessionStore
from recruitdesk.sync.state import DashboardState, bind_realtime


class StubSync:
    """Records subscriptions so tests can push snapshots by hand."""

    def __init__(self):
        self.callbacks = {}

    def subscribe(self, name, callback):
        self.callbacks[name] = callback
        return name


@pytest.fixture
def state():
    return DashboardState()


@pytest.fixture
def job_docs():
    return [
        {"id": "job_2", "title": "Frontend Engineer", "client_id": "client_1", "status": "open"},
        {"id": "job_1", "title": "Backend Engineer", "client_id": "client_1", "status": "draft"},
    ]


class TestSnapshots:
    def test_apply_and_read(self, state, job_docs):
        state.apply_snapshot("jobs", job_docs)
        assert state.has_snapshot("jobs")
        assert [d["id"] for d in state.snapshot("jobs")] == ["job_2", "job_1"]
        assert state.get("jobs", "job_1")["title"] == "Backend Engineer"

    def test_missing_collection_is_empty(self, state):
        assert not state.has_snapshot("clients")
        assert state.snapshot("clients") == []
        assert state.get("clients", "x") is None

    def test_snapshot_returns_copy(self, state, job_docs):
        state.apply_snapshot("jobs", job_docs)
        state.snapshot("jobs").clear()
        assert len(state.snapshot("jobs")) == 2

    def test_typed_accessor_skips_invalid(self, state, job_docs):
        state.apply_snapshot("jobs", [*job_docs, {"id": "broken"}])
        assert [j.id for j in state.jobs] == ["job_2", "job_1"]

    def test_taxonomy_accessors(self, state):
        state.apply_snapshot("categories", [{"id": "cat_1", "name": "Engineering"}])
        state.apply_snapshot("tags", [{"id": "tag_1", "name": "Remote", "is_system": True}])
        assert state.categories[0].name == "Engineering"
        assert state.tags[0].is_system


class TestLocalEdits:
    def test_upsert_merges_existing(self, state, job_docs):
        state.apply_snapshot("jobs", job_docs)
        state.upsert_local("jobs", {"id": "job_1", "status": "open"})
        job = state.get("jobs", "job_1")
        assert job["status"] == "open"
        assert job["title"] == "Backend Engineer"

    def test_upsert_inserts_at_front(self, state, job_docs, sample_job):
        state.apply_snapshot("jobs", job_docs[:1])
        state.upsert_local("jobs", sample_job)
        assert state.snapshot("jobs")[0]["id"] == "job_1"

    def test_upsert_requires_id(self, state):
        with pytest.raises(ValueError):
            state.upsert_local("jobs", {"title": "No id"})

    def test_next_snapshot_overwrites_local_edit(self, state, job_docs):
        state.apply_snapshot("jobs", job_docs)
        state.upsert_local("jobs", {"id": "job_1", "status": "open"})
        state.apply_snapshot("jobs", job_docs)
        assert state.get("jobs", "job_1")["status"] == "draft"

    def test_remove(self, state, job_docs):
        state.apply_snapshot("jobs", job_docs)
        assert state.remove_local("jobs", "job_2")
        assert not state.remove_local("jobs", "job_2")
        assert [d["id"] for d in state.snapshot("jobs")] == ["job_1"]


class TestListeners:
    def test_notified_on_every_change(self, state, job_docs):
        seen = []
        state.add_listener(seen.append)
        state.apply_snapshot("jobs", job_docs)
        state.upsert_local("clients", {"id": "client_1", "company_name": "Acme"})
        state.remove_local("jobs", "job_1")
        assert seen == ["jobs", "clients", "jobs"]

    def test_remove_listener(self, state, job_docs):
        seen = []
        remove = state.add_listener(seen.append)
        remove()
        remove()
        state.apply_snapshot("jobs", job_docs)
        assert seen == []


class TestJobSelection:
    def test_select_without_session(self, state, job_docs):
        state.apply_snapshot("jobs", job_docs)
        state.select_job("job_1")
        assert state.selected_job.title == "Backend Engineer"

    def test_selected_job_missing_from_snapshot(self, state):
        state.select_job("job_9")
        assert state.selected_job is None

    def test_selection_persists(self, session_store):
        DashboardState(session=session_store).select_job("job_1")
        assert DashboardState(session=SessionStore(session_store.path)).selected_job_id == "job_1"

    def test_clearing_selection(self, session_store):
        state = DashboardState(session=session_store)
        state.select_job("job_1")
        state.select_job(None)
        assert session_store.selected_job_id is None
        assert state.selected_job_id is None


class TestBindRealtime:
    def test_subscribes_to_configured_collections(self, state):
        sync = StubSync()
        bind_realtime(sync, state)
        assert set(sync.callbacks) == {
            "clients", "jobs", "candidates", "applications", "users", "pipelines", "categories", "tags",
        }

    def test_pushes_land_in_state(self, state, job_docs):
        sync = StubSync()
        bind_realtime(sync, state, collections=["jobs", "clients"])
        sync.callbacks["jobs"](job_docs)
        sync.callbacks["clients"]([{"id": "client_1", "company_name": "Acme"}])

        assert [j.id for j in state.jobs] == ["job_2", "job_1"]
        assert state.clients[0].company_name == "Acme"
