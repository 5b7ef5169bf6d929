"""
Tests for recruitdesk.data.repositories against a mocked MongoDB collection.
"""

from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo import ASCENDING, DESCENDING

from recruitdesk.core.exceptions import InvalidTransitionError, NotFoundError, ProtectedDocumentError
from recruitdesk.data.models import DEFAULT_PIPELINE_TEMPLATES, CategoryCreate, Job, TagCreate
from recruitdesk.data.repositories import (
    CandidateRepository,
    CategoryRepository,
    JobRepository,
    PipelineRepository,
    TagRepository,
)
from recruitdesk.utils.constants import CandidateStatus, JobStatus


@pytest.fixture
def collection():
    collection = MagicMock()
    cursor = MagicMock()
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.__iter__.return_value = iter([])
    collection.find.return_value.sort.return_value = cursor
    collection.update_one.return_value = MagicMock(matched_count=1)
    return collection


@pytest.fixture
def db_manager(collection):
    manager = MagicMock()
    manager.get_sync_collection.return_value = collection
    manager.get_async_collection.return_value = collection
    return manager


@pytest.fixture
def job_repo(db_manager):
    return JobRepository(db_manager=db_manager)


def _job_doc(**fields):
    return {"_id": "job_1", "title": "Backend Engineer", "client_id": "client_1", "status": "draft", **fields}


class TestCollectionNames:
    def test_from_model_settings(self, db_manager, collection):
        collection.find_one.return_value = None
        JobRepository(db_manager=db_manager).get_by_id("job_1")
        db_manager.get_sync_collection.assert_called_with("jobs")


class TestReads:
    def test_get_by_id(self, job_repo, collection):
        collection.find_one.return_value = _job_doc()
        job = job_repo.get_by_id("job_1")
        assert isinstance(job, Job)
        assert job.id == "job_1"
        collection.find_one.assert_called_once_with({"_id": "job_1"})

    def test_get_by_id_missing(self, job_repo, collection):
        collection.find_one.return_value = None
        assert job_repo.get_by_id("nope") is None

    def test_find_sorts_newest_first(self, job_repo, collection):
        cursor = collection.find.return_value.sort.return_value
        cursor.__iter__.return_value = iter([_job_doc(), _job_doc(_id="job_2")])

        jobs = job_repo.find({"status": "open"})

        assert [j.id for j in jobs] == ["job_1", "job_2"]
        collection.find.assert_called_once_with({"status": "open"})
        collection.find.return_value.sort.assert_called_once_with("created_at", DESCENDING)
        cursor.limit.assert_called_once_with(100)

    def test_get_all_has_no_limit(self, job_repo, collection):
        job_repo.get_all()
        collection.find.return_value.sort.return_value.limit.assert_not_called()

    def test_get_many_empty(self, job_repo, collection):
        assert job_repo.get_many([]) == []
        collection.find.assert_not_called()

    async def test_get_all_async(self, job_repo, collection):
        cursor = collection.find.return_value.sort.return_value
        cursor.to_list = AsyncMock(return_value=[_job_doc()])
        jobs = await job_repo.get_all_async()
        assert [j.id for j in jobs] == ["job_1"]
        cursor.to_list.assert_awaited_once_with(length=None)


class TestWrites:
    def test_create_assigns_id_and_timestamps(self, job_repo, collection):
        job = job_repo.create(Job(title="Dev", client_id="client_1", status=JobStatus.OPEN))

        assert job.id
        document = collection.insert_one.call_args.args[0]
        assert document["_id"] == job.id
        assert document["status"] == "open"
        assert document["created_at"] == job.created_at
        assert collection.insert_one.call_args.kwargs == {"session": None}

    def test_create_passes_session(self, job_repo, collection):
        session = object()
        job_repo.create(Job(title="Dev", client_id="client_1"), session=session)
        assert collection.insert_one.call_args.kwargs["session"] is session

    def test_update_converts_values(self, job_repo, collection):
        collection.find_one.return_value = _job_doc()
        job_repo.update("job_1", {"status": JobStatus.OPEN, "start_date": date(2024, 9, 1)})

        query, update = collection.update_one.call_args.args
        assert query == {"_id": "job_1"}
        assert update["$set"]["status"] == "open"
        assert isinstance(update["$set"]["start_date"], datetime)
        assert "updated_at" in update["$set"]

    def test_update_missing_document(self, job_repo, collection):
        collection.update_one.return_value = MagicMock(matched_count=0)
        assert job_repo.update("nope", {"title": "x"}) is None

    def test_add_to_array(self, job_repo, collection):
        assert job_repo.add_to_array("job_1", "candidate_ids", "cand_1")
        _, update = collection.update_one.call_args.args
        assert update["$addToSet"] == {"candidate_ids": "cand_1"}

    def test_remove_from_array(self, job_repo, collection):
        collection.update_one.return_value = MagicMock(matched_count=0)
        assert not job_repo.remove_from_array("job_1", "candidate_ids", "cand_1")
        _, update = collection.update_one.call_args.args
        assert update["$pull"] == {"candidate_ids": "cand_1"}

    def test_delete(self, job_repo, collection):
        collection.delete_one.return_value = MagicMock(deleted_count=1)
        assert job_repo.delete("job_1")


class TestJobRepository:
    def test_publish_stamps_posted_date(self, job_repo, collection):
        collection.find_one.return_value = _job_doc()
        job_repo.publish("job_1")
        _, update = collection.update_one.call_args.args
        assert update["$set"]["status"] == "open"
        assert "posted_date" in update["$set"]

    def test_invalid_status_change(self, job_repo, collection):
        collection.find_one.return_value = _job_doc()
        with pytest.raises(InvalidTransitionError):
            job_repo.close("job_1")
        collection.update_one.assert_not_called()

    def test_status_counts(self, job_repo, collection):
        collection.aggregate.return_value = [{"_id": "open", "count": 3}]
        counts = job_repo.get_status_counts()
        assert counts["open"] == 3
        assert counts["draft"] == 0


class TestCandidateRepository:
    def test_get_by_job_status(self, db_manager, collection):
        CandidateRepository(db_manager=db_manager).get_by_job_status("job_1", CandidateStatus.INTERVIEWING)
        collection.find.assert_called_once_with(
            {"job_applications": {"$elemMatch": {"job_id": "job_1", "status": "interviewing"}}}
        )

    def test_email_lookup_is_case_insensitive(self, db_manager, collection):
        collection.find_one.return_value = None
        CandidateRepository(db_manager=db_manager).get_by_email(" Jane@Example.com ")
        query = collection.find_one.call_args.args[0]
        assert query["email"]["$options"] == "i"
        assert query["email"]["$regex"] == r"^Jane@Example\.com$"


class TestPipelineRepository:
    def test_seed_defaults(self, db_manager, collection):
        collection.find_one.return_value = None
        created = PipelineRepository(db_manager=db_manager).seed_defaults()

        assert len(created) == len(DEFAULT_PIPELINE_TEMPLATES)
        defaults = [p.name for p in created if p.is_default]
        assert defaults == ["Standard Hiring Pipeline"]
        assert collection.insert_one.call_count == len(DEFAULT_PIPELINE_TEMPLATES)

    def test_seed_skips_existing(self, db_manager, collection):
        collection.find_one.return_value = {"_id": "p1", "name": "existing"}
        assert PipelineRepository(db_manager=db_manager).seed_defaults() == []
        collection.insert_one.assert_not_called()


class TestCategoryRepository:
    def test_create_checks_parent(self, db_manager, collection):
        collection.find_one.return_value = None
        with pytest.raises(NotFoundError):
            CategoryRepository(db_manager=db_manager).create_from_schema(
                CategoryCreate(name="Backend", parent_id="cat_missing")
            )
        collection.insert_one.assert_not_called()

    def test_ordered_by_sort_order(self, db_manager, collection):
        CategoryRepository(db_manager=db_manager).get_ordered(active_only=True)
        collection.find.assert_called_once_with({"is_active": True})
        collection.find.return_value.sort.assert_called_once_with("sort_order", ASCENDING)

    def test_delete_with_subcategories_refused(self, db_manager, collection):
        collection.count_documents.return_value = 1
        collection.find_one.return_value = {"_id": "cat_eng", "name": "Engineering"}

        with pytest.raises(ProtectedDocumentError, match="delete all subcategories first"):
            CategoryRepository(db_manager=db_manager).delete("cat_eng")
        collection.delete_one.assert_not_called()

    def test_delete_leaf(self, db_manager, collection):
        collection.count_documents.return_value = 0
        collection.delete_one.return_value = MagicMock(deleted_count=1)
        assert CategoryRepository(db_manager=db_manager).delete("cat_be")

    def test_cannot_parent_itself(self, db_manager):
        from recruitdesk.data.models import CategoryUpdate

        with pytest.raises(ValueError):
            CategoryRepository(db_manager=db_manager).update_from_schema("cat_1", CategoryUpdate(parent_id="cat_1"))


class TestTagRepository:
    def test_system_tags_cannot_be_deleted(self, db_manager, collection):
        collection.find_one.return_value = {"_id": "tag_1", "name": "Urgent", "is_system": True}
        with pytest.raises(ProtectedDocumentError):
            TagRepository(db_manager=db_manager).delete("tag_1")
        collection.delete_one.assert_not_called()

    def test_custom_tag_deleted(self, db_manager, collection):
        collection.find_one.return_value = {"_id": "tag_2", "name": "Remote"}
        collection.delete_one.return_value = MagicMock(deleted_count=1)
        assert TagRepository(db_manager=db_manager).delete("tag_2")

    def test_user_created_tags_are_not_system(self, db_manager, collection):
        tag = TagRepository(db_manager=db_manager).create_from_schema(TagCreate(name="Remote"))
        assert not tag.is_system
        assert collection.insert_one.call_args.args[0]["is_system"] is False
