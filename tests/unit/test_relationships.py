"""
Tests for recruitdesk.core.relationships: id-array links and the consistency report.
"""

from recruitdesk.core.relationships import (
    add_candidate_to_job,
    add_job_to_candidate,
    add_job_to_client,
    remove_candidate_from_job,
    remove_job_from_candidate,
    remove_job_from_client,
    validate_relationships,
)
from recruitdesk.data.models import Candidate, Client, Job


class TestClientJobLinks:
    def test_add_is_idempotent(self, sample_client):
        once = add_job_to_client(sample_client, "job_2")
        twice = add_job_to_client(once, "job_2")
        assert twice.job_ids == ["job_1", "job_2"]

    def test_add_returns_copy(self, sample_client):
        add_job_to_client(sample_client, "job_2")
        assert sample_client.job_ids == ["job_1"]

    def test_remove(self, sample_client):
        assert remove_job_from_client(sample_client, "job_1").job_ids == []

    def test_remove_missing_is_noop(self, sample_client):
        assert remove_job_from_client(sample_client, "job_9").job_ids == ["job_1"]


class TestJobCandidateLinks:
    def test_add_candidate_to_job(self, sample_job):
        assert add_candidate_to_job(sample_job, "cand_2").candidate_ids == ["cand_1", "cand_2"]
        assert add_candidate_to_job(sample_job, "cand_1").candidate_ids == ["cand_1"]

    def test_remove_candidate_from_job(self, sample_job):
        assert remove_candidate_from_job(sample_job, "cand_1").candidate_ids == []

    def test_add_job_to_candidate(self, sample_candidate):
        assert add_job_to_candidate(sample_candidate, "job_2").job_ids == ["job_1", "job_2"]
        assert add_job_to_candidate(sample_candidate, "job_1").job_ids == ["job_1"]

    def test_remove_job_drops_pipeline_entry(self, sample_candidate):
        detached = remove_job_from_candidate(sample_candidate, "job_1")
        assert detached.job_ids == []
        assert detached.job_applications == []


class TestValidateRelationships:
    def test_consistent_graph(self, sample_client, sample_job, sample_candidate):
        report = validate_relationships([sample_client], [sample_job], [sample_candidate])
        assert report.valid
        assert report.errors == []

    def test_dangling_client_reference(self, sample_job):
        report = validate_relationships([], [sample_job], [])
        assert not report.valid
        assert report.errors == ["Job job_1 references non-existent client client_1"]

    def test_missing_back_link_on_client(self, sample_job):
        client = Client(id="client_1", company_name="Acme Corp")
        report = validate_relationships([client], [sample_job], [])
        assert report.errors == ["Client client_1 missing job job_1 in job_ids"]

    def test_candidate_points_at_missing_job(self, sample_client, sample_candidate):
        report = validate_relationships([sample_client], [], [sample_candidate])
        assert report.errors == ["Candidate cand_1 references non-existent job job_1"]

    def test_missing_back_link_on_job(self, sample_client, sample_candidate):
        job = Job(id="job_1", title="Backend Engineer", client_id="client_1")
        report = validate_relationships([sample_client], [job], [sample_candidate])
        assert report.errors == ["Job job_1 missing candidate cand_1 in candidate_ids"]

    def test_reports_every_problem(self):
        clients = [Client(id="c1", company_name="Acme")]
        jobs = [Job(id="j1", title="Dev", client_id="c1"), Job(id="j2", title="Ops", client_id="c9")]
        candidates = [
            Candidate(id="k1", first_name="A", last_name="B", email="a@example.com", job_ids=["j1", "j3"]),
        ]
        report = validate_relationships(clients, jobs, candidates)
        assert len(report.errors) == 4

    def test_does_not_repair(self, sample_job):
        client = Client(id="client_1", company_name="Acme Corp")
        validate_relationships([client], [sample_job], [])
        assert client.job_ids == []
