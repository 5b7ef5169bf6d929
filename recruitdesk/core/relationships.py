"""
Bidirectional id-array relationships between clients, jobs and candidates.

client.job_ids <-> job.client_id and job.candidate_ids <-> candidate.job_ids
are stored on both sides. The helpers here return updated copies and are
idempotent. ``validate_relationships`` reports inconsistencies; it never
repairs them.
"""

from typing import Sequence

from pydantic import BaseModel, Field

from recruitdesk.data.models import Candidate, Client, Job


class RelationshipReport(BaseModel):
    """Outcome of a relationship check."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)


def add_job_to_client(client: Client, job_id: str) -> Client:
    if job_id in client.job_ids:
        return client
    return client.model_copy(update={"job_ids": [*client.job_ids, job_id]})


def remove_job_from_client(client: Client, job_id: str) -> Client:
    return client.model_copy(update={"job_ids": [i for i in client.job_ids if i != job_id]})


def add_candidate_to_job(job: Job, candidate_id: str) -> Job:
    if candidate_id in job.candidate_ids:
        return job
    return job.model_copy(update={"candidate_ids": [*job.candidate_ids, candidate_id]})


def remove_candidate_from_job(job: Job, candidate_id: str) -> Job:
    return job.model_copy(update={"candidate_ids": [i for i in job.candidate_ids if i != candidate_id]})


def add_job_to_candidate(candidate: Candidate, job_id: str) -> Candidate:
    if job_id in candidate.job_ids:
        return candidate
    return candidate.model_copy(update={"job_ids": [*candidate.job_ids, job_id]})


def remove_job_from_candidate(candidate: Candidate, job_id: str) -> Candidate:
    """Detach a job from a candidate, dropping its pipeline sub-record as well."""
    return candidate.model_copy(
        update={
            "job_ids": [i for i in candidate.job_ids if i != job_id],
            "job_applications": [a for a in candidate.job_applications if a.job_id != job_id],
        }
    )


def validate_relationships(
    clients: Sequence[Client],
    jobs: Sequence[Job],
    candidates: Sequence[Candidate],
) -> RelationshipReport:
    """
    Check both directions of every stored relationship.

    Returns:
        A report listing each dangling reference and each missing back-link
    """
    errors: list[str] = []
    clients_by_id = {c.id: c for c in clients}
    jobs_by_id = {j.id: j for j in jobs}

    for job in jobs:
        client = clients_by_id.get(job.client_id)
        if client is None:
            errors.append(f"Job {job.id} references non-existent client {job.client_id}")
        elif job.id not in client.job_ids:
            errors.append(f"Client {client.id} missing job {job.id} in job_ids")

    for candidate in candidates:
        for job_id in candidate.job_ids:
            job = jobs_by_id.get(job_id)
            if job is None:
                errors.append(f"Candidate {candidate.id} references non-existent job {job_id}")
            elif candidate.id not in job.candidate_ids:
                errors.append(f"Job {job_id} missing candidate {candidate.id} in candidate_ids")

    return RelationshipReport(valid=not errors, errors=errors)
