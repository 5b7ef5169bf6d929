"""
Status transition tables for candidates, jobs and applications.

Each entity has an exhaustive table of allowed moves. Moving to the
current status is a no-op and always allowed; anything not in the table
raises InvalidTransitionError.
"""

from typing import Final, Union

from recruitdesk.core.exceptions import InvalidTransitionError
from recruitdesk.utils.constants import ApplicationStatus, CandidateStatus, JobStatus

StatusLike = Union[str, CandidateStatus, JobStatus, ApplicationStatus]


CANDIDATE_TRANSITIONS: Final[dict[CandidateStatus, frozenset[CandidateStatus]]] = {
    CandidateStatus.NEW: frozenset(
        {
            CandidateStatus.ACTIVE,
            CandidateStatus.INTERVIEWING,
            CandidateStatus.REJECTED,
            CandidateStatus.WITHDRAWN,
        }
    ),
    CandidateStatus.ACTIVE: frozenset(
        {
            CandidateStatus.INTERVIEWING,
            CandidateStatus.OFFER_EXTENDED,
            CandidateStatus.REJECTED,
            CandidateStatus.WITHDRAWN,
        }
    ),
    CandidateStatus.INTERVIEWING: frozenset(
        {
            CandidateStatus.ACTIVE,
            CandidateStatus.OFFER_EXTENDED,
            CandidateStatus.REJECTED,
            CandidateStatus.WITHDRAWN,
        }
    ),
    CandidateStatus.OFFER_EXTENDED: frozenset(
        {
            CandidateStatus.INTERVIEWING,
            CandidateStatus.HIRED,
            CandidateStatus.REJECTED,
            CandidateStatus.WITHDRAWN,
        }
    ),
    CandidateStatus.HIRED: frozenset(),
    # Closed candidates can be reopened
    CandidateStatus.REJECTED: frozenset({CandidateStatus.ACTIVE}),
    CandidateStatus.WITHDRAWN: frozenset({CandidateStatus.ACTIVE}),
}

JOB_TRANSITIONS: Final[dict[JobStatus, frozenset[JobStatus]]] = {
    JobStatus.DRAFT: frozenset({JobStatus.OPEN, JobStatus.CANCELLED}),
    JobStatus.OPEN: frozenset({JobStatus.ON_HOLD, JobStatus.CLOSED, JobStatus.CANCELLED}),
    JobStatus.ON_HOLD: frozenset({JobStatus.OPEN, JobStatus.CLOSED, JobStatus.CANCELLED}),
    JobStatus.CLOSED: frozenset({JobStatus.OPEN}),
    JobStatus.CANCELLED: frozenset(),
}

APPLICATION_TRANSITIONS: Final[dict[ApplicationStatus, frozenset[ApplicationStatus]]] = {
    ApplicationStatus.PENDING: frozenset(
        {
            ApplicationStatus.UNDER_REVIEW,
            ApplicationStatus.APPROVED,
            ApplicationStatus.REJECTED,
            ApplicationStatus.WITHDRAWN,
        }
    ),
    ApplicationStatus.UNDER_REVIEW: frozenset(
        {
            ApplicationStatus.APPROVED,
            ApplicationStatus.REJECTED,
            ApplicationStatus.WITHDRAWN,
        }
    ),
    ApplicationStatus.APPROVED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.WITHDRAWN: frozenset(),
}

_TABLES: Final[dict[str, tuple[type, dict]]] = {
    "candidate": (CandidateStatus, CANDIDATE_TRANSITIONS),
    "job": (JobStatus, JOB_TRANSITIONS),
    "application": (ApplicationStatus, APPLICATION_TRANSITIONS),
}


def _lookup(entity: str, current: StatusLike, target: StatusLike):
    try:
        enum_cls, table = _TABLES[entity]
    except KeyError:
        raise ValueError(f"Unknown entity for status transitions: {entity}") from None

    try:
        return enum_cls(current), enum_cls(target), table
    except ValueError:
        raise InvalidTransitionError(entity, str(current), str(target)) from None


def can_transition(entity: str, current: StatusLike, target: StatusLike) -> bool:
    """Check whether ``entity`` may move from ``current`` to ``target``."""
    try:
        src, dst, table = _lookup(entity, current, target)
    except InvalidTransitionError:
        return False
    return src == dst or dst in table[src]


def validate_transition(entity: str, current: StatusLike, target: StatusLike) -> None:
    """
    Raise InvalidTransitionError unless the move is allowed.

    Args:
        entity: One of ``candidate``, ``job``, ``application``
        current: Status the record is in now
        target: Status requested
    """
    src, dst, table = _lookup(entity, current, target)
    if src != dst and dst not in table[src]:
        raise InvalidTransitionError(entity, src.value, dst.value)


def allowed_transitions(entity: str, current: StatusLike) -> list[str]:
    """Statuses reachable from ``current`` in one move, sorted."""
    enum_cls, table = _TABLES[entity]
    return sorted(s.value for s in table[enum_cls(current)])


def is_terminal(entity: str, status: StatusLike) -> bool:
    """True when no move leaves ``status``."""
    return not allowed_transitions(entity, status)
