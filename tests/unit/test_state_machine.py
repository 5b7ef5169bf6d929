"""
Tests for recruitdesk.core.state_machine: status transition tables.
"""

import pytest

from recruitdesk.core.exceptions import InvalidTransitionError
from recruitdesk.core.state_machine import (
    CANDIDATE_TRANSITIONS,
    allowed_transitions,
    can_transition,
    is_terminal,
    validate_transition,
)
from recruitdesk.utils.constants import CandidateStatus


class TestCandidateTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            ("new", "active"),
            ("new", "interviewing"),
            ("active", "offer_extended"),
            ("interviewing", "active"),
            ("offer_extended", "hired"),
            ("rejected", "active"),
            ("withdrawn", "active"),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition("candidate", current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            ("new", "hired"),
            ("new", "offer_extended"),
            ("hired", "active"),
            ("rejected", "hired"),
        ],
    )
    def test_forbidden(self, current, target):
        assert not can_transition("candidate", current, target)

    def test_same_status_is_noop(self):
        assert can_transition("candidate", "hired", "hired")
        validate_transition("candidate", CandidateStatus.NEW, CandidateStatus.NEW)

    def test_table_is_exhaustive(self):
        assert set(CANDIDATE_TRANSITIONS) == set(CandidateStatus)


class TestJobTransitions:
    def test_publish_draft(self):
        assert can_transition("job", "draft", "open")

    def test_reopen_closed(self):
        assert can_transition("job", "closed", "open")

    def test_cancelled_is_terminal(self):
        assert is_terminal("job", "cancelled")

    def test_draft_cannot_close(self):
        assert not can_transition("job", "draft", "closed")


class TestApplicationTransitions:
    def test_pending_can_be_approved(self):
        assert can_transition("application", "pending", "approved")

    def test_decisions_are_final(self):
        for status in ("approved", "rejected", "withdrawn"):
            assert is_terminal("application", status)

    def test_approved_cannot_be_rejected(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            validate_transition("application", "approved", "rejected")
        assert exc_info.value.current == "approved"
        assert exc_info.value.target == "rejected"
        assert "application" in str(exc_info.value)


class TestHelpers:
    def test_allowed_transitions_sorted(self):
        assert allowed_transitions("job", "open") == ["cancelled", "closed", "on_hold"]

    def test_unknown_status_is_invalid(self):
        assert not can_transition("candidate", "new", "promoted")
        with pytest.raises(InvalidTransitionError):
            validate_transition("candidate", "limbo", "new")

    def test_unknown_entity(self):
        with pytest.raises(ValueError, match="Unknown entity"):
            validate_transition("invoice", "draft", "paid")
