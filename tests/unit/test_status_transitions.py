"""Unit tests for the submission status state machine."""

from __future__ import annotations

import pytest

from garage.submissions.service import VALID_TRANSITIONS, validate_transition


class TestSubmissionStateMachine:
    """Test submission status transitions."""

    def test_valid_transitions_structure(self):
        """All statuses have defined transitions."""
        assert set(VALID_TRANSITIONS.keys()) == {"pending", "accepted", "rejected"}

    def test_pending_can_be_reviewed(self):
        """pending -> accepted and pending -> rejected are valid."""
        validate_transition("pending", "accepted")
        validate_transition("pending", "rejected")

    def test_rejected_can_be_resubmitted(self):
        """rejected -> pending is valid."""
        validate_transition("rejected", "pending")

    def test_accepted_is_terminal(self):
        """accepted has no valid transitions."""
        assert VALID_TRANSITIONS["accepted"] == []
        for target in ("pending", "rejected"):
            with pytest.raises(ValueError, match="Invalid transition"):
                validate_transition("accepted", target)

    def test_rejected_cannot_be_accepted_directly(self):
        """A rejected claim must be resubmitted before it can be accepted."""
        with pytest.raises(ValueError, match="Invalid transition"):
            validate_transition("rejected", "accepted")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError, match="Invalid transition"):
            validate_transition("draft", "pending")
