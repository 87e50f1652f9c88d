"""Unit tests for StateMachine."""

import pytest

from framebrew.core.state_machine import (
    InvalidTransitionError,
    StateMachine,
    create_job_state_machine,
    get_job_transitions,
)
from framebrew.models.generation_job import JobStatus


class TestStateMachine:
    """Tests for generic StateMachine."""

    @pytest.fixture
    def simple_transitions(self):
        """Create simple transition map for testing."""
        return {
            "start": ["middle", "end"],
            "middle": ["end"],
            "end": [],
        }

    @pytest.fixture
    def state_machine(self, simple_transitions):
        """Create state machine with simple transitions."""
        return StateMachine("start", simple_transitions)

    def test_initial_state(self, state_machine):
        """Test that initial state is set correctly."""
        assert state_machine.current == "start"

    def test_can_transition(self, state_machine):
        """Test can_transition for valid and unknown targets."""
        assert state_machine.can_transition("middle") is True
        assert state_machine.can_transition("nonexistent") is False

    def test_transition_invalid_raises(self, state_machine):
        """Test invalid transition raises error."""
        state_machine.transition("middle")

        with pytest.raises(InvalidTransitionError) as exc_info:
            state_machine.transition("start")  # Can't go back

        assert exc_info.value.current == "middle"
        assert exc_info.value.target == "start"
        assert "end" in exc_info.value.allowed
        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "INVALID_TRANSITION"

    def test_transition_to_returns_state(self, state_machine):
        """Test transition_to returns new state."""
        assert state_machine.transition_to("middle") == "middle"

    def test_is_terminal(self, state_machine):
        """Test that a state without outgoing transitions is terminal."""
        assert state_machine.is_terminal is False
        state_machine.transition("end")
        assert state_machine.is_terminal is True

    def test_reset_bypasses_validation(self, state_machine):
        """Test reset allows setting any state."""
        state_machine.transition("end")
        state_machine.reset("start")
        assert state_machine.current == "start"


class TestJobStateMachine:
    """Tests for the generation job transition map."""

    def test_default_initial_state(self):
        """Test a new job machine starts queued."""
        assert create_job_state_machine().current == JobStatus.QUEUED

    def test_accepts_string_status(self):
        """Test that stored string statuses are converted."""
        assert create_job_state_machine("scoring").current == JobStatus.SCORING

    def test_forward_path(self):
        """Test the full forward sequence to ready."""
        sm = create_job_state_machine()
        for status in (
            JobStatus.RUNNING,
            JobStatus.TRANSCODING,
            JobStatus.SCORING,
            JobStatus.READY,
        ):
            sm.transition(status)

        assert sm.current == JobStatus.READY
        assert sm.is_terminal

    @pytest.mark.parametrize(
        "status",
        [JobStatus.QUEUED, JobStatus.RUNNING, JobStatus.TRANSCODING, JobStatus.SCORING],
    )
    def test_any_active_status_can_fail(self, status):
        """Test that every non-terminal status may move to failed."""
        assert create_job_state_machine(status).can_transition(JobStatus.FAILED)

    @pytest.mark.parametrize("status", [JobStatus.READY, JobStatus.FAILED])
    def test_terminal_statuses_are_frozen(self, status):
        """Test that ready and failed accept no transition."""
        sm = create_job_state_machine(status)

        assert sm.is_terminal
        with pytest.raises(InvalidTransitionError):
            sm.transition(JobStatus.FAILED)

    def test_no_skipping_steps(self):
        """Test that a job cannot jump ahead in the sequence."""
        sm = create_job_state_machine(JobStatus.QUEUED)

        with pytest.raises(InvalidTransitionError):
            sm.transition(JobStatus.READY)

    def test_transition_map_covers_all_statuses(self):
        """Test every JobStatus has an entry."""
        assert set(get_job_transitions()) == set(JobStatus)
