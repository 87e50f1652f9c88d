"""Generic State Machine for model status transitions.

This module provides a reusable state machine pattern for managing
status transitions, plus the predefined transition map for generation jobs.

Example:
    # Define transitions
    TRANSITIONS: TransitionMap[JobStatus] = {
        JobStatus.QUEUED: [JobStatus.RUNNING, JobStatus.FAILED],
        JobStatus.RUNNING: [JobStatus.TRANSCODING, JobStatus.FAILED],
        ...
    }

    # Create state machine
    sm = StateMachine(JobStatus.QUEUED, TRANSITIONS)

    # Check and perform transitions
    if sm.can_transition(JobStatus.RUNNING):
        sm.transition(JobStatus.RUNNING)

    # Or use transition_to for simpler API
    sm.transition_to(JobStatus.TRANSCODING)
"""

from enum import Enum
from typing import Generic, TypeVar

from framebrew.core.exceptions import FrameBrewError

T = TypeVar("T", bound=str | Enum)

# Type alias for transition maps
TransitionMap = dict[T, list[T]]


class InvalidTransitionError(FrameBrewError):
    """Raised when an invalid state transition is attempted."""

    error_code = "INVALID_TRANSITION"
    status_code = 409

    def __init__(self, current: T, target: T, allowed: list[T] | None = None):
        self.current = current
        self.target = target
        self.allowed = allowed or []
        allowed_str = ", ".join(str(s) for s in self.allowed) if self.allowed else "none"
        super().__init__(
            message=f"Invalid transition from '{current}' to '{target}'. "
            f"Allowed transitions: {allowed_str}",
            context={
                "current": str(current),
                "target": str(target),
                "allowed": [str(s) for s in self.allowed],
            },
        )


class StateMachine(Generic[T]):
    """Generic state machine for status transitions.

    Provides a type-safe way to manage status transitions with
    explicit allowed transitions defined upfront.

    Attributes:
        current: Current state
        transitions: Map of allowed transitions from each state

    Example:
        sm = StateMachine(
            initial="draft",
            transitions={
                "draft": ["published", "archived"],
                "published": ["archived"],
                "archived": [],
            }
        )

        sm.transition_to("published")  # OK
        sm.transition_to("draft")      # Raises InvalidTransitionError
    """

    def __init__(self, initial: T, transitions: TransitionMap[T]):
        """Initialize state machine.

        Args:
            initial: Initial state
            transitions: Map of state -> list of allowed target states
        """
        self._current = initial
        self._transitions = transitions

    @property
    def current(self) -> T:
        """Get current state."""
        return self._current

    @property
    def allowed_transitions(self) -> list[T]:
        """Get list of states we can transition to from current state."""
        return self._transitions.get(self._current, [])

    @property
    def is_terminal(self) -> bool:
        """Whether no transition leaves the current state."""
        return not self.allowed_transitions

    def can_transition(self, target: T) -> bool:
        """Check if transition to target state is allowed.

        Args:
            target: Target state to check

        Returns:
            True if transition is allowed, False otherwise
        """
        return target in self.allowed_transitions

    def transition(self, target: T) -> None:
        """Perform transition to target state.

        Args:
            target: Target state

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(
                current=self._current,
                target=target,
                allowed=self.allowed_transitions,
            )
        self._current = target

    def transition_to(self, target: T) -> T:
        """Perform transition and return new state.

        Args:
            target: Target state

        Returns:
            The new current state (same as target)

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        self.transition(target)
        return self._current

    def reset(self, state: T) -> None:
        """Reset state machine to a specific state (bypass transition rules).

        Use with caution - this bypasses transition validation.

        Args:
            state: State to reset to
        """
        self._current = state

    def __str__(self) -> str:
        return f"StateMachine(current={self._current})"

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current!r}, allowed={self.allowed_transitions!r})"


# ============================================
# Predefined Transition Maps
# ============================================


def get_job_transitions() -> TransitionMap:
    """Get transition map for JobStatus.

    The forward path is queued -> running -> transcoding -> scoring -> ready.
    Any non-terminal state may also move to failed.
    """
    from framebrew.models.generation_job import JobStatus

    return {
        JobStatus.QUEUED: [JobStatus.RUNNING, JobStatus.FAILED],
        JobStatus.RUNNING: [JobStatus.TRANSCODING, JobStatus.FAILED],
        JobStatus.TRANSCODING: [JobStatus.SCORING, JobStatus.FAILED],
        JobStatus.SCORING: [JobStatus.READY, JobStatus.FAILED],
        JobStatus.READY: [],  # Terminal state
        JobStatus.FAILED: [],  # Terminal state
    }


# ============================================
# Factory Functions
# ============================================


def create_job_state_machine(initial_status: str | None = None) -> StateMachine:
    """Create a state machine for GenerationJob status.

    Args:
        initial_status: Initial status (default: QUEUED)

    Returns:
        Configured StateMachine for GenerationJob
    """
    from framebrew.models.generation_job import JobStatus

    initial = JobStatus(initial_status) if initial_status else JobStatus.QUEUED
    return StateMachine(initial, get_job_transitions())
