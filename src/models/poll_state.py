"""Poll run state machine.

SUBMITTING -> POLLING -> FINISHED, with ABORTED reachable from SUBMITTING
or POLLING when a remote call fails.
"""

from enum import Enum


class PollState(Enum):
    """Lifecycle state of one poll run."""

    IDLE = "IDLE"  # Not started yet
    SUBMITTING = "SUBMITTING"  # Test submission in flight
    POLLING = "POLLING"  # Waiting for nodes to finish
    FINISHED = "FINISHED"  # Platform reported the test complete
    ABORTED = "ABORTED"  # Submission or a fetch failed

    def is_terminal(self) -> bool:
        """Check if no further transitions are possible.

        Returns:
            bool: True for FINISHED and ABORTED.
        """
        return self in (PollState.FINISHED, PollState.ABORTED)


ALLOWED_TRANSITIONS: dict[PollState, frozenset[PollState]] = {
    PollState.IDLE: frozenset({PollState.SUBMITTING}),
    PollState.SUBMITTING: frozenset({PollState.POLLING, PollState.ABORTED}),
    PollState.POLLING: frozenset({PollState.FINISHED, PollState.ABORTED}),
    PollState.FINISHED: frozenset(),
    PollState.ABORTED: frozenset(),
}


def determine_next_state(current: PollState, new: PollState) -> PollState:
    """Validate a state change.

    Args:
        current: State the run is in.
        new: Requested state.

    Returns:
        PollState: The new state.

    Raises:
        ValueError: If the transition is not allowed.
    """
    if new not in ALLOWED_TRANSITIONS[current]:
        raise ValueError(f"Invalid poll state transition: {current.value} -> {new.value}")
    return new
