"""
Job lifecycle states.

JobState mixes in str so a JobSnapshot dumps "CANCELED" rather than
"JobState.CANCELED", and a state compares equal to its plain value.
"""

import enum


class JobState(str, enum.Enum):
    """
    Lifecycle of a mock job.

    State transitions:
    - IDLE -> RUNNING (run() called)
    - RUNNING -> DONE (fn succeeded)
    - RUNNING -> FAILED (fn raised, or the failure draw hit)
    - RUNNING -> CANCELED (cancel timer fired first)

    A job leaves RUNNING exactly once and never goes back to IDLE.
    """
    IDLE = "IDLE"            # constructed, run() not called yet
    RUNNING = "RUNNING"      # delay timer pending
    DONE = "DONE"            # run future resolved
    FAILED = "FAILED"        # run future rejected with ExecutionError
    CANCELED = "CANCELED"    # run future rejected with CancellationError

    @property
    def is_terminal(self) -> bool:
        return self in {JobState.DONE, JobState.FAILED, JobState.CANCELED}
