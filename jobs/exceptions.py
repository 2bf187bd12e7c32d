"""
Errors raised by the mock job.

Where each one shows up:
- WriteProtectionError: raised synchronously on `job.name = ...` and friends
- JobStateError: raised synchronously by run() on a job that already ran
- ExecutionError: the run future's rejection when fn fails or the failure draw hits
- CancellationError: the run future's rejection when cancel() takes effect

cancel() itself never raises through its future; "could not cancel"
is reported as False.
"""

from typing import Optional

CANCEL_MESSAGE = "Job canceled by user"


class JobError(Exception):
    """Base class for every error raised by this package."""
    pass


class WriteProtectionError(JobError, AttributeError):
    """Assignment to a read-only Job attribute."""
    pass


class JobStateError(JobError):
    """Operation not allowed in the job's current state."""
    pass


class ExecutionError(JobError):
    """
    The simulated work failed.

    `cause` is the exception fn raised, or None when the failure came
    from the fail_prob draw.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause


class CancellationError(JobError):
    """The run was canceled before it could complete."""

    def __init__(self, message: str = CANCEL_MESSAGE):
        super().__init__(message)
