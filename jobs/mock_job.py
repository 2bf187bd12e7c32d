"""
Mock job — a fake unit of asynchronous work for exercising job-aware code.

A Job does nothing real. run() returns an asyncio.Future that settles
`delay` milliseconds later with whatever the injected `fn` returns, or
rejects at random (`fail_prob`), or rejects with CancellationError if
cancel() gets there first.

Lifecycle:
    IDLE ──run()──► RUNNING ──delay timer──► DONE / FAILED
                       │
                       └──cancel timer──► CANCELED

Two timers can race for the same run: the completion timer scheduled by
run() and any cancellation timers scheduled by cancel(). Everything
happens in loop callbacks on one thread, so the race is decided by
_settle(): the first caller that finds the job RUNNING wins, every
later caller sees a terminal state and backs off.

Attributes are split in two groups:
- configuration (delay, fail_prob, fn): writable
- identity and lifecycle (id, job_type, name, state, start_time,
  done_time, cancel_time, run_time): assignment raises WriteProtectionError

A Job runs once. Calling run() again raises JobStateError.
"""

import asyncio
import inspect
import logging
import math
import random
import uuid
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Callable, Optional

from config.settings import settings
from jobs.exceptions import (
    CancellationError,
    ExecutionError,
    JobStateError,
    WriteProtectionError,
)
from jobs.timer import Timer
from models.enums import JobState
from models.snapshot import JobSnapshot

logger = logging.getLogger(__name__)


def default_fn(*args: Any) -> None:
    """Stand-in work used when no fn is injected. Accepts anything, returns None."""
    return None


def _read_only(name: str, doc: str) -> property:
    """Property that reads self._<name> and refuses assignment and deletion."""
    attr = f"_{name}"

    def getter(self):
        return getattr(self, attr)

    def setter(self, value):
        raise WriteProtectionError(f"'{name}' is read-only")

    def deleter(self):
        raise WriteProtectionError(f"'{name}' is read-only")

    return property(getter, setter, deleter, doc)


class Job:

    id = _read_only("id", "Unique identifier, generated at construction.")
    job_type = _read_only("job_type", "Type label given to the constructor.")
    name = _read_only("name", "'<job_type>_<id>'.")
    state = _read_only("state", "Current JobState.")
    start_time = _read_only("start_time", "UTC datetime when run() was called.")
    done_time = _read_only("done_time", "UTC datetime of success or failure. None if canceled.")
    cancel_time = _read_only("cancel_time", "UTC datetime when cancellation took effect.")
    run_time = _read_only("run_time", "Milliseconds from start to settlement. None while running.")

    def __init__(
        self,
        job_type: Optional[str] = None,
        delay: Optional[float] = None,
        fail_prob: Optional[float] = None,
        fn: Optional[Callable[..., Any]] = None,
        *,
        rng: Optional[random.Random] = None,
    ):
        self._id = uuid.uuid4().hex
        self._job_type = job_type if job_type is not None else settings.JOB_DEFAULT_TYPE
        self._name = f"{self._job_type}_{self._id}"
        self._state = JobState.IDLE

        # Go through the setters so constructor arguments get the same type checks
        self.delay = delay if delay is not None else settings.JOB_DEFAULT_DELAY_MS
        self.fail_prob = fail_prob if fail_prob is not None else settings.JOB_DEFAULT_FAIL_PROB
        self.fn = fn if fn is not None else default_fn

        # Anything with .random() works; tests inject seeded or scripted sources
        self._rng = rng if rng is not None else random.Random(settings.JOB_RANDOM_SEED)

        self._start_time: Optional[datetime] = None
        self._done_time: Optional[datetime] = None
        self._cancel_time: Optional[datetime] = None
        self._run_time: Optional[float] = None

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._started_at: Optional[float] = None   # loop clock, seconds
        self._future: Optional[asyncio.Future] = None
        self._run_timer: Optional[Timer] = None

    # ── Writable configuration ──────────────────────────────────

    @property
    def delay(self) -> float:
        """Simulated work duration in milliseconds."""
        return self._delay

    @delay.setter
    def delay(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise TypeError(f"delay must be a number, got {type(value).__name__}")
        if not math.isfinite(value):
            raise ValueError(f"delay must be finite, got {value}")
        self._delay = value

    @property
    def fail_prob(self) -> float:
        """Probability in [0, 1] that a run rejects with ExecutionError."""
        return self._fail_prob

    @fail_prob.setter
    def fail_prob(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise TypeError(f"fail_prob must be a number, got {type(value).__name__}")
        self._fail_prob = value

    @property
    def fn(self) -> Callable[..., Any]:
        """Called with run()'s arguments; its result is the run's result."""
        return self._fn

    @fn.setter
    def fn(self, value: Callable[..., Any]) -> None:
        if not callable(value):
            raise TypeError(f"fn must be callable, got {type(value).__name__}")
        self._fn = value

    # ── Lifecycle ───────────────────────────────────────────────

    def is_running(self) -> bool:
        return self._state is JobState.RUNNING

    def run(self, *args: Any) -> asyncio.Future:
        """
        Start the job and return a future for its outcome.

        The job is RUNNING as soon as this returns. The future resolves
        with fn(*args) after `delay` ms, or rejects with ExecutionError
        (fn raised / failure draw) or CancellationError (cancel() won).

        delay, fail_prob and fn are captured now; changing them while
        the job runs has no effect on this run.

        Raises:
            JobStateError: the job has already been run.
            RuntimeError: no running event loop.
        """
        if self._state is not JobState.IDLE:
            raise JobStateError(
                f"Job {self._name} cannot run again (state={self._state.value})"
            )

        loop = asyncio.get_running_loop()
        self._loop = loop
        self._future = loop.create_future()
        self._future.add_done_callback(self._on_future_done)

        self._state = JobState.RUNNING
        self._start_time = datetime.now(timezone.utc)
        self._started_at = loop.time()
        self._run_timer = Timer(
            loop, self._delay, self._complete, self._fn, self._fail_prob, args
        )

        logger.debug(f"Job {self._name} started (delay={self._delay}ms)")
        return self._future

    def cancel(self, after_ms: float = 0) -> asyncio.Future:
        """
        Try to cancel the job `after_ms` milliseconds from now.

        Whether cancellation applies is decided when the timer fires,
        not now: the returned future resolves True if the job was
        RUNNING at that moment, False otherwise (never started, or
        already settled). It never rejects.
        """
        loop = asyncio.get_running_loop()
        outcome = loop.create_future()
        timer = Timer(loop, after_ms, self._attempt_cancel, outcome)
        # Caller gave up on the answer → drop the pending timer
        outcome.add_done_callback(lambda _: timer.release())
        return outcome

    def snapshot(self) -> JobSnapshot:
        return JobSnapshot.model_validate(self)

    # ── Timer callbacks ─────────────────────────────────────────

    def _complete(self, fn: Callable[..., Any], fail_prob: float, args: tuple) -> None:
        if self._state is not JobState.RUNNING:
            return

        # Draw first so a seeded rng gives the same sequence whatever fn does
        simulated_failure = self._rng.random() < fail_prob

        try:
            result = fn(*args)
        except Exception as e:
            self._fail(ExecutionError(f"Job {self._name} failed: {e}", cause=e))
            return

        if inspect.isawaitable(result):
            pending = asyncio.ensure_future(result)
            pending.add_done_callback(
                lambda task: self._on_fn_done(task, simulated_failure, fail_prob)
            )
            return

        self._finish(result, simulated_failure, fail_prob)

    def _on_fn_done(self, task: asyncio.Future, simulated_failure: bool, fail_prob: float) -> None:
        if task.cancelled():
            if self._state is JobState.RUNNING:
                self._fail(ExecutionError(f"Job {self._name} failed: fn was cancelled"))
            return

        # Always retrieve, so a discarded failure is not reported as unhandled
        exc = task.exception()
        if self._state is not JobState.RUNNING:
            logger.debug(f"Job {self._name} discarding fn outcome, already {self._state.value}")
            return

        if exc is not None:
            self._fail(ExecutionError(f"Job {self._name} failed: {exc}", cause=exc))
        else:
            self._finish(task.result(), simulated_failure, fail_prob)

    def _finish(self, result: Any, simulated_failure: bool, fail_prob: float) -> None:
        if simulated_failure:
            self._fail(ExecutionError(f"Simulated failure (fail_prob={fail_prob})"))
        else:
            self._settle(JobState.DONE, result=result)

    def _fail(self, error: ExecutionError) -> None:
        self._settle(JobState.FAILED, error=error)

    def _attempt_cancel(self, outcome: asyncio.Future) -> None:
        if outcome.done():
            return
        canceled = self._settle(JobState.CANCELED, error=CancellationError())
        if not canceled:
            logger.debug(f"Job {self._name} cancel ignored (state={self._state.value})")
        outcome.set_result(canceled)

    def _on_future_done(self, future: asyncio.Future) -> None:
        # The caller cancelled the run future itself
        if future.cancelled():
            self._settle(JobState.CANCELED)

    # ── Settlement ──────────────────────────────────────────────

    def _settle(
        self,
        state: JobState,
        result: Any = None,
        error: Optional[BaseException] = None,
    ) -> bool:
        """
        Move RUNNING → `state` and settle the run future.

        Returns False without touching anything if the job is not
        RUNNING, which is how the losing side of a race backs off.
        """
        if self._state is not JobState.RUNNING:
            return False

        self._state = state
        now = datetime.now(timezone.utc)
        self._run_time = (self._loop.time() - self._started_at) * 1000
        if state is JobState.CANCELED:
            self._cancel_time = now
        else:
            self._done_time = now

        try:
            if not self._future.done():
                if error is not None:
                    self._future.set_exception(error)
                else:
                    self._future.set_result(result)
        finally:
            self._run_timer.release()

        logger.debug(f"Job {self._name} {state.value.lower()} after {self._run_time:.1f}ms")
        return True

    def __repr__(self) -> str:
        return f"<Job {self._name} {self._state.value}>"
