"""
Timing benchmark — measures how close mock jobs settle to their delay.

How it works:
1. Build N jobs with the same delay and failure probability
2. Start them all on one event loop
3. Schedule cancel() on a fraction of them, halfway through the delay
4. Wait for every run future to settle
5. Report outcome counts and the settlement overhead (run_time - delay)
   of the jobs that completed

The overhead is what test suites budget for when they assert
"settled within delay + slack". With hundreds of concurrent timers on
one loop it should stay at a few milliseconds.
"""

import asyncio
import random
import time
from typing import Optional

from jobs.exceptions import CancellationError, ExecutionError
from jobs.mock_job import Job
from models.enums import JobState


class TimingBenchmark:

    def __init__(
        self,
        num_jobs: int = 100,
        delay_ms: float = 50,
        fail_prob: float = 0.0,
        cancel_ratio: float = 0.0,
        cancel_after_ms: Optional[float] = None,
        seed: Optional[int] = None,
    ):
        self.num_jobs = num_jobs
        self.delay_ms = delay_ms
        self.fail_prob = fail_prob
        self.cancel_ratio = cancel_ratio
        # Default: cancel halfway, well inside the cancellation window
        self.cancel_after_ms = cancel_after_ms if cancel_after_ms is not None else delay_ms / 2
        self._rng = random.Random(seed)

    def build_jobs(self) -> list[Job]:
        """One shared rng keeps failure draws reproducible for a given seed."""
        return [
            Job("bench", self.delay_ms, self.fail_prob, rng=self._rng)
            for _ in range(self.num_jobs)
        ]

    async def run(self) -> dict:
        """Run one batch and return the measurements."""
        jobs = self.build_jobs()
        num_cancel = int(self.num_jobs * self.cancel_ratio)

        start = time.monotonic()
        runs = [job.run(i) for i, job in enumerate(jobs)]
        cancels = [job.cancel(self.cancel_after_ms) for job in jobs[:num_cancel]]

        outcomes = await asyncio.gather(*runs, return_exceptions=True)
        cancel_results = await asyncio.gather(*cancels)
        elapsed = time.monotonic() - start

        unexpected = [
            o for o in outcomes
            if isinstance(o, BaseException)
            and not isinstance(o, (ExecutionError, CancellationError))
        ]
        if unexpected:
            raise unexpected[0]

        settled = [job for job in jobs if job.state.is_terminal]
        if len(settled) != len(jobs):
            raise RuntimeError(f"{len(jobs) - len(settled)} jobs still running after gather")

        # Canceled jobs stop early, so only completions say anything about overhead
        overheads = [
            job.run_time - self.delay_ms
            for job in settled
            if job.state is not JobState.CANCELED
        ]

        return {
            "num_jobs": self.num_jobs,
            "delay_ms": self.delay_ms,
            "done": sum(job.state is JobState.DONE for job in jobs),
            "failed": sum(job.state is JobState.FAILED for job in jobs),
            "canceled": sum(job.state is JobState.CANCELED for job in jobs),
            "cancel_accepted": sum(cancel_results),
            "wall_clock_sec": round(elapsed, 3),
            "mean_overhead_ms": round(sum(overheads) / len(overheads), 3) if overheads else None,
            "max_overhead_ms": round(max(overheads), 3) if overheads else None,
        }
