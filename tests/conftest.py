"""
Shared test fixtures.

Randomness is the only nondeterministic input of a Job, so these
fixtures replace it:
- ScriptedRng returns a fixed list of draws, one per run
- make_job builds jobs with a short default delay and an injected rng

Timing assertions still use the real event loop clock.
"""

import pytest

from jobs.mock_job import Job


class ScriptedRng:
    """Stand-in for random.Random that returns the given draws in order."""

    def __init__(self, *draws: float):
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self._draws[self.calls % len(self._draws)]
        self.calls += 1
        return value


@pytest.fixture
def scripted_rng():
    """The ScriptedRng class, for tests that need their own draw sequence."""
    return ScriptedRng


@pytest.fixture
def never_fail_rng():
    """Every draw is 0.999…, above any fail_prob < 1."""
    return ScriptedRng(0.999)


@pytest.fixture
def always_fail_rng():
    """Every draw is 0.0, below any fail_prob > 0."""
    return ScriptedRng(0.0)


@pytest.fixture
def make_job(never_fail_rng):
    """Factory for jobs that succeed unless told otherwise."""

    def _make(job_type="test", delay=10, fail_prob=0, fn=None, rng=None):
        return Job(job_type, delay, fail_prob, fn, rng=rng or never_fail_rng)

    return _make
