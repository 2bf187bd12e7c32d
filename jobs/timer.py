"""
One-shot timer on the asyncio event loop.

Thin wrapper over loop.call_later() that remembers whether it is still
pending, so the owner can release it from any exit path without
checking first:

    timer = Timer(loop, 250, on_fire, "arg")
    ...
    timer.release()   # safe whether it fired, was released, or is pending

Delays are in milliseconds to match Job.delay.
"""

import asyncio
from typing import Any, Callable, Optional


class Timer:

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        delay_ms: float,
        callback: Callable[..., Any],
        *args: Any,
    ):
        self._handle: Optional[asyncio.TimerHandle] = loop.call_later(
            max(delay_ms, 0) / 1000, self._fire, callback, args
        )

    @property
    def active(self) -> bool:
        """True until the callback runs or the timer is released."""
        return self._handle is not None

    def release(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        callback(*args)

    def __enter__(self) -> "Timer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
