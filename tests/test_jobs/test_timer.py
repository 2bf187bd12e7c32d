"""Tests for the Timer wrapper."""

import asyncio

import pytest

from jobs.timer import Timer


@pytest.mark.asyncio
async def test_timer_fires_once_with_args():
    loop = asyncio.get_running_loop()
    calls = []

    timer = Timer(loop, 5, calls.append, "fired")
    assert timer.active is True

    await asyncio.sleep(0.02)

    assert calls == ["fired"]
    assert timer.active is False


@pytest.mark.asyncio
async def test_released_timer_never_fires():
    loop = asyncio.get_running_loop()
    calls = []

    timer = Timer(loop, 5, calls.append, "fired")
    timer.release()
    timer.release()  # idempotent

    await asyncio.sleep(0.02)

    assert calls == []
    assert timer.active is False


@pytest.mark.asyncio
async def test_context_manager_releases_on_exit():
    loop = asyncio.get_running_loop()
    calls = []

    with Timer(loop, 5, calls.append, "fired") as timer:
        assert timer.active is True

    await asyncio.sleep(0.02)
    assert calls == []


@pytest.mark.asyncio
async def test_negative_delay_fires_immediately():
    loop = asyncio.get_running_loop()
    calls = []

    Timer(loop, -100, calls.append, "now")
    await asyncio.sleep(0.005)

    assert calls == ["now"]
