"""Tests for JobState."""

import pytest

from models.enums import JobState


@pytest.mark.parametrize("state", [JobState.DONE, JobState.FAILED, JobState.CANCELED])
def test_settled_states_are_terminal(state):
    assert state.is_terminal is True


@pytest.mark.parametrize("state", [JobState.IDLE, JobState.RUNNING])
def test_open_states_are_not_terminal(state):
    assert state.is_terminal is False


def test_state_equals_plain_value():
    assert JobState.CANCELED == "CANCELED"
