# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from asyncfsm import StateMachine


class StateChangeRecorder:
    """A listener that records every (from, to, transition) it is notified of."""

    def __init__(self):
        self.changes = []

    def __call__(self, from_state, to_state, transition):
        self.changes.append((from_state, to_state, transition))


@pytest.fixture
def basic_transitions():
    """idle -> running -> done, as plain mappings."""
    return [
        {"name": "start", "from": "idle", "to": "running"},
        {"name": "finish", "from": "running", "to": "done"},
    ]


@pytest.fixture
def recorder():
    return StateChangeRecorder()


@pytest.fixture
def machine(basic_transitions, recorder):
    """A machine in 'idle' with a recording listener attached."""
    return StateMachine("idle", basic_transitions, listeners=[recorder])


@pytest.fixture
def door_transitions():
    """A door with a multi-source 'lock' and a terminal 'broken' state."""
    return [
        {"name": "open", "from": "closed", "to": "opened"},
        {"name": "close", "from": "opened", "to": "closed"},
        {"name": "lock", "from": ["closed", "opened"], "to": "locked"},
        {"name": "unlock", "from": "locked", "to": "closed"},
        {"name": "break down", "from": ["closed", "locked"], "to": "broken"},
    ]


@pytest.fixture
def mock_listener():
    return MagicMock()
