# tests/unit/core/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from asyncfsm.core.errors import (
    ConfigurationError,
    ErrorCode,
    FSMError,
    HandlerError,
    InvalidTransitionError,
    UnknownStateError,
)


@pytest.mark.parametrize(
    "error_class",
    [ConfigurationError, UnknownStateError, InvalidTransitionError, HandlerError],
)
def test_error_hierarchy(error_class):
    assert issubclass(error_class, FSMError)
    assert issubclass(error_class, Exception)


def test_configuration_error_defaults_to_invalid_configuration():
    error = ConfigurationError("Invalid config")
    assert str(error) == "Invalid config"
    assert error.error_code is ErrorCode.INVALID_CONFIGURATION


def test_configuration_error_accepts_explicit_code():
    error = ConfigurationError("not found", ErrorCode.INITIAL_STATE_NOT_FOUND)
    assert error.error_code is ErrorCode.INITIAL_STATE_NOT_FOUND


def test_unknown_state_error_context():
    error = UnknownStateError("nowhere")
    assert error.state == "nowhere"
    assert error.error_code is ErrorCode.RESET_STATE_NOT_FOUND
    assert "nowhere" in str(error)


def test_invalid_transition_error_context():
    error = InvalidTransitionError("finish", "idle")
    assert error.attempted == "finish"
    assert error.from_state == "idle"
    assert error.error_code is ErrorCode.INVALID_TRANSITION
    assert str(error) == "Invalid transition 'finish' from the current state: 'idle'"


def test_handler_error_context():
    cause = OSError("disk full")
    error = HandlerError("start", cause)
    assert error.transition == "start"
    assert error.cause is cause
    assert error.error_code is ErrorCode.HANDLER_FAILED
    assert "disk full" in str(error)


def test_errors_can_be_caught_as_base():
    with pytest.raises(FSMError):
        raise InvalidTransitionError("go", "here")
