# asyncfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from enum import Enum
from typing import Any, Hashable, Optional


class ErrorCode(Enum):
    """
    Stable identifiers attached to every error raised by the library, so callers
    can branch on the kind of failure without parsing messages.
    """

    INITIAL_STATE_NOT_FOUND = "INITIAL_STATE_NOT_FOUND"
    RESET_STATE_NOT_FOUND = "RESET_STATE_NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    HANDLER_FAILED = "HANDLER_FAILED"


class FSMError(Exception):
    """
    Base exception class for errors within the state machine library.
    """

    default_code = ErrorCode.INVALID_CONFIGURATION

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None) -> None:
        super().__init__(message)
        self.error_code = error_code or self.default_code


class ConfigurationError(FSMError):
    """
    Raised at construction time when the machine definition is missing or malformed.
    No machine instance is produced.
    """


class UnknownStateError(FSMError):
    """
    Raised when a reset targets a state that no declared transition mentions.
    """

    default_code = ErrorCode.RESET_STATE_NOT_FOUND

    def __init__(self, state: Any) -> None:
        super().__init__(f"State {state!r} doesn't exist in state machine")
        self.state = state


class InvalidTransitionError(FSMError):
    """
    Raised when a transition is requested that is not legal from the current state.
    """

    default_code = ErrorCode.INVALID_TRANSITION

    def __init__(self, attempted: str, from_state: Hashable) -> None:
        super().__init__(f"Invalid transition {attempted!r} from the current state: {from_state!r}")
        self.attempted = attempted
        self.from_state = from_state


class HandlerError(FSMError):
    """
    Wraps an exception raised by a transition handler. The machine stays in the
    state it was in before the transition was attempted.
    """

    default_code = ErrorCode.HANDLER_FAILED

    def __init__(self, transition: str, cause: BaseException) -> None:
        super().__init__(f"Handler for transition {transition!r} failed: {cause}")
        self.transition = transition
        self.cause = cause
