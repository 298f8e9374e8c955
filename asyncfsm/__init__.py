"""asyncfsm: embeddable finite state machine with serialized async transitions

A machine is declared as a list of named transitions, each leading from one or
more source states to a single target state, plus an initial state.

Responsibilities:
    - Transition table and state registry construction
    - Validation of requested transitions against the current state
    - Optional async handlers run before a transition commits
    - Notification of committed state changes

Cross-cutting Concerns:
    Concurrency:
        - fire/reset serialized per machine in arrival order
        - Queries are lock-free snapshot reads
        - One event loop per machine

    Error Handling:
        - Errors rooted at FSMError, each with an ErrorCode
        - Failed handlers never leave a partial transition
        - Listener failures isolated from the caller

    Logging:
        - Standard library logging, one logger per module
        - No handlers installed by the library
"""

from .core.config import MachineConfig
from .core.errors import (
    ConfigurationError,
    ErrorCode,
    FSMError,
    HandlerError,
    InvalidTransitionError,
    UnknownStateError,
)
from .core.events import StateChange
from .core.hooks import EventNotifier, Subscription
from .core.state_machine import StateMachine
from .core.transitions import TransitionDefinition
from .plugins.naming import camelize

__version__ = "0.1.0"

__all__ = [
    "StateMachine",
    "MachineConfig",
    "TransitionDefinition",
    "StateChange",
    "EventNotifier",
    "Subscription",
    "camelize",
    # Errors
    "FSMError",
    "ConfigurationError",
    "UnknownStateError",
    "InvalidTransitionError",
    "HandlerError",
    "ErrorCode",
]
