"""
Core package providing the state machine and its building blocks.

- errors: exception hierarchy and error codes
- transitions: transition definitions and their normalization
- handlers: transition side effects
- hooks / events: state-change notification
- validations / config: construction-time checks and configuration
- state_machine: the serialized transition executor
"""

from .errors import ConfigurationError, ErrorCode, FSMError, HandlerError, InvalidTransitionError, UnknownStateError
from .transitions import TransitionDefinition
from .handlers import HandlerRegistry
from .events import StateChange
from .hooks import EventNotifier, Subscription
from .config import MachineConfig
from .state_machine import StateMachine

__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "FSMError",
    "HandlerError",
    "InvalidTransitionError",
    "UnknownStateError",
    "TransitionDefinition",
    "HandlerRegistry",
    "StateChange",
    "EventNotifier",
    "Subscription",
    "MachineConfig",
    "StateMachine",
]
