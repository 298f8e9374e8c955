# asyncfsm/core/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Sequence, Tuple

from asyncfsm.core.errors import ConfigurationError

_INITIAL_STATE_KEYS = ("initial_state", "initialState")
_KNOWN_KEYS = frozenset(_INITIAL_STATE_KEYS + ("transitions", "handlers", "listeners"))


@dataclass
class MachineConfig:
    """
    Declarative description of a state machine, as accepted by
    ``StateMachine.from_config``.
    """

    initial_state: Hashable
    transitions: Sequence[Any]
    handlers: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    listeners: Tuple[Callable[..., Any], ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MachineConfig":
        """
        Build a config from a plain mapping. Both ``initial_state`` and
        ``initialState`` are accepted for the initial state.

        :raises ConfigurationError: On a missing required field or an unknown key.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Machine configuration must be a mapping, got {type(data).__name__}")

        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(map(str, unknown)))}")

        initial_state: Optional[Hashable] = None
        for key in _INITIAL_STATE_KEYS:
            if data.get(key) is not None:
                initial_state = data[key]
                break
        if initial_state is None:
            raise ConfigurationError("Missing required parameter initial_state")

        if "transitions" not in data:
            raise ConfigurationError("Missing required parameter transitions")

        handlers: Dict[str, Callable[..., Any]] = data.get("handlers") or {}
        return cls(
            initial_state=initial_state,
            transitions=data["transitions"],
            handlers=handlers,
            listeners=tuple(data.get("listeners") or ()),
        )
