# asyncfsm/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Iterable, Optional

from asyncfsm.core.errors import ConfigurationError, ErrorCode
from asyncfsm.core.hooks import check_listener

if TYPE_CHECKING:
    from asyncfsm.runtime.graph import TransitionTable


class Validator:
    """
    Performs construction-time validation of a machine definition, so that a
    malformed definition never produces a machine instance.
    """

    def __init__(self) -> None:
        self._rules = _DefaultValidationRules

    def require(self, value: Any, name: str) -> None:
        """
        :raises ConfigurationError: If a required constructor parameter is missing.
        """
        self._rules.require(value, name)

    def validate_initial_state(self, initial_state: Any, states: FrozenSet[Any]) -> None:
        """
        :raises ConfigurationError: If the initial state is missing or not a known state.
        """
        self._rules.validate_initial_state(initial_state, states)

    def validate_listeners(self, listeners: Optional[Iterable[Callable]]) -> None:
        """
        :raises ConfigurationError: If any listener is not callable or is a coroutine function.
        """
        self._rules.validate_listeners(listeners)

    def build_trigger_names(self, table: "TransitionTable", mapper: Optional[Callable[[str], str]]) -> Dict[str, str]:
        """
        Map each generated trigger identifier to its canonical transition name.

        :raises ConfigurationError: If two transitions derive the same identifier.
        """
        return self._rules.build_trigger_names(table, mapper)


class _DefaultValidationRules:
    """
    Built-in rules covering the machine definition: initial state, listeners,
    and uniqueness of generated trigger identifiers.
    """

    @staticmethod
    def require(value: Any, name: str) -> None:
        if value is None:
            raise ConfigurationError(f"Missing required parameter {name}")

    @staticmethod
    def validate_initial_state(initial_state: Any, states: FrozenSet[Any]) -> None:
        _DefaultValidationRules.require(initial_state, "initial_state")
        try:
            known = initial_state in states
        except TypeError:
            raise ConfigurationError(f"Initial state {initial_state!r} is not hashable") from None
        if not known:
            raise ConfigurationError(
                f"Initial state {initial_state!r} cannot be found in list of states",
                ErrorCode.INITIAL_STATE_NOT_FOUND,
            )

    @staticmethod
    def validate_listeners(listeners: Optional[Iterable[Callable]]) -> None:
        for listener in listeners or ():
            check_listener(listener)

    @staticmethod
    def build_trigger_names(table: "TransitionTable", mapper: Optional[Callable[[str], str]]) -> Dict[str, str]:
        triggers: Dict[str, str] = {}
        for definition in table.definitions:
            name = definition.name
            identifier = mapper(name) if mapper is not None else name
            if not identifier:
                raise ConfigurationError(f"Transition {name!r} maps to an empty trigger identifier")
            existing = triggers.get(identifier)
            if existing is not None and existing != name:
                raise ConfigurationError(
                    f"Transitions {existing!r} and {name!r} both map to trigger identifier {identifier!r}"
                )
            triggers[identifier] = name
        return triggers
