# asyncfsm/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, FrozenSet, Hashable, Iterable, Mapping, Optional, Union

from asyncfsm.core.config import MachineConfig
from asyncfsm.core.errors import HandlerError, InvalidTransitionError, UnknownStateError
from asyncfsm.core.handlers import Handler, HandlerRegistry
from asyncfsm.core.hooks import ErrorCallback, EventNotifier, Listener, Subscription
from asyncfsm.core.validations import Validator
from asyncfsm.plugins.naming import IdentifierMapper, camelize
from asyncfsm.runtime.concurrency import AdmissionLock
from asyncfsm.runtime.graph import TransitionTable, build_transition_table

logger = logging.getLogger(__name__)

Trigger = Callable[..., Awaitable[Any]]


class StateMachine:
    """
    A finite state machine built from a declarative list of named transitions.

    The machine is the only writer of its current state. ``fire`` and ``reset``
    are serialized through a FIFO admission lock, so each request validates
    against the state left behind by the previous one, and a handler always
    runs against a state that cannot change underneath it. The query methods
    (``can``, ``is_state``, ``available_transitions``) never wait and return a
    snapshot of the state at call time.
    """

    def __init__(
        self,
        initial_state: Hashable,
        transitions: Iterable[Any],
        handlers: Optional[Mapping[str, Handler]] = None,
        *,
        listeners: Optional[Iterable[Listener]] = None,
        identifier_mapper: Optional[IdentifierMapper] = camelize,
        on_listener_error: Optional[ErrorCallback] = None,
        validator: Optional[Validator] = None,
    ) -> None:
        """
        :param initial_state: The state in which this machine begins.
        :param transitions: TransitionDefinition objects or mappings with ``name``, ``from`` and ``to``.
        :param handlers: Optional side effects keyed by canonical transition name.
        :param listeners: Callables subscribed to state changes from the start.
        :param identifier_mapper: Derives trigger identifiers from transition names;
            ``None`` keys triggers by the names themselves.
        :param on_listener_error: Receives ``(error, change)`` when a listener raises.
        :param validator: Optional validator for the machine definition.
        :raises ConfigurationError: If the definition is missing or malformed.
        """
        self._validator = validator or Validator()
        self._validator.require(initial_state, "initial_state")
        self._validator.require(transitions, "transitions")
        self._table, self._states = build_transition_table(transitions)
        self._validator.validate_initial_state(initial_state, self._states)
        self._handlers = HandlerRegistry(handlers, self._table.names)
        listeners = tuple(listeners or ())
        self._validator.validate_listeners(listeners)
        trigger_names = self._validator.build_trigger_names(self._table, identifier_mapper)

        self._notifier = EventNotifier(on_error=on_listener_error)
        for listener in listeners:
            self._notifier.subscribe(listener)

        self._admission = AdmissionLock()
        self._initial_state = initial_state
        self._current_state = initial_state
        self._triggers = MappingProxyType(
            {identifier: self._make_trigger(identifier, name) for identifier, name in trigger_names.items()}
        )
        logger.debug("State machine created in state %r with %d transitions", initial_state, len(self._table.names))

    @classmethod
    def from_config(cls, config: Union[MachineConfig, Mapping[str, Any]], **kwargs: Any) -> "StateMachine":
        """
        Build a machine from a MachineConfig or an equivalent mapping.

        Extra keyword arguments are passed through to the constructor.
        """
        if not isinstance(config, MachineConfig):
            config = MachineConfig.from_mapping(config)
        return cls(
            config.initial_state,
            config.transitions,
            config.handlers,
            listeners=config.listeners,
            **kwargs,
        )

    @property
    def current_state(self) -> Hashable:
        """Get the current committed state."""
        return self._current_state

    @property
    def initial_state(self) -> Hashable:
        return self._initial_state

    @property
    def states(self) -> FrozenSet[Hashable]:
        """Every state mentioned by a declared transition."""
        return self._states

    @property
    def transitions(self) -> FrozenSet[str]:
        """Every declared canonical transition name."""
        return self._table.names

    @property
    def table(self) -> TransitionTable:
        return self._table

    @property
    def in_flight(self) -> bool:
        """True while a ``fire`` or ``reset`` holds the admission lock."""
        return self._admission.in_flight

    @property
    def triggers(self) -> Mapping[str, Trigger]:
        """Read-only mapping of generated trigger identifier to coroutine function."""
        return self._triggers

    def trigger(self, identifier: str) -> Trigger:
        """
        Look up the generated trigger for ``identifier``.

        :raises KeyError: If no transition maps to ``identifier``.
        """
        try:
            return self._triggers[identifier]
        except KeyError:
            raise KeyError(f"No transition maps to trigger {identifier!r}") from None

    def can(self, name: str) -> bool:
        """Check whether transition ``name`` may fire from the current state."""
        return self._table.lookup(self._current_state, name) is not None

    def is_state(self, state: Hashable) -> bool:
        """Check whether the machine is currently in ``state``."""
        return self._current_state == state

    def available_transitions(self) -> FrozenSet[str]:
        """Names of the transitions that may fire from the current state."""
        return frozenset(self._table.transitions_from(self._current_state))

    def subscribe(self, listener: Listener) -> Subscription:
        """Subscribe ``listener(from_state, to_state, transition)`` to state changes."""
        return self._notifier.subscribe(listener)

    @property
    def notifier(self) -> EventNotifier:
        return self._notifier

    async def reset(self, state: Hashable) -> Hashable:
        """
        Force the machine into ``state`` without running a handler or notifying
        listeners. Waits for any in-flight transition to finish first.

        :raises UnknownStateError: If ``state`` is not a known state.
        """
        if not self._is_known_state(state):
            raise UnknownStateError(state)
        async with self._admission:
            previous = self._current_state
            self._current_state = state
            logger.debug("Reset from %r to %r", previous, state)
            return self._current_state

    async def fire(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Fire transition ``name``, passing any arguments to its handler.

        The request waits its turn behind earlier ``fire``/``reset`` calls, is
        validated against the state at that point, runs the handler, and commits
        and notifies only if the handler succeeds. A handler must not fire or
        reset the machine it belongs to; that request would wait on itself.

        :return: Whatever the handler returned.
        :raises InvalidTransitionError: If ``name`` cannot fire from the current state.
        :raises HandlerError: If the handler raised; the state is left unchanged.
        """
        async with self._admission:
            source = self._current_state
            definition = self._table.lookup(source, name)
            if definition is None:
                logger.debug("Rejected transition %r from %r", name, source)
                raise InvalidTransitionError(name, source)

            try:
                result = await self._handlers.invoke(name, *args, **kwargs)
            except Exception as exc:
                logger.debug("Handler for %r failed, staying in %r: %s", name, source, exc)
                raise HandlerError(name, exc) from exc

            # Commit and notification happen with no suspension point between them.
            self._current_state = definition.target
            logger.debug("Transition %r: %r -> %r", name, source, definition.target)
            self._notifier.publish(source, definition.target, name)
            return result

    def _make_trigger(self, identifier: str, name: str) -> Trigger:
        async def trigger(*args: Any, **kwargs: Any) -> Any:
            return await self.fire(name, *args, **kwargs)

        trigger.__name__ = identifier
        trigger.__qualname__ = f"{type(self).__name__}.{identifier}"
        trigger.__doc__ = f"Fire transition {name!r}."
        return trigger

    def _is_known_state(self, state: Any) -> bool:
        try:
            return state in self._states
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(current_state={self._current_state!r}, states={len(self._states)})"
