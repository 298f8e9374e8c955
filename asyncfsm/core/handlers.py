# asyncfsm/core/handlers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import inspect
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Union

from asyncfsm.core.errors import ConfigurationError

Handler = Callable[..., Union[Any, Awaitable[Any]]]

# Returned by a transition that has no handler of its own.
SUCCESS = True


def noop_handler(*args: Any, **kwargs: Any) -> bool:
    """Default handler: does nothing and always succeeds."""
    return SUCCESS


class HandlerRegistry:
    """
    Maps canonical transition names to the side effect run before the transition
    commits. Transitions without an explicit entry resolve to ``noop_handler``.
    """

    def __init__(self, handlers: Optional[Mapping[str, Handler]], known_transitions: Iterable[str]) -> None:
        """
        :param handlers: Explicit handlers keyed by canonical transition name.
        :param known_transitions: Every declared transition name.
        :raises ConfigurationError: If a handler is not callable or names an undeclared transition.
        """
        known = frozenset(known_transitions)
        if handlers is None:
            handlers = {}
        if not isinstance(handlers, Mapping):
            raise ConfigurationError(f"Handlers must be a mapping of transition name to callable, got {type(handlers).__name__}")

        registered: Dict[str, Handler] = {}
        for name, handler in handlers.items():
            if name not in known:
                raise ConfigurationError(f"Handler registered for undeclared transition {name!r}")
            if not callable(handler):
                raise ConfigurationError(f"Handler for transition {name!r} is not callable")
            registered[name] = handler
        self._handlers = MappingProxyType(registered)

    def get(self, name: str) -> Handler:
        """Return the handler for ``name``, or the no-op default."""
        return self._handlers.get(name, noop_handler)

    def has_handler(self, name: str) -> bool:
        return name in self._handlers

    async def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Run the handler for ``name``, awaiting its result when it is awaitable.

        Exceptions raised by the handler propagate unchanged.
        """
        result = self.get(name)(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __len__(self) -> int:
        return len(self._handlers)
