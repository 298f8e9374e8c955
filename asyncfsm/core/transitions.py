# asyncfsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, FrozenSet, Hashable, Iterable, Mapping, Union

from asyncfsm.core.errors import ConfigurationError

State = Hashable

# Collections accepted as a multi-source ``from``. Strings are always a single state.
_SOURCE_COLLECTIONS = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class TransitionDefinition:
    """
    A named edge from one or more source states to a single target state.
    Declared once at construction and never modified afterwards.
    """

    name: str
    sources: FrozenSet[State]
    target: State

    @classmethod
    def create(cls, name: str, source: Union[State, Iterable[State]], target: State) -> "TransitionDefinition":
        """
        Build a definition, normalizing ``source`` to a non-empty frozenset.

        :param name: Canonical transition name.
        :param source: A single state or a collection of states.
        :param target: The state the transition leads to.
        :raises ConfigurationError: If any part is missing or malformed.
        """
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Transition name must be a non-empty string, got {name!r}")
        if target is None:
            raise ConfigurationError(f"Transition {name!r} is missing a target state ('to')")
        _check_hashable(name, target)
        return cls(name=name, sources=_normalize_sources(name, source), target=target)

    def __repr__(self) -> str:
        sources = sorted(repr(s) for s in self.sources)
        return f"TransitionDefinition(name={self.name!r}, sources=[{', '.join(sources)}], target={self.target!r})"


def _normalize_sources(name: str, source: Any) -> FrozenSet[State]:
    if source is None:
        raise ConfigurationError(f"Transition {name!r} is missing a source state ('from')")
    if isinstance(source, _SOURCE_COLLECTIONS):
        items = list(source)
        if not items:
            raise ConfigurationError(f"Transition {name!r} has an empty set of source states")
        for item in items:
            if item is None:
                raise ConfigurationError(f"Transition {name!r} lists None as a source state")
            _check_hashable(name, item)
        return frozenset(items)
    _check_hashable(name, source)
    return frozenset([source])


def _check_hashable(name: str, state: Any) -> None:
    try:
        hash(state)
    except TypeError:
        raise ConfigurationError(f"Transition {name!r} uses unhashable state {state!r}") from None


def to_definition(raw: Union[TransitionDefinition, Mapping[str, Any]]) -> TransitionDefinition:
    """
    Coerce a declared transition into a TransitionDefinition.

    Mappings use the keys ``name``, ``from`` and ``to``; ``source`` and
    ``target`` are accepted as aliases.

    :raises ConfigurationError: If the declaration is not a mapping or lacks a key.
    """
    if isinstance(raw, TransitionDefinition):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Transition must be a mapping or TransitionDefinition, got {type(raw).__name__}")

    name = raw.get("name")
    source = raw.get("from", raw.get("source"))
    target = raw.get("to", raw.get("target"))
    if name is None:
        raise ConfigurationError(f"Transition {dict(raw)!r} is missing a name")
    return TransitionDefinition.create(name, source, target)
