"""Transition table and state registry construction."""

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..core.errors import ConfigurationError
from ..core.transitions import State, TransitionDefinition, to_definition

logger = logging.getLogger(__name__)

_EMPTY_ROW: Mapping[str, TransitionDefinition] = MappingProxyType({})


class TransitionTable:
    """
    Read-only mapping from (state, transition name) to the transition definition
    that fires from that state. Built once by ``build_transition_table`` and never
    mutated afterwards, so concurrent readers need no synchronization.
    """

    def __init__(self, rows: Dict[State, Dict[str, TransitionDefinition]], definitions: List[TransitionDefinition]):
        self._rows: Dict[State, Mapping[str, TransitionDefinition]] = {
            state: MappingProxyType(dict(row)) for state, row in rows.items()
        }
        # A declaration replaced for every one of its sources no longer fires from anywhere.
        live = {id(d) for row in rows.values() for d in row.values()}
        self._definitions = tuple(d for d in definitions if id(d) in live)
        self._names = frozenset(d.name for d in definitions)

    def transitions_from(self, state: State) -> Mapping[str, TransitionDefinition]:
        """Return the transitions that may fire from ``state`` (empty for unknown states)."""
        return self._rows.get(state, _EMPTY_ROW)

    def lookup(self, state: State, name: str) -> Optional[TransitionDefinition]:
        """Return the definition registered for ``(state, name)``, if any. Unhashable keys never match."""
        try:
            return self.transitions_from(state).get(name)
        except TypeError:
            return None

    @property
    def states(self) -> FrozenSet[State]:
        return frozenset(self._rows)

    @property
    def names(self) -> FrozenSet[str]:
        """Every declared canonical transition name."""
        return self._names

    @property
    def definitions(self) -> Tuple[TransitionDefinition, ...]:
        """Definitions still registered for at least one source, in declaration order."""
        return self._definitions

    def __contains__(self, state: object) -> bool:
        return state in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"TransitionTable(states={len(self._rows)}, transitions={len(self._names)})"


def build_transition_table(transitions: Iterable) -> Tuple[TransitionTable, FrozenSet[State]]:
    """
    Fold every declared transition over each of its source states.

    A later declaration for the same (state, name) pair replaces the earlier one.
    Target states are registered even if nothing leaves them.

    :param transitions: Sequence of TransitionDefinition objects or mappings.
    :return: The transition table and the registry of all known states.
    :raises ConfigurationError: If the sequence is empty or a definition is malformed.
    """
    if transitions is None or isinstance(transitions, (str, bytes, Mapping)):
        raise ConfigurationError("Transitions must be a sequence of transition definitions")
    try:
        declared = list(transitions)
    except TypeError:
        raise ConfigurationError("Transitions must be a sequence of transition definitions") from None
    if not declared:
        raise ConfigurationError("At least one transition must be declared")

    rows: Dict[State, Dict[str, TransitionDefinition]] = {}
    definitions: List[TransitionDefinition] = []

    for raw in declared:
        definition = to_definition(raw)
        definitions.append(definition)
        rows.setdefault(definition.target, {})
        for source in definition.sources:
            row = rows.setdefault(source, {})
            if definition.name in row:
                logger.debug(
                    "Transition %r from %r redeclared; %r replaces %r",
                    definition.name,
                    source,
                    definition,
                    row[definition.name],
                )
            row[definition.name] = definition

    table = TransitionTable(rows, definitions)
    logger.debug("Built %r", table)
    return table, table.states
