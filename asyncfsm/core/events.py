# asyncfsm/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from typing import Hashable

STATE_CHANGED = "stateChanged"


@dataclass(frozen=True)
class StateChange:
    """
    Record of one committed transition, published to listeners after the commit.
    """

    from_state: Hashable
    to_state: Hashable
    transition: str

    @property
    def name(self) -> str:
        """The event name, always ``stateChanged``."""
        return STATE_CHANGED

    def as_tuple(self):
        return (self.from_state, self.to_state, self.transition)
