"""
Runtime package: transition table construction and transition admission.
"""

from .concurrency import AdmissionLock
from .graph import TransitionTable, build_transition_table

__all__ = ["AdmissionLock", "TransitionTable", "build_transition_table"]
