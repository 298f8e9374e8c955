"""Pluggable helpers kept outside the state machine core."""
