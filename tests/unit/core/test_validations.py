# tests/unit/core/test_validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from asyncfsm.core.errors import ConfigurationError, ErrorCode
from asyncfsm.core.validations import Validator, _DefaultValidationRules
from asyncfsm.plugins.naming import camelize
from asyncfsm.runtime.graph import build_transition_table


@pytest.fixture
def validator():
    return Validator()


def test_require_rejects_none(validator):
    with pytest.raises(ConfigurationError, match="Missing required parameter initial_state"):
        validator.require(None, "initial_state")


def test_require_accepts_falsy_values(validator):
    validator.require(0, "initial_state")
    validator.require("", "initial_state")


def test_initial_state_must_be_known(validator):
    with pytest.raises(ConfigurationError) as exc_info:
        validator.validate_initial_state("nowhere", frozenset({"idle", "running"}))
    assert exc_info.value.error_code is ErrorCode.INITIAL_STATE_NOT_FOUND


def test_unhashable_initial_state_rejected(validator):
    with pytest.raises(ConfigurationError, match="not hashable"):
        validator.validate_initial_state(["idle"], frozenset({"idle"}))


def test_known_initial_state_accepted(validator):
    validator.validate_initial_state("idle", frozenset({"idle", "running"}))


def test_listeners_must_be_callable(validator):
    validator.validate_listeners(None)
    validator.validate_listeners([lambda f, t, n: None])
    with pytest.raises(ConfigurationError):
        validator.validate_listeners([lambda f, t, n: None, "nope"])


def test_trigger_names_camelized(validator):
    table, _ = build_transition_table(
        [
            {"name": "go home", "from": "work", "to": "home"},
            {"name": "Go To-Work", "from": "home", "to": "work"},
        ]
    )
    assert validator.build_trigger_names(table, camelize) == {"goHome": "go home", "goToWork": "Go To-Work"}


def test_trigger_names_without_mapper(validator):
    table, _ = build_transition_table([{"name": "go home", "from": "work", "to": "home"}])
    assert validator.build_trigger_names(table, None) == {"go home": "go home"}


def test_redeclared_transition_keeps_one_trigger(validator):
    table, _ = build_transition_table(
        [
            {"name": "go", "from": "a", "to": "b"},
            {"name": "go", "from": "b", "to": "c"},
        ]
    )
    assert validator.build_trigger_names(table, camelize) == {"go": "go"}


def test_colliding_trigger_identifiers_rejected(validator):
    table, _ = build_transition_table(
        [
            {"name": "go home", "from": "work", "to": "home"},
            {"name": "go-home", "from": "office", "to": "home"},
        ]
    )
    with pytest.raises(ConfigurationError, match="'goHome'"):
        validator.build_trigger_names(table, camelize)


def test_empty_trigger_identifier_rejected():
    table, _ = build_transition_table([{"name": "!!!", "from": "a", "to": "b"}])
    with pytest.raises(ConfigurationError, match="empty trigger identifier"):
        _DefaultValidationRules.build_trigger_names(table, camelize)
