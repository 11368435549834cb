"""Tests for config loading: exact replacement, defaults for missing fields,
and fallback to the built-in actions on any load failure."""

import io
import json

import pytest
from rich.console import Console

from avrcalc.config import (
    ConfigError,
    config_path,
    export_actions,
    load_actions,
    parse_actions,
    state_path,
)
from avrcalc.defaults import initialize_default_actions

RECORDS = [
    {
        "id": "a1",
        "description": "Score in the goal zone",
        "name": "Goal",
        "phase": 1,
        "pointvalue": 2,
        "max_count": 5,
        "count": 1,
        "pointstages": [],
    },
    {
        "id": "a2",
        "description": "Land on the pad",
        "name": "Landing",
        "phase": 2,
        "pointvalue": 10,
        "max_count": 1,
        "count": 0,
        "pointstages": [],
    },
    {
        "id": "a3",
        "description": "Stack height",
        "name": "Stack",
        "phase": 2,
        "pointvalue": -1,
        "max_count": 10,
        "count": 3,
        "pointstages": [0, 3, 7, 4, 5, 8],
    },
]


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200)


def _write(tmp_path, data):
    path = tmp_path / "actions.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


def _default_names():
    return [a.name for a in initialize_default_actions()]


# --- Well-formed files ---

def test_load_replaces_registry_exactly(tmp_path, console):
    actions = load_actions(_write(tmp_path, RECORDS), console)
    assert len(actions) == len(RECORDS)
    assert [a.to_dict() for a in actions] == RECORDS
    assert console.file.getvalue() == ""


def test_load_accepts_actions_object(tmp_path, console):
    actions = load_actions(_write(tmp_path, {"actions": RECORDS}), console)
    assert [a.id for a in actions] == ["a1", "a2", "a3"]


def test_load_fills_missing_fields(tmp_path, console):
    actions = load_actions(_write(tmp_path, [{"name": "Bare", "pointvalue": 3}]), console)
    (a,) = actions
    assert a.name == "Bare"
    assert a.description == "N/A"
    assert a.max_count == 10
    assert a.count == 0
    assert a.id


def test_no_path_gives_defaults(console):
    assert [a.name for a in load_actions(None, console)] == _default_names()


def test_empty_list_is_valid(tmp_path, console):
    assert load_actions(_write(tmp_path, []), console) == []


# --- Fallback ---

def test_missing_file_falls_back(tmp_path, console):
    actions = load_actions(tmp_path / "missing.json", console)
    assert [a.name for a in actions] == _default_names()
    assert "file not found" in console.file.getvalue()


def test_invalid_json_falls_back(tmp_path, console):
    actions = load_actions(_write(tmp_path, "[{\"name\": "), console)
    assert [a.name for a in actions] == _default_names()
    assert "invalid JSON" in console.file.getvalue()


@pytest.mark.parametrize("data", [
    {"name": "not a list"},
    ["not an object"],
    [{"name": "x", "pointvalue": "two"}],
    [{"name": "x", "pointvalue": True}],
    [{"name": 5}],
    [{"name": "x", "pointvalue": -1}],
    [{"name": "x", "pointvalue": -1, "pointstages": [0, 1], "count": 2}],
    [{"name": "x", "pointvalue": 2, "max_count": 3, "count": 4}],
    [{"name": "x", "pointstages": "0,1"}],
    [{"id": "same"}, {"id": "same"}],
])
def test_malformed_config_falls_back(tmp_path, console, data):
    actions = load_actions(_write(tmp_path, data), console)
    assert [a.name for a in actions] == _default_names()
    assert "Could not load config" in console.file.getvalue()


def test_fallback_without_console_is_silent(tmp_path):
    actions = load_actions(tmp_path / "missing.json")
    assert len(actions) == len(_default_names())


def test_parse_actions_raises_config_error():
    with pytest.raises(ConfigError, match="pointstages"):
        parse_actions([{"name": "Stack", "pointvalue": -1}])


# --- Export ---

def test_export_writes_loadable_config(tmp_path, console):
    defaults = initialize_default_actions()
    path = tmp_path / "out" / "actions.json"
    export_actions(defaults, path)
    loaded = load_actions(path, console)
    assert [a.to_dict() for a in loaded] == [a.to_dict() for a in defaults]


# --- Paths ---

def test_config_path_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("AVRCALC_CONFIG", str(tmp_path / "game.json"))
    assert config_path() == tmp_path / "game.json"
    monkeypatch.delenv("AVRCALC_CONFIG")
    assert config_path() is None


def test_state_path_default_and_env(monkeypatch, tmp_path):
    monkeypatch.delenv("AVRCALC_STATE", raising=False)
    assert state_path().name == "state.json"
    assert state_path().parent.name == ".avrcalc"
    monkeypatch.setenv("AVRCALC_STATE", str(tmp_path / "s.json"))
    assert state_path() == tmp_path / "s.json"
