"""Configuration file loading and path resolution for avrcalc.

A config file is JSON: either a list of action records or an object with an
"actions" list. Each record may carry any of id, description, name, phase,
pointvalue, max_count, count, pointstages; missing fields take the model
defaults. A file that is missing or malformed never stops the calculator:
the built-in actions are used instead and a warning is printed.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from rich.console import Console

from avrcalc.defaults import initialize_default_actions
from avrcalc.models import ScoringAction, ScoringMode

_INT_FIELDS = ("phase", "pointvalue", "max_count", "count")
_STR_FIELDS = ("id", "description", "name")


class ConfigError(ValueError):
    """A config file decoded fine but does not describe a valid registry."""


def config_path() -> Optional[Path]:
    """Config file from AVRCALC_CONFIG, or None to use the built-in actions."""
    raw = os.environ.get("AVRCALC_CONFIG", "")
    return Path(raw).expanduser() if raw else None


def state_path() -> Path:
    """Session state file from AVRCALC_STATE, default ~/.avrcalc/state.json."""
    raw = os.environ.get("AVRCALC_STATE", "")
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".avrcalc" / "state.json"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_record(i: int, record) -> ScoringAction:
    if not isinstance(record, dict):
        raise ConfigError(f"action #{i} is not an object")
    for key in _INT_FIELDS:
        if key in record and not _is_int(record[key]):
            raise ConfigError(f"action #{i}: '{key}' must be an integer")
    for key in _STR_FIELDS:
        if key in record and not isinstance(record[key], str):
            raise ConfigError(f"action #{i}: '{key}' must be a string")
    stages = record.get("pointstages", [])
    if not isinstance(stages, list) or not all(_is_int(s) for s in stages):
        raise ConfigError(f"action #{i}: 'pointstages' must be a list of integers")

    action = ScoringAction.from_dict(record)
    if action.mode == ScoringMode.STAGED and not action.pointstages:
        raise ConfigError(f"action #{i} ({action.name}): staged scoring needs pointstages")
    if not 0 <= action.count <= action.max_index:
        raise ConfigError(
            f"action #{i} ({action.name}): count {action.count} outside 0..{action.max_index}"
        )
    return action


def parse_actions(data) -> list[ScoringAction]:
    """Build a registry from decoded config JSON.

    Raises:
        ConfigError: the data is not a list of valid action records.
    """
    if isinstance(data, dict) and "actions" in data:
        data = data["actions"]
    if not isinstance(data, list):
        raise ConfigError("expected a list of actions")

    actions = [_check_record(i, record) for i, record in enumerate(data, 1)]

    seen: set[str] = set()
    for action in actions:
        if action.id in seen:
            raise ConfigError(f"duplicate action id: {action.id}")
        seen.add(action.id)
    return actions


def load_actions(
    path: Optional[Path],
    console: Optional[Console] = None,
) -> list[ScoringAction]:
    """Load the registry from a config file, falling back to the built-in actions.

    Args:
        path: Config file, or None for the built-in actions.
        console: Where to print the fallback warning, if anywhere.

    Returns:
        The configured actions, or the defaults when the file cannot be used.
    """
    if path is None:
        return initialize_default_actions()

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return parse_actions(data)
    except FileNotFoundError:
        reason = "file not found"
    except json.JSONDecodeError as e:
        reason = f"invalid JSON ({e.msg} at line {e.lineno})"
    except UnicodeDecodeError:
        reason = "not UTF-8 text"
    except ConfigError as e:
        reason = str(e)
    except OSError as e:
        reason = str(e)

    if console:
        console.print(f"[yellow]Could not load config {path}: {reason}.[/yellow] Using built-in actions.")
    return initialize_default_actions()


def export_actions(actions: list[ScoringAction], path: Path) -> None:
    """Write a registry as a config file that load_actions accepts."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps([a.to_dict() for a in actions], indent=2) + "\n",
        encoding="utf-8",
    )
