"""Data models for the avrcalc scoring calculator.

ScoringAction, ScoringMode, ControlKind, SessionState — the typed structures
that flow through config → calculator → scorer → CLI.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

# pointvalue sentinel: score from pointstages instead of pointvalue * count
STAGED_SENTINEL = -1


class ScoringMode(str, Enum):
    """How an action turns its count into points."""

    LINEAR = "linear"
    STAGED = "staged"


class ControlKind(str, Enum):
    """Input control presented for an action."""

    SLIDER = "slider"
    CHECKBOX = "checkbox"


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class ScoringAction:
    """One scoreable action in the competition."""

    id: str = field(default_factory=_new_id)
    description: str = "N/A"
    name: str = ""
    phase: int = 0

    # Set to STAGED_SENTINEL to use pointstages instead
    pointvalue: int = 0

    # Ignored in staged mode
    max_count: int = 10

    # In staged mode this is the index into pointstages
    count: int = 0

    pointstages: list[int] = field(default_factory=list)

    @property
    def mode(self) -> ScoringMode:
        if self.pointvalue == STAGED_SENTINEL:
            return ScoringMode.STAGED
        return ScoringMode.LINEAR

    @property
    def max_index(self) -> int:
        """Largest valid count for this action."""
        if self.mode == ScoringMode.STAGED:
            return len(self.pointstages) - 1
        return self.max_count

    @property
    def control(self) -> ControlKind:
        """Slider for staged or multi-count actions, checkbox for 0/1 ones."""
        if self.mode == ScoringMode.STAGED or self.max_count > 1:
            return ControlKind.SLIDER
        return ControlKind.CHECKBOX

    def clamp(self, count: int) -> int:
        """Clamp a requested count into [0, max_index]."""
        return max(0, min(count, self.max_index))

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "id": self.id,
            "description": self.description,
            "name": self.name,
            "phase": self.phase,
            "pointvalue": self.pointvalue,
            "max_count": self.max_count,
            "count": self.count,
            "pointstages": list(self.pointstages),
        }

    @classmethod
    def from_dict(cls, d: dict) -> ScoringAction:
        """Deserialize from a config record. Missing fields take the defaults."""
        return cls(
            id=d.get("id") or _new_id(),
            description=d.get("description", "N/A"),
            name=d.get("name", ""),
            phase=d.get("phase", 0),
            pointvalue=d.get("pointvalue", 0),
            max_count=d.get("max_count", 10),
            count=d.get("count", 0),
            pointstages=list(d.get("pointstages", [])),
        )


@dataclass
class SessionState:
    """Persisted session: the last computed score, never the registry itself."""

    score: int = 0
    config_path: str = ""
    saved_at: str = ""

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "config_path": self.config_path,
            "saved_at": self.saved_at,
        }

    @classmethod
    def from_dict(cls, d: dict) -> SessionState:
        """Raises TypeError when a path or timestamp field is not a string."""
        for key in ("config_path", "saved_at"):
            if not isinstance(d.get(key, ""), str):
                raise TypeError(f"state field '{key}' must be a string")
        return cls(
            score=int(d.get("score", 0)),
            config_path=d.get("config_path", ""),
            saved_at=d.get("saved_at", ""),
        )

    def save(self, path: Path) -> None:
        """Write the state file, stamping saved_at."""
        self.saved_at = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> SessionState:
        """Load the state file. Missing or corrupt files give a fresh state."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                return cls()
            return cls.from_dict(data)
        except (FileNotFoundError, json.JSONDecodeError, OSError, TypeError, ValueError):
            return cls()
