"""Calculator session — the registry, the last score, and user interaction.

The score is only recomputed by calculate(); changing counts leaves it stale
until then, the same as pressing "Calculate" in a scoring sheet.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console

from avrcalc import scorer
from avrcalc.config import load_actions
from avrcalc.defaults import initialize_default_actions
from avrcalc.models import ControlKind, ScoringAction, SessionState


class Calculator:
    """Owns one registry of scoring actions and the score computed from it."""

    def __init__(
        self,
        actions: Optional[list[ScoringAction]] = None,
        score: int = 0,
        config_path: Optional[Path] = None,
    ) -> None:
        self.actions = actions if actions is not None else initialize_default_actions()
        self.score = score
        self.config_path = config_path

    @classmethod
    def from_config(cls, config_path: Optional[Path], console: Optional[Console] = None) -> Calculator:
        """Start a session from a config file (or the defaults when None)."""
        return cls(actions=load_actions(config_path, console), config_path=config_path)

    @classmethod
    def from_state(
        cls,
        state: SessionState,
        config_path: Optional[Path] = None,
        console: Optional[Console] = None,
    ) -> Calculator:
        """Restore a persisted session. The registry is always rebuilt fresh.

        An explicit config_path wins over the one recorded in the state.
        """
        path = config_path
        if path is None and state.config_path:
            path = Path(state.config_path)
        calc = cls.from_config(path, console)
        calc.score = state.score
        return calc

    def to_state(self) -> SessionState:
        return SessionState(
            score=self.score,
            config_path=str(self.config_path) if self.config_path else "",
        )

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def index_of(self, key: str) -> int:
        """Resolve a 1-based action number or a case-insensitive name to an index.

        Raises:
            KeyError: no action matches.
        """
        key = key.strip()
        if key.isascii() and key.isdigit():
            n = int(key)
            if 1 <= n <= len(self.actions):
                return n - 1
            raise KeyError(key)
        for i, a in enumerate(self.actions):
            if a.name.lower() == key.lower():
                return i
        raise KeyError(key)

    def set_count(self, index: int, count: int) -> int:
        """Set an action's count, clamped to its valid range. Returns the stored value."""
        action = self.actions[index]
        action.count = action.clamp(count)
        return action.count

    def toggle(self, index: int) -> int:
        """Flip a checkbox action between 0 and 1.

        Raises:
            ValueError: the action is shown as a slider, not a checkbox.
        """
        action = self.actions[index]
        if action.control != ControlKind.CHECKBOX:
            raise ValueError(f"{action.name} is a slider; set a count instead")
        action.count = action.clamp(0 if action.count else 1)
        return action.count

    def calculate(self) -> int:
        """Recompute the score from the current counts."""
        self.score = scorer.score_actions(self.actions)
        return self.score

    def reset(self) -> None:
        """Discard all counts: default registry, score 0."""
        self.actions = initialize_default_actions()
        self.score = 0

    def reload(self, console: Optional[Console] = None) -> None:
        """Rebuild the registry from the config file (or defaults), score 0."""
        self.actions = load_actions(self.config_path, console)
        self.score = 0

    # ------------------------------------------------------------------
    # Grouping
    # ------------------------------------------------------------------

    def phases(self) -> list[int]:
        return scorer.phases(self.actions)

    def actions_in_phase(self, phase: int) -> list[ScoringAction]:
        return [a for a in self.actions if a.phase == phase]
