"""avrcalc scorer — sums actions into a score and renders Rich tables.

contribution() and score_actions() are pure: they read the registry as it is
when called and never touch it. Rendering groups actions by phase in the
order the phases first appear.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from avrcalc.models import ControlKind, ScoringAction, ScoringMode


def contribution(action: ScoringAction) -> int:
    """Points one action contributes at its current count.

    Raises:
        IndexError: a staged action's count is not a valid stage index.
    """
    if action.mode == ScoringMode.STAGED:
        # No negative-index wraparound
        if not 0 <= action.count < len(action.pointstages):
            raise IndexError(
                f"{action.name}: stage {action.count} outside 0..{len(action.pointstages) - 1}"
            )
        return action.pointstages[action.count]
    return action.pointvalue * action.count


def score_actions(actions: list[ScoringAction]) -> int:
    """Total score of a registry."""
    return sum(contribution(a) for a in actions)


def phases(actions: list[ScoringAction]) -> list[int]:
    """Unique phases in first-appearance order."""
    return list(dict.fromkeys(a.phase for a in actions))


def phase_breakdown(actions: list[ScoringAction]) -> dict[int, int]:
    """Subtotal per phase."""
    totals = {p: 0 for p in phases(actions)}
    for a in actions:
        totals[a.phase] += contribution(a)
    return totals


def _fmt_count(action: ScoringAction) -> str:
    """Current value of the action's control."""
    if action.control == ControlKind.CHECKBOX:
        return "[green]✔[/green]" if action.count else "[dim]☐[/dim]"
    return f"{action.count}/{action.max_index}"


def render_actions(actions: list[ScoringAction], console: Console) -> None:
    """Render one table per phase, numbering actions by registry position."""
    if not actions:
        console.print("[yellow]No scoring actions.[/yellow]")
        return

    for phase in phases(actions):
        table = Table(
            title=f"Phase {phase} Actions",
            show_header=True,
            header_style="bold",
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Action", style="green", min_width=15)
        table.add_column("Description", min_width=30)
        table.add_column("Control", justify="center")
        table.add_column("Count", justify="right")
        table.add_column("Points", justify="right")

        for i, a in enumerate(actions, 1):
            if a.phase != phase:
                continue
            control = a.control.value
            if a.mode == ScoringMode.STAGED:
                control = f"{control} (stages)"
            table.add_row(
                str(i),
                a.name,
                a.description,
                control,
                _fmt_count(a),
                str(contribution(a)),
            )

        console.print()
        console.print(table)
    console.print()


def render_score(score: int, actions: list[ScoringAction], console: Console) -> None:
    """Render the score with a per-phase breakdown of the current counts."""
    table = Table(title="AVR 2024 Score", show_header=True, header_style="bold")
    table.add_column("Phase", style="dim", min_width=10)
    table.add_column("Points", justify="right", min_width=8)

    for phase, subtotal in phase_breakdown(actions).items():
        table.add_row(f"Phase {phase}", str(subtotal))

    console.print()
    console.print(table)
    console.print(f"[bold]Score:[/bold] [green]{score}[/green]")
    console.print()
