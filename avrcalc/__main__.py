"""CLI for the avrcalc AVR 2024 scoring calculator.

Usage:
    python -m avrcalc actions                          # Show scoring actions by phase
    python -m avrcalc score --set "Phase 1=3" -s 6=4   # Score a set of counts
    python -m avrcalc play                             # Interactive session
    python -m avrcalc last                             # Last saved score
    python -m avrcalc reset                            # Clear the saved score
    python -m avrcalc export actions.json              # Write an editable config
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from avrcalc.calculator import Calculator
from avrcalc.config import config_path, export_actions, state_path
from avrcalc.defaults import initialize_default_actions
from avrcalc.interactive import run_session
from avrcalc.models import SessionState
from avrcalc.scorer import render_actions, render_score

app = typer.Typer(
    name="avrcalc",
    help="AVR 2024 scoring calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)

_CONFIG_HELP = "Config file of scoring actions (default: $AVRCALC_CONFIG or built-in)"


def _resolve_config(config: Optional[Path]) -> Optional[Path]:
    return config if config is not None else config_path()


@app.command("actions")
def cmd_actions(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
) -> None:
    """Show the scoring actions grouped by phase."""
    calc = Calculator.from_config(_resolve_config(config), console)
    render_actions(calc.actions, console)


@app.command("score")
def cmd_score(
    counts: Optional[list[str]] = typer.Option(
        None, "--set", "-s", help="NAME_OR_NUMBER=COUNT, repeatable (counts are clamped)"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
    save: bool = typer.Option(False, "--save", help="Persist the score as the last session score"),
) -> None:
    """Compute the score for a set of action counts."""
    calc = Calculator.from_config(_resolve_config(config), console)

    for item in counts or []:
        key, sep, value = item.rpartition("=")
        if not sep or not key:
            console.print(f"[red]Invalid --set {item!r}[/red]. Use NAME_OR_NUMBER=COUNT")
            raise typer.Exit(1)
        try:
            index = calc.index_of(key)
        except KeyError:
            console.print(f"[red]Unknown action: {key}[/red]")
            raise typer.Exit(1)
        try:
            requested = int(value)
        except ValueError:
            console.print(f"[red]Count must be an integer: {value}[/red]")
            raise typer.Exit(1)
        stored = calc.set_count(index, requested)
        if stored != requested:
            action = calc.actions[index]
            console.print(f"[dim]{action.name}: clamped {requested} to {stored}[/dim]")

    calc.calculate()
    render_score(calc.score, calc.actions, console)

    if save:
        path = state_path()
        calc.to_state().save(path)
        console.print(f"Score saved to {path}")


@app.command("play")
def cmd_play(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
) -> None:
    """Interactive session: set counts, calculate, reset."""
    path = state_path()
    state = SessionState.load(path)
    calc = Calculator.from_state(state, config_path=_resolve_config(config), console=console)
    run_session(calc, console, path)


@app.command("last")
def cmd_last() -> None:
    """Show the last saved score."""
    state = SessionState.load(state_path())
    if not state.saved_at:
        console.print("[yellow]No saved session yet.[/yellow]")
        return
    console.print(f"Score: {state.score} [dim](saved {state.saved_at})[/dim]")


@app.command("reset")
def cmd_reset() -> None:
    """Clear the saved session score."""
    path = state_path()
    SessionState().save(path)
    console.print("Session reset. Score: 0")


@app.command("export")
def cmd_export(
    path: Path = typer.Argument(help="Where to write the config (JSON)"),
) -> None:
    """Write the built-in actions as an editable config file."""
    export_actions(initialize_default_actions(), path)
    console.print(f"Config written to {path}")


if __name__ == "__main__":
    app()
