"""Interactive terminal session — one prompt per user action.

Commands:
    <n> <count>   set action n (as numbered in the table) to count, clamped
    <n>           toggle a checkbox action
    c             calculate the score
    r             reset to the built-in actions
    l             reload the config file
    a             show the actions again
    q             quit and save the session
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from avrcalc.calculator import Calculator
from avrcalc.scorer import render_actions, render_score

HELP = "[dim]<n> <count> set · <n> toggle · c calculate · r reset · l reload · a actions · q quit[/dim]"


def handle_command(calc: Calculator, line: str, console: Console) -> bool:
    """Apply one command line to the session. Returns False when the user quits."""
    parts = line.split()
    if not parts:
        return True

    cmd = parts[0].lower()
    if cmd in ("q", "quit", "exit"):
        return False
    if cmd in ("c", "calc", "calculate"):
        calc.calculate()
        render_score(calc.score, calc.actions, console)
        return True
    if cmd in ("r", "reset"):
        calc.reset()
        console.print("Actions reset. Score: 0")
        return True
    if cmd in ("l", "reload"):
        calc.reload(console)
        console.print(f"Reloaded {len(calc.actions)} actions. Score: 0")
        return True
    if cmd in ("a", "actions"):
        render_actions(calc.actions, console)
        return True

    try:
        index = calc.index_of(parts[0])
    except KeyError:
        console.print(f"[red]Unknown command or action: {parts[0]}[/red]")
        console.print(HELP)
        return True

    action = calc.actions[index]
    if len(parts) == 1:
        try:
            value = calc.toggle(index)
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")
            return True
        console.print(f"{action.name}: {'on' if value else 'off'}")
        return True

    try:
        requested = int(parts[1])
    except ValueError:
        console.print(f"[red]Count must be an integer: {parts[1]}[/red]")
        return True
    value = calc.set_count(index, requested)
    if value != requested:
        console.print(f"[dim]Clamped to 0..{action.max_index}[/dim]")
    console.print(f"{action.name}: {value}")
    return True


def run_session(calc: Calculator, console: Console, state_file: Path) -> None:
    """Prompt until the user quits (or input ends), then save the session state."""
    console.print("[bold]AVR 2024 Calculator[/bold]")
    if calc.score:
        console.print(f"[dim]Last score: {calc.score}[/dim]")
    render_actions(calc.actions, console)
    console.print(HELP)

    while True:
        try:
            line = Prompt.ask("avrcalc", console=console, default="", show_default=False)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not handle_command(calc, line, console):
            break

    calc.to_state().save(state_file)
    console.print(f"[dim]Session saved to {state_file}[/dim]")
