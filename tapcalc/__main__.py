"""CLI for the tapcalc calculator.

Usage:
    python -m tapcalc press 5 + 3 =           # Final display on stdout
    python -m tapcalc press "12.5*3=" --trace # Show every key press
    python -m tapcalc press 9 sqrt --save t.json
    python -m tapcalc replay t.json           # Re-run a saved tape
    python -m tapcalc keys                    # Show keypad and aliases
    python -m tapcalc repl                    # Interactive session

Keys starting with "-" other than a lone "-" need a preceding "--".
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tapcalc.engine import Calculator
from tapcalc.errors import TapcalcError
from tapcalc.keypad import run_sequence, tokenize
from tapcalc.models import Tape
from tapcalc.render import render_display, render_keypad, render_tape
from tapcalc.settings import load_settings

app = typer.Typer(
    name="tapcalc",
    help="Four-function calculator with chained operator evaluation",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = ("q", "quit", "exit")


def _tokens_from_args(keys: list[str]) -> list[str]:
    tokens: list[str] = []
    for arg in keys:
        tokens.extend(tokenize(arg))
    return tokens


def _fail(err: TapcalcError) -> None:
    console.print(f"[red]Error:[/red] {escape(str(err))}")
    raise typer.Exit(1)


@app.command("press")
def cmd_press(
    keys: list[str] = typer.Argument(help="Keys to press, e.g. 5 + 3 = or '12.5*3='"),
    trace: Optional[bool] = typer.Option(None, "--trace/--no-trace", help="Show the tape of every key press"),
    save: Optional[Path] = typer.Option(None, "--save", "-s", help="Write the tape as JSON to this path"),
) -> None:
    """Press a sequence of keys and print the final display."""
    settings = load_settings()
    try:
        tape = run_sequence(_tokens_from_args(keys))
    except TapcalcError as e:
        _fail(e)

    show_trace = settings.trace if trace is None else trace
    if show_trace:
        render_tape(tape, console)
    if save:
        try:
            tape.save(save)
        except OSError as e:
            console.print(f"[red]Error:[/red] cannot write tape {escape(str(save))}: {escape(str(e))}")
            raise typer.Exit(1)
        console.print(f"[dim]Tape saved to {save}[/dim]")

    typer.echo(tape.final_display)


@app.command("keys")
def cmd_keys() -> None:
    """Show the keypad layout and accepted aliases."""
    render_keypad(console)


@app.command("replay")
def cmd_replay(
    path: Path = typer.Argument(help="Tape JSON written by 'press --save'"),
) -> None:
    """Re-run a saved tape on a fresh calculator and compare displays."""
    try:
        saved = Tape.load(path)
        replayed = run_sequence(saved.keys)
    except TapcalcError as e:
        _fail(e)

    mismatches = [
        (i, old, new)
        for i, (old, new) in enumerate(zip(saved.entries, replayed.entries), 1)
        if old.display != new.display
    ]
    if not mismatches:
        console.print(f"[green]Replay matches[/green] ({len(saved.entries)} keys)")
        typer.echo(replayed.final_display)
        return

    table = Table(title=f"Replay mismatches: {path}", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", justify="center")
    table.add_column("Saved", justify="right")
    table.add_column("Replayed", justify="right", style="red")
    for i, old, new in mismatches:
        table.add_row(str(i), old.key, old.display, new.display)
    console.print(table)
    raise typer.Exit(1)


@app.command("repl")
def cmd_repl() -> None:
    """Interactive session. Type keys per line; q to quit."""
    settings = load_settings()
    engine = Calculator()
    tape = Tape()
    render_display(engine.display, console, settings.width)

    while True:
        try:
            line = console.input(settings.prompt)
        except (EOFError, KeyboardInterrupt):
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        if not line.strip():
            continue
        try:
            run_sequence(tokenize(line), engine=engine, tape=tape)
        except TapcalcError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            continue
        render_display(engine.display, console, settings.width)

    if settings.trace:
        render_tape(tape, console)
    typer.echo(engine.display)


if __name__ == "__main__":
    app()
