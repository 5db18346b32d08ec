"""Rich rendering for the calculator display, keypad and tape."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tapcalc.keypad import ALIASES, KEYPAD, KeyKind
from tapcalc.models import Tape
from tapcalc.numbers import is_sentinel
from tapcalc.settings import DEFAULT_WIDTH

_KIND_STYLES = {
    KeyKind.DIGIT: "white",
    KeyKind.DECIMAL: "white",
    KeyKind.COMMAND: "cyan",
    KeyKind.OPERATOR: "bold yellow",
}


def _display_style(display: str) -> str:
    return "bold red" if is_sentinel(display) else "bold white"


def render_display(display: str, console: Console, width: int = DEFAULT_WIDTH) -> None:
    """Render the display text right-aligned in a panel."""
    text = Text(display, style=_display_style(display), justify="right")
    console.print(Panel(text, width=max(width, len(display) + 4), border_style="dim"))


def render_keypad(console: Console) -> None:
    """Render the button grid and the typed aliases."""
    grid = Table(title="Keypad", show_header=False, show_lines=True)
    for _ in range(len(KEYPAD[0])):
        grid.add_column(justify="center", min_width=5)
    for row in KEYPAD:
        grid.add_row(*(f"[{_KIND_STYLES[k.kind]}]{k.label}[/]" for k in row))

    aliases = Table(title="Aliases", show_header=True, header_style="bold")
    aliases.add_column("Type", style="green")
    aliases.add_column("Key", justify="center")
    for alias, key in ALIASES.items():
        aliases.add_row(alias, key.label)

    console.print()
    console.print(grid)
    console.print(aliases)
    console.print()


def render_tape(tape: Tape, console: Console) -> None:
    """Render one row per key press with the display it produced."""
    if not tape.entries:
        console.print("[yellow]Tape is empty.[/yellow]")
        return

    table = Table(title="Tape", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", justify="center")
    table.add_column("Display", justify="right", min_width=12)
    table.add_column("Phase", style="dim")

    for i, entry in enumerate(tape.entries, 1):
        style = _display_style(entry.display)
        table.add_row(str(i), entry.key, f"[{style}]{entry.display}[/]", entry.phase)

    console.print()
    console.print(table)
    console.print()
