"""Rich rendering of the calculator display and the history table."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.table import Table

from calcpad.events import StateChange
from calcpad.formatter import format_for_screen_reader
from calcpad.models import HistoryEntry, Phase


def _fmt_time(timestamp: str) -> str:
    """ISO timestamp as 'YYYY-MM-DD HH:MM:SS', raw text if it does not parse."""
    try:
        return datetime.fromisoformat(timestamp).strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return timestamp or "--"


def spoken(state: StateChange) -> str:
    """Display value as read aloud; error messages pass through."""
    if state.phase is Phase.ERROR:
        return state.display_value
    return format_for_screen_reader(state.display_value)


def render_display(state: StateChange, console: Console, screen_reader: bool = False) -> None:
    """Print the expression line above the main display."""
    table = Table.grid(padding=(0, 1))
    table.add_column(justify="left", min_width=2)
    table.add_column(justify="right", min_width=20)

    indicator = "[cyan]M[/cyan]" if state.has_memory else ""
    table.add_row("", f"[dim]{state.expression_display}[/dim]")

    value = spoken(state) if screen_reader else state.display_value
    if state.phase is Phase.ERROR:
        table.add_row(indicator, f"[bold red]{value}[/bold red]")
    else:
        table.add_row(indicator, f"[bold]{value}[/bold]")

    console.print(table)


def render_history(entries: list[HistoryEntry], console: Console) -> None:
    """Render a Rich table of history entries (newest first)."""
    if not entries:
        console.print("[yellow]No calculations yet.[/yellow]")
        return

    table = Table(title="History", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Time", style="dim", min_width=19)
    table.add_column("Expression", min_width=20)
    table.add_column("Result", style="green", justify="right", min_width=12)

    for i, entry in enumerate(entries, 1):
        table.add_row(str(i), _fmt_time(entry.timestamp), entry.expression_string, entry.result_string)

    console.print()
    console.print(table)
    console.print()
