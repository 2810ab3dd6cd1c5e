"""CLI for the calcpad calculator.

Usage:
    python -m calcpad eval 12 + 3 x 4 =            # Feed keys, print the display
    python -m calcpad eval "5/0=" --screen-reader  # Spoken wording
    python -m calcpad repl                         # Interactive keypad
    python -m calcpad history                      # Show past calculations
    python -m calcpad history --clear              # Forget them
    python -m calcpad memory                       # Show the memory register
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from calcpad.config import Settings, load_settings
from calcpad.display import render_display, render_history
from calcpad.formatter import format_number
from calcpad.keymap import KEY_MAPPINGS, dispatch, split_keys
from calcpad.models import Phase
from calcpad.session import Session

app = typer.Typer(
    name="calcpad",
    help="Keypad calculator with operator precedence, memory and history",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_QUIT_WORDS = {"quit", "exit", "q"}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else load_settings()


@app.callback()
def main(
    ctx: typer.Context,
    home: Optional[Path] = typer.Option(None, "--home", help="Data directory (default: $CALCPAD_HOME or ~/.calcpad)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
) -> None:
    """Keypad calculator with operator precedence, memory and history."""
    settings = load_settings()
    if home is not None:
        settings = replace(settings, data_dir=home.expanduser())
    if log_level:
        level = log_level.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            console.print(f"[red]Unknown log level: {log_level}[/red]")
            raise typer.Exit(1)
        settings = replace(settings, log_level=level)
    _configure_logging(settings.log_level)
    ctx.obj = settings


@app.command("eval")
def cmd_eval(
    ctx: typer.Context,
    keys: list[str] = typer.Argument(help="Keys to press, e.g. 1 2 + 3 = (or '12+3=')"),
    screen_reader: bool = typer.Option(False, "--screen-reader", "-s", help="Print the screen-reader wording"),
) -> None:
    """Press keys on a fresh calculator and print the display."""
    with Session(_settings(ctx), restore_state=False) as session:
        calc = session.calculator
        for key in split_keys(" ".join(keys)):
            if not dispatch(calc, key):
                console.print(f"[red]Unknown key: {key}[/red]")
                raise typer.Exit(1)

        render_display(calc.snapshot(), out, screen_reader=screen_reader)
        if calc.phase is Phase.ERROR:
            raise typer.Exit(1)


def _render_keys(console: Console) -> None:
    table = Table(title="Keys", show_header=True, header_style="bold")
    table.add_column("Key", style="green")
    table.add_column("Action")
    for key, action in KEY_MAPPINGS.items():
        table.add_row(key, action.value)
    console.print(table)


@app.command("repl")
def cmd_repl(
    ctx: typer.Context,
    screen_reader: bool = typer.Option(False, "--screen-reader", "-s", help="Print the screen-reader wording"),
) -> None:
    """Interactive keypad. Type keys, 'help' for the key list, 'quit' to leave."""
    with Session(_settings(ctx)) as session:
        calc = session.calculator
        render_display(calc.snapshot(), out, screen_reader=screen_reader)
        while True:
            try:
                line = console.input("[bold green]calc>[/bold green] ").strip()
            except (EOFError, KeyboardInterrupt):
                console.print()
                break

            if not line:
                continue
            if line.lower() in _QUIT_WORDS:
                break
            if line.lower() == "help":
                _render_keys(console)
                continue
            if line.lower() == "history":
                render_history(session.history.entries(), out)
                continue

            for key in split_keys(line):
                if not dispatch(calc, key):
                    console.print(f"[yellow]Unknown key: {key}[/yellow]")
            render_display(calc.snapshot(), out, screen_reader=screen_reader)


@app.command("history")
def cmd_history(
    ctx: typer.Context,
    clear: bool = typer.Option(False, "--clear", help="Delete all history"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Show only the newest N entries"),
) -> None:
    """Show past calculations, newest first."""
    with Session(_settings(ctx), restore_state=False) as session:
        if clear:
            session.history.clear()
            console.print("History cleared")
            return
        entries = session.history.entries()
        render_history(entries[:limit] if limit else entries, out)


@app.command("memory")
def cmd_memory(
    ctx: typer.Context,
    clear: bool = typer.Option(False, "--clear", help="Reset the memory register to 0"),
) -> None:
    """Show (or clear) the memory register."""
    with Session(_settings(ctx), restore_state=False) as session:
        if clear:
            session.memory.clear()
            console.print("Memory cleared")
            return
        out.print(format_number(session.memory.recall()))


if __name__ == "__main__":
    app()
