"""CLI command: terminality info: report window size and color support."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.table import Table

from terminality.cli.common import load_config
from terminality.errors import TerminalError
from terminality.session.terminal import Terminal

console = Console()


@click.command()
def info() -> None:
    """Show what terminality can learn about the current terminal."""
    config = load_config()
    terminal = Terminal(config)

    try:
        is_tty = terminal.binding.is_tty()
    except TerminalError:
        is_tty = False

    size_text = "[dim]unavailable[/dim]"
    if is_tty:
        try:
            size = terminal.get_terminal_size()
            size_text = f"{size.rows} rows x {size.columns} columns"
        except TerminalError as exc:
            size_text = f"[yellow]unavailable[/yellow] ({exc})"

    colors = terminal.get_colors()
    colors_text = str(colors) if colors >= 0 else "[dim]unsupported[/dim]"

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()

    table.add_row("Interactive", "[green]yes[/green]" if is_tty else "[red]no[/red]")
    table.add_row("Window size", size_text)
    table.add_row("Colors", colors_text)
    table.add_row("Encoding", config.encoding)
    table.add_row("Platform", sys.platform)
    console.print("[bold]Terminal[/bold]")
    console.print(table)
