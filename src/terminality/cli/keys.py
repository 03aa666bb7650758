"""CLI command: terminality keys: show the decoded form of every key press."""

from __future__ import annotations

import time

import click

from terminality.cli.common import QUIT_HINT, interactive_session, load_config
from terminality.keys.models import KeyStroke, KeyType
from terminality.rendition import TextRendition
from terminality.session.terminal import Terminal

# Async mode never blocks, so the loop sleeps between queue checks
_ASYNC_IDLE = 0.01


def is_quit(stroke: KeyStroke) -> bool:
    """Ctrl+q, or end of input, ends the interactive commands."""
    if stroke.type is KeyType.EOF:
        return True
    return stroke.is_character and stroke.character == "q" and stroke.ctrl


def describe(stroke: KeyStroke) -> str:
    fields = [
        f"type={stroke.type.name}",
        f"ctrl={stroke.ctrl}",
        f"alt={stroke.alt}",
        f"shift={stroke.shift}",
    ]
    if stroke.is_character:
        fields.insert(1, f"char={stroke.character!r}")
    return f"{stroke}  ({', '.join(fields)})"


def _show(terminal: Terminal, text: str, rendition: TextRendition | None = None) -> None:
    terminal.clear()
    terminal.put_at(1, 2, f"Press any key combination, {QUIT_HINT}.", TextRendition.FG_CYAN)
    if rendition is not None:
        terminal.put_at(3, 2, text, rendition)
    else:
        terminal.put_at(3, 2, text)
    terminal.flush()


@click.command()
@click.option(
    "--async",
    "async_io",
    is_flag=True,
    help="Read keys on a background poller thread.",
)
def keys(async_io: bool) -> None:
    """Print the decoded keystroke for every key press."""
    config = load_config(True if async_io else None)

    with interactive_session(config) as terminal:
        terminal.set_title("terminality keys")
        terminal.set_cursor_visibility(False)
        _show(terminal, "Waiting for input...")

        while True:
            stroke = terminal.read_key(blocking=not config.async_io)
            if stroke is None:
                if config.async_io:
                    time.sleep(_ASYNC_IDLE)
                continue
            if is_quit(stroke):
                break
            _show(terminal, describe(stroke), TextRendition.FG_WHITE_BOLD)
