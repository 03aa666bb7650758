"""Helpers shared by the interactive CLI commands."""

from __future__ import annotations

import contextlib
from collections.abc import Iterator

import click

from terminality.config import TerminalConfig
from terminality.errors import NotATerminalError, OsCallError
from terminality.session.terminal import Terminal

QUIT_HINT = "[Ctrl+q] to quit"


def load_config(async_io: bool | None = None) -> TerminalConfig:
    try:
        config = TerminalConfig.load()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if async_io is not None:
        config.async_io = async_io
    return config


@contextlib.contextmanager
def interactive_session(config: TerminalConfig) -> Iterator[Terminal]:
    """Run a raw-mode session, restoring the terminal however the block exits.

    The session itself turns SIGTERM and SIGHUP into SystemExit, so the
    ``finally`` below also runs when the process is killed.
    """
    terminal = Terminal(config)
    try:
        terminal.begin()
    except NotATerminalError as exc:
        raise click.ClickException(
            f"{exc}. Run this command from an interactive terminal."
        ) from exc
    except OsCallError as exc:
        raise click.ClickException(f"Could not enter raw mode: {exc}") from exc
    try:
        yield terminal
    finally:
        terminal.end()
