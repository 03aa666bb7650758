"""CLI command: terminality bounce: a bouncing-ball animation."""

from __future__ import annotations

import time
from dataclasses import dataclass

import click

from terminality.cli.common import QUIT_HINT, interactive_session, load_config
from terminality.cli.keys import is_quit
from terminality.errors import OsCallError
from terminality.rendition import TextRendition
from terminality.session.models import WindowSize

BALL = "\u2b24"
_FALLBACK_SIZE = WindowSize(24, 80)


@dataclass
class Ball:
    """Ball position and velocity, bounced off the edges of the play area.

    The bottom row is the status bar, so the ball stays above it.
    """

    row: int = 5
    column: int = 5
    d_row: int = 1
    d_column: int = 2
    bounces: int = 0

    def step(self, size: WindowSize) -> None:
        self.row += self.d_row
        self.column += self.d_column
        if self.row >= size.rows - 2 or self.row <= 0:
            self.d_row = -self.d_row
            self.bounces += 1
        if self.column >= size.columns - 1 or self.column <= 0:
            self.d_column = -self.d_column
            self.bounces += 1
        # Keep the ball on screen after the window shrinks
        self.row = max(0, min(self.row, max(size.rows - 2, 0)))
        self.column = max(0, min(self.column, max(size.columns - 1, 0)))


def status_line(bounces: int, columns: int) -> str:
    text = f" Press {QUIT_HINT}. Bounces: {bounces}"
    return text.ljust(columns)[: max(columns, 0)]


@click.command()
@click.option(
    "--fps",
    type=click.IntRange(1, 200),
    default=40,
    show_default=True,
    help="Frames per second.",
)
def bounce(fps: int) -> None:
    """Animate a ball until Ctrl+q is pressed."""
    config = load_config()
    frame_delay = 1.0 / fps
    ball = Ball()

    with interactive_session(config) as terminal:
        terminal.set_cursor_visibility(False)

        try:
            size = terminal.get_terminal_size()
        except OsCallError:
            size = _FALLBACK_SIZE

        while True:
            if terminal.size_changed():
                try:
                    size = terminal.get_terminal_size()
                except OsCallError:
                    pass

            ball.step(size)
            terminal.clear()
            terminal.put_at(
                size.rows - 1,
                0,
                status_line(ball.bounces, size.columns),
                TextRendition.FG_RED,
                TextRendition.BG_WHITE,
            )
            terminal.put_at(ball.row, ball.column, BALL, TextRendition.FG_WHITE_INTENSE)
            terminal.flush()

            stroke = terminal.read_key()
            if stroke is not None and is_quit(stroke):
                break
            time.sleep(frame_delay)
