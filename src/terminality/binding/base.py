"""TerminalBinding protocol: the OS calls a terminal session depends on."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from terminality.binding.attributes import TerminalAttributes
from terminality.session.models import WindowSize


@runtime_checkable
class TerminalBinding(Protocol):
    """Protocol for OS terminal bindings.

    Every fallible call raises ``OsCallError`` carrying the operation name
    and the OS return/error code.
    """

    def is_tty(self) -> bool:
        """Whether the bound descriptor is an interactive terminal."""
        ...

    def get_attrs(self) -> TerminalAttributes:
        """Read the current terminal attributes."""
        ...

    def set_attrs(self, attrs: TerminalAttributes) -> None:
        """Install terminal attributes immediately."""
        ...

    def get_window_size(self) -> WindowSize:
        """Query the terminal window size."""
        ...

    def on_resize_signal(self, callback: Callable[[], None]) -> None:
        """Invoke ``callback`` whenever the window-resize signal arrives."""
        ...

    def remove_resize_signal(self) -> None:
        """Restore whatever resize handling was in place before."""
        ...
