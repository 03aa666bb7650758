"""POSIX terminal binding built on termios, fcntl and signal."""

from __future__ import annotations

import fcntl
import logging
import os
import signal
import struct
import sys
import termios
from collections.abc import Callable

from terminality.binding.attributes import TerminalAttributes
from terminality.errors import OsCallError
from terminality.session.models import WindowSize

logger = logging.getLogger(__name__)

# TIOCGWINSZ differs between the Linux and BSD ioctl encodings
TIOCGWINSZ_GENERIC = 0x5413
TIOCGWINSZ_BSD = 0x40087468

_BSD_PLATFORMS = ("darwin", "freebsd", "openbsd", "netbsd", "dragonfly")

# struct winsize: ws_row, ws_col, ws_xpixel, ws_ypixel
_WINSIZE_FORMAT = "HHHH"

_UNSET = object()


def window_size_request(platform: str | None = None) -> int:
    """Return the TIOCGWINSZ request code for ``platform`` (default: host)."""
    name = (platform or sys.platform).lower()
    if name.startswith(_BSD_PLATFORMS):
        return TIOCGWINSZ_BSD
    return TIOCGWINSZ_GENERIC


def _os_error(operation: str, exc: BaseException) -> OsCallError:
    code = getattr(exc, "errno", None)
    detail = getattr(exc, "strerror", None) or ""
    if code is None and exc.args:
        # termios.error carries (errno, message) in args
        if isinstance(exc.args[0], int):
            code = exc.args[0]
            detail = str(exc.args[1]) if len(exc.args) > 1 else ""
        else:
            detail = str(exc.args[0])
    return OsCallError(operation, code, detail)


class PosixBinding:
    """Binds a terminal session to one file descriptor of the current process."""

    def __init__(self, fd: int, platform: str | None = None) -> None:
        self._fd = fd
        self._winsize_request = window_size_request(platform)
        self._previous_sigwinch: object = _UNSET

    @property
    def fd(self) -> int:
        return self._fd

    def is_tty(self) -> bool:
        try:
            return os.isatty(self._fd)
        except OSError:
            return False

    def get_attrs(self) -> TerminalAttributes:
        try:
            attrs = termios.tcgetattr(self._fd)
        except (termios.error, OSError) as exc:
            raise _os_error("tcgetattr", exc) from exc
        return TerminalAttributes.from_list(attrs)

    def set_attrs(self, attrs: TerminalAttributes) -> None:
        try:
            termios.tcsetattr(self._fd, termios.TCSANOW, attrs.to_list())
        except (termios.error, OSError) as exc:
            raise _os_error("tcsetattr", exc) from exc

    def get_window_size(self) -> WindowSize:
        packed = struct.pack(_WINSIZE_FORMAT, 0, 0, 0, 0)
        try:
            result = fcntl.ioctl(self._fd, self._winsize_request, packed)
        except OSError as exc:
            raise _os_error("ioctl(TIOCGWINSZ)", exc) from exc
        rows, columns, _, _ = struct.unpack(_WINSIZE_FORMAT, result)
        return WindowSize(rows, columns)

    def on_resize_signal(self, callback: Callable[[], None]) -> None:
        def _handler(signum: int, frame: object) -> None:
            callback()

        try:
            previous = signal.signal(signal.SIGWINCH, _handler)
        except (ValueError, OSError) as exc:
            # signal.signal only works from the main thread
            raise _os_error("signal(SIGWINCH)", exc) from exc
        if self._previous_sigwinch is _UNSET:
            self._previous_sigwinch = previous
        logger.debug("SIGWINCH handler installed on fd %d", self._fd)

    def remove_resize_signal(self) -> None:
        if self._previous_sigwinch is _UNSET:
            return
        previous = self._previous_sigwinch
        if previous is None:
            # Installed from outside Python; fall back to the default action
            previous = signal.SIG_DFL
        try:
            signal.signal(signal.SIGWINCH, previous)
        except (ValueError, OSError) as exc:
            raise _os_error("signal(SIGWINCH)", exc) from exc
        self._previous_sigwinch = _UNSET
        logger.debug("SIGWINCH handler restored on fd %d", self._fd)
