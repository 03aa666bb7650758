"""Exception hierarchy shared by the binding, the session and the CLI."""

from __future__ import annotations


class TerminalError(Exception):
    """Base class for every error raised by terminality."""


class NotATerminalError(TerminalError):
    """The input stream is not an interactive terminal."""

    def __init__(self, fd: int | None = None) -> None:
        self.fd = fd
        target = f"file descriptor {fd}" if fd is not None else "input stream"
        super().__init__(f"Cannot initialize: {target} is not a TTY")


class NotInitializedError(TerminalError):
    """A read or write was attempted outside an active session."""

    def __init__(self, message: str = "The terminal is not initialized") -> None:
        super().__init__(message)


class SessionStateError(TerminalError):
    """begin() was called on a session that has already been started."""


class OsCallError(TerminalError):
    """An OS-level terminal call (tcgetattr, tcsetattr, ioctl, signal) failed."""

    def __init__(self, operation: str, code: int | None = None, detail: str = "") -> None:
        self.operation = operation
        self.code = code
        message = f"{operation} failed"
        if code is not None:
            message += f" with return code [{code}]"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class CapabilityQueryError(TerminalError):
    """The color-count helper could not be run or printed something unparsable."""
