"""Shared test fixtures."""

from __future__ import annotations

import io
import os
import termios
from collections.abc import Callable, Iterator

import pytest

from terminality.binding.attributes import TerminalAttributes
from terminality.config import TerminalConfig
from terminality.errors import OsCallError
from terminality.session.models import WindowSize
from terminality.session.terminal import Terminal


def make_attributes() -> TerminalAttributes:
    """A cooked-mode termios record like a fresh interactive shell has."""
    return TerminalAttributes(
        iflag=termios.ICRNL | termios.IXON | termios.IXANY | termios.ISTRIP | termios.BRKINT,
        oflag=termios.OPOST | termios.ONLCR,
        cflag=termios.CS8 | termios.CREAD,
        lflag=(
            termios.ECHO
            | termios.ECHOE
            | termios.ECHONL
            | termios.ICANON
            | termios.IEXTEN
            | termios.ISIG
        ),
        ispeed=termios.B38400,
        ospeed=termios.B38400,
        cc=tuple(bytes([i]) for i in range(32)),
    )


class FakeBinding:
    """In-memory TerminalBinding that records every call."""

    def __init__(
        self,
        tty: bool = True,
        attrs: TerminalAttributes | None = None,
        size: WindowSize = WindowSize(24, 80),
    ) -> None:
        self.fd = 0
        self.tty = tty
        self.attrs = attrs if attrs is not None else make_attributes()
        self.size = size
        self.installed: list[TerminalAttributes] = []
        self.resize_callback: Callable[[], None] | None = None
        self.resize_removed = False
        self.get_attrs_error: OsCallError | None = None
        self.set_attrs_error: OsCallError | None = None
        self.size_error: OsCallError | None = None

    def is_tty(self) -> bool:
        return self.tty

    def get_attrs(self) -> TerminalAttributes:
        if self.get_attrs_error is not None:
            raise self.get_attrs_error
        return self.attrs

    def set_attrs(self, attrs: TerminalAttributes) -> None:
        if self.set_attrs_error is not None:
            raise self.set_attrs_error
        self.installed.append(attrs)
        self.attrs = attrs

    def get_window_size(self) -> WindowSize:
        if self.size_error is not None:
            raise self.size_error
        return self.size

    def on_resize_signal(self, callback: Callable[[], None]) -> None:
        self.resize_callback = callback

    def remove_resize_signal(self) -> None:
        self.resize_callback = None
        self.resize_removed = True

    def fire_resize(self) -> None:
        assert self.resize_callback is not None, "no resize handler registered"
        self.resize_callback()


@pytest.fixture
def attributes() -> TerminalAttributes:
    return make_attributes()


@pytest.fixture
def binding() -> FakeBinding:
    return FakeBinding()


@pytest.fixture
def key_pipe() -> Iterator[tuple[io.RawIOBase, io.RawIOBase]]:
    """A real descriptor pair: the read end stands in for a terminal's input."""
    read_fd, write_fd = os.pipe()
    reader = os.fdopen(read_fd, "rb", buffering=0)
    writer = os.fdopen(write_fd, "wb", buffering=0)
    yield reader, writer
    for stream in (writer, reader):
        if not stream.closed:
            stream.close()


@pytest.fixture
def output() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture
def make_terminal(
    key_pipe: tuple[io.RawIOBase, io.RawIOBase],
    output: io.BytesIO,
    binding: FakeBinding,
) -> Iterator[Callable[..., Terminal]]:
    """Factory for terminals wired to the pipe, a BytesIO and the fake binding."""
    created: list[Terminal] = []

    def factory(**config_kwargs: object) -> Terminal:
        config = TerminalConfig(**config_kwargs)  # type: ignore[arg-type]
        terminal = Terminal(config, input=key_pipe[0], output=output, binding=binding)
        created.append(terminal)
        return terminal

    yield factory
    for terminal in created:
        terminal.end()
