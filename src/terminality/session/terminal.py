"""Terminal session: raw-mode lifecycle, buffered ANSI output and key input."""

from __future__ import annotations

import atexit
import logging
import sys
import threading
from types import TracebackType
from typing import BinaryIO

from terminality import capabilities
from terminality.binding.attributes import TerminalAttributes
from terminality.binding.base import TerminalBinding
from terminality.binding.posix import PosixBinding
from terminality.config import TerminalConfig
from terminality.errors import (
    NotATerminalError,
    NotInitializedError,
    SessionStateError,
    TerminalError,
)
from terminality.keys.decoder import MAX_SEQUENCE_LENGTH, decode
from terminality.keys.models import KeyStroke, KeyType
from terminality.rendition import TextRendition
from terminality.session.models import SessionState, WindowSize
from terminality.session.poller import KeyPoller
from terminality.session.reader import InputReader
from terminality.session.signals import TerminationGuard
from terminality.session.state import ResizeFlag

logger = logging.getLogger(__name__)

CSI = "\x1b["
OSC = "\x1b]"
BEL = "\x07"


def _fileno(stream: BinaryIO) -> int:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError) as exc:
        # In-memory streams have no descriptor and cannot be a terminal
        raise NotATerminalError() from exc


class Terminal:
    """A raw-mode session on a POSIX terminal.

    Usage::

        with Terminal() as term:
            term.clear()
            term.put_at(0, 0, "hello", TextRendition.FG_GREEN_BOLD)
            term.flush()
            key = term.read_key(blocking=True)

    Threading model:
    - Caller thread: every public method.
    - Poller thread (async mode only): non-blocking reads into a queue.
    - SIGWINCH handler: sets the resize flag, nothing else.
    - SIGTERM/SIGHUP handlers (main thread only, when still at their
      default action): raise SystemExit so ``end()`` runs from ``__exit__``
      or the exit hook.

    Output is appended to an in-memory buffer under ``_output_lock`` and
    only reaches the output stream on ``flush()``.
    """

    def __init__(
        self,
        config: TerminalConfig | None = None,
        *,
        input: BinaryIO | None = None,
        output: BinaryIO | None = None,
        binding: TerminalBinding | None = None,
    ) -> None:
        self._config = config if config is not None else TerminalConfig()
        self._input = input
        self._output = output
        self._binding = binding
        self._encoding = self._config.encoding

        self._state = SessionState.UNINITIALIZED
        self._original_attrs: TerminalAttributes | None = None
        self._resize_flag = ResizeFlag()
        self._reader: InputReader | None = None
        self._poller: KeyPoller | None = None
        self._exit_hook_registered = False
        self._termination_guard = TerminationGuard()

        self._lock = threading.RLock()
        self._input_lock = threading.Lock()
        self._output_lock = threading.RLock()
        self._buffer = bytearray()

    # --- Properties ---

    @property
    def config(self) -> TerminalConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    @property
    def original_attributes(self) -> TerminalAttributes | None:
        """The attributes captured by begin(), reinstalled by end()."""
        return self._original_attrs

    @property
    def binding(self) -> TerminalBinding:
        if self._binding is None:
            self._binding = PosixBinding(_fileno(self._input_stream))
        return self._binding

    @property
    def _input_stream(self) -> BinaryIO:
        return self._input if self._input is not None else sys.stdin.buffer

    @property
    def _output_stream(self) -> BinaryIO:
        return self._output if self._output is not None else sys.stdout.buffer

    # --- Lifecycle ---

    def begin(self) -> None:
        """Enter raw mode. Only one begin() per session may succeed."""
        with self._lock:
            if self._state is not SessionState.UNINITIALIZED:
                raise SessionStateError(
                    f"Cannot begin a session in state '{self._state.value}'"
                )

            binding = self.binding
            if not binding.is_tty():
                raise NotATerminalError(getattr(binding, "fd", None))

            self._register_exit_hook()
            original: TerminalAttributes | None = None
            try:
                if self._config.handle_termination_signals:
                    self._termination_guard.install()
                if self._config.handle_resize_signal:
                    binding.on_resize_signal(self._resize_flag.set)
                original = binding.get_attrs()
                binding.set_attrs(original.raw())
                reader = InputReader(_fileno(self._input_stream), self._encoding)
            except BaseException:
                self._abort_begin(original)
                raise

            self._original_attrs = original
            self._reader = reader
            self._state = SessionState.ACTIVE

            if self._config.async_io:
                self._poller = KeyPoller(
                    lambda: self._read_sync(blocking=False),
                    interval=self._config.poll_interval,
                )
                self._poller.start()

            logger.info(
                "Terminal session started (async=%s, resize=%s)",
                self._config.async_io,
                self._config.handle_resize_signal,
            )

    def end(self) -> None:
        """Restore the screen and the original terminal attributes.

        A no-op unless the session is active, so it is safe to call more
        than once (the exit hook calls it again at interpreter shutdown).
        """
        with self._lock:
            if self._state is not SessionState.ACTIVE:
                return

            if self._poller is not None:
                self._poller.stop()

            try:
                self.reset_text_rendition()
                self.clear()
                self.set_cursor_visibility(True)
                self._write_control("H")
                self.flush()
            except (OSError, ValueError):
                logger.warning("Could not reset the screen while ending session", exc_info=True)
            finally:
                # Runs even when the writes raised something unexpected
                if self._original_attrs is not None:
                    self.binding.set_attrs(self._original_attrs)
            self._state = SessionState.RESTORED

            if self._config.handle_resize_signal:
                try:
                    self.binding.remove_resize_signal()
                except TerminalError:
                    logger.warning("Could not restore the SIGWINCH handler", exc_info=True)
            if self._reader is not None:
                self._reader.close()
            self._termination_guard.restore()
            self._unregister_exit_hook()
            logger.info("Terminal session ended, attributes restored")

    def __enter__(self) -> Terminal:
        self.begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.end()

    def _abort_begin(self, original: TerminalAttributes | None) -> None:
        if original is not None:
            try:
                self.binding.set_attrs(original)
            except TerminalError:
                logger.warning("Could not reinstall attributes after failed begin", exc_info=True)
        if self._config.handle_resize_signal:
            try:
                self.binding.remove_resize_signal()
            except TerminalError:
                logger.debug("No SIGWINCH handler to restore", exc_info=True)
        self._termination_guard.restore()
        self._unregister_exit_hook()

    def _register_exit_hook(self) -> None:
        if not self._exit_hook_registered:
            atexit.register(self._restore_at_exit)
            self._exit_hook_registered = True

    def _unregister_exit_hook(self) -> None:
        if self._exit_hook_registered:
            atexit.unregister(self._restore_at_exit)
            self._exit_hook_registered = False

    def _restore_at_exit(self) -> None:
        """Best-effort restore at interpreter exit. Never raises."""
        try:
            self.end()
        except Exception:
            logger.warning("Could not restore terminal at exit", exc_info=True)

    def _require_active(self) -> None:
        if self._state is not SessionState.ACTIVE:
            raise NotInitializedError()

    # --- Input ---

    def read_key(self, blocking: bool = False) -> KeyStroke | None:
        """Return the next keystroke, or None if there is none.

        In async mode this pops the poller queue and never blocks,
        whatever ``blocking`` says. Unrecognised escape sequences also
        come back as None.
        """
        self._require_active()
        if self._poller is not None:
            return self._poller.get_nowait()
        return self._read_sync(blocking)

    def _read_sync(self, blocking: bool) -> KeyStroke | None:
        reader = self._reader
        if reader is None:
            return None
        with self._input_lock:
            if not blocking and not reader.ready():
                return None
            run = reader.read_run(MAX_SEQUENCE_LENGTH)
        if run is None:
            return KeyStroke(KeyType.EOF)
        stroke = decode(run)
        if stroke is None:
            logger.debug("Discarding unrecognised input %r", run)
        return stroke

    # --- Output ---

    def _write(self, data: bytes) -> None:
        with self._output_lock:
            self._buffer += data

    def _write_control(self, body: str) -> None:
        self._require_active()
        self._write((CSI + body).encode("ascii"))

    def put(self, text: str, *renditions: TextRendition) -> None:
        """Append text, optionally bracketed by renditions and a full reset."""
        self._require_active()
        with self._output_lock:
            if renditions:
                self.set_text_rendition(*renditions)
            self._write(text.encode(self._encoding, errors="replace"))
            if renditions:
                self.reset_text_rendition()

    def put_at(self, row: int, column: int, text: str, *renditions: TextRendition) -> None:
        """Move the cursor to (row, column), then put() the text."""
        with self._output_lock:
            self.set_cursor_position(row, column)
            self.put(text, *renditions)

    def set_text_rendition(self, *renditions: TextRendition) -> None:
        self._require_active()
        if renditions:
            self._write(TextRendition.join(*renditions).encode("ascii"))

    def reset_text_rendition(self) -> None:
        self.set_text_rendition(TextRendition.RESET_ALL)

    def set_cursor_position(self, row: int, column: int) -> None:
        """Move the cursor; row and column are 0-based."""
        self._write_control(f"{row + 1};{column + 1}H")

    def set_cursor_visibility(self, visible: bool) -> None:
        self._write_control("?25h" if visible else "?25l")

    def set_title(self, title: str) -> None:
        """Set the window title and flush immediately."""
        self._require_active()
        with self._output_lock:
            self._write((OSC + "2;" + title + BEL).encode(self._encoding, errors="replace"))
            self.flush()

    def set_terminal_size(self, rows: int, columns: int) -> None:
        """Ask the emulator to resize its window.

        Many emulators ignore this or only change the reported size; check
        get_terminal_size() afterwards.
        """
        self._write_control(f"8;{rows};{columns}t")

    def clear(self) -> None:
        self._write_control("2J")

    def flush(self) -> None:
        """Write the buffered output to the output stream."""
        self._require_active()
        with self._output_lock:
            if self._buffer:
                stream = self._output_stream
                stream.write(bytes(self._buffer))
                self._buffer.clear()
                stream.flush()

    # --- Queries ---

    def get_terminal_size(self) -> WindowSize:
        size = self.binding.get_window_size()
        logger.debug("Window size %dx%d", size.rows, size.columns)
        return size

    def get_colors(self) -> int:
        """Number of colors reported by ``tput colors``, or -1 if unknown."""
        return capabilities.get_colors(self._config.color_command)

    def has_color(self) -> bool:
        return self.get_colors() != capabilities.NO_COLOR

    def size_changed(self) -> bool:
        """True once per window resize since the last call."""
        return self._resize_flag.test_and_clear()
