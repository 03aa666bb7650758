"""Turns SIGTERM/SIGHUP into SystemExit while a raw-mode session is active."""

from __future__ import annotations

import logging
import signal
import threading

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def _raise_exit(signum: int, frame: object) -> None:
    logger.info("Received signal %d, restoring terminal", signum)
    raise SystemExit(128 + signum)


class TerminationGuard:
    """Makes termination signals unwind the interpreter instead of killing it.

    With the default action a SIGTERM ends the process without running
    ``finally`` blocks or ``atexit`` hooks, so the terminal would stay in raw
    mode. Raising SystemExit lets both run. Only signals still at their
    default action are taken over; a handler the application installed
    itself is left alone.
    """

    def __init__(self, signals: tuple[signal.Signals, ...] = TERMINATION_SIGNALS) -> None:
        self._signals = signals
        self._previous: dict[signal.Signals, object] = {}

    @property
    def installed(self) -> bool:
        return bool(self._previous)

    def install(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            # signal.signal only works from the main thread
            logger.debug("Not on the main thread, termination signals left as is")
            return
        for sig in self._signals:
            if sig in self._previous or signal.getsignal(sig) is not signal.SIG_DFL:
                continue
            self._previous[sig] = signal.signal(sig, _raise_exit)
        logger.debug("Termination handlers installed for %s", [s.name for s in self._previous])

    def restore(self) -> None:
        for sig, handler in self._previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        self._previous.clear()
