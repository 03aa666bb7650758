"""Background key poller used by sessions running in async mode."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable

from terminality.config import DEFAULT_POLL_INTERVAL
from terminality.keys.models import KeyStroke, KeyType

logger = logging.getLogger(__name__)


class KeyPoller:
    """Polls a non-blocking key reader on a daemon thread.

    Decoded keystrokes are queued in the order they were read and drained
    with ``get_nowait()``. The loop checks a stop event on every iteration
    and exits after queueing an EOF keystroke, since nothing more can
    arrive after end of input.
    """

    def __init__(
        self,
        read_fn: Callable[[], KeyStroke | None],
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._read_fn = read_fn
        self._interval = interval
        self._queue: queue.Queue[KeyStroke] = queue.Queue()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Key poller already started")
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="terminality-key-poller", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = 1.0) -> None:
        """Signal the polling loop to stop and wait for it to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning("Key poller did not stop within %.1fs", timeout or 0)

    def get_nowait(self) -> KeyStroke | None:
        """Pop the oldest queued keystroke, or None if the queue is empty."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def pending(self) -> int:
        return self._queue.qsize()

    def _run(self) -> None:
        logger.debug("Key poller started (interval %.3fs)", self._interval)
        try:
            while not self._stop_event.is_set():
                stroke = self._read_fn()
                if stroke is not None:
                    self._queue.put(stroke)
                    if stroke.type is KeyType.EOF:
                        logger.info("End of input, key poller exiting")
                        break
                self._stop_event.wait(timeout=self._interval)
        except Exception:
            logger.exception("Key poller stopped after an input error")
        finally:
            logger.debug("Key poller stopped")
