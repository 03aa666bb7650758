"""Descriptor-level input reader that hands out bounded runs of characters."""

from __future__ import annotations

import codecs
import logging
import os
import selectors

logger = logging.getLogger(__name__)


class InputReader:
    """Reads decoded characters from a file descriptor in short runs.

    Uses ``os.read`` on the raw descriptor so that reads stay in sync with
    what ``selectors`` reports as available; a buffered file object would
    pull bytes into its own buffer and hide them from the selector.
    Characters decoded past the requested run length are kept for the next
    call.
    """

    def __init__(self, fd: int, encoding: str = "utf-8") -> None:
        self._fd = fd
        self._decoder = codecs.getincrementaldecoder(encoding)("replace")
        self._pending = ""
        self._selector = selectors.DefaultSelector()
        self._selector.register(fd, selectors.EVENT_READ)
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._selector.unregister(self._fd)
        self._selector.close()

    def _poll(self, timeout: float = 0) -> bool:
        return bool(self._selector.select(timeout=timeout))

    def ready(self) -> bool:
        """Whether a read would return without blocking."""
        return bool(self._pending) or self._poll()

    def read_run(self, limit: int) -> str | None:
        """Return up to ``limit`` characters, or None at end of input.

        Blocks until at least one character is available, then takes
        whatever else can be read without blocking.
        """
        while not self._pending:
            data = os.read(self._fd, limit)
            if not data:
                tail = self._decoder.decode(b"", final=True)
                if not tail:
                    logger.debug("End of input on fd %d", self._fd)
                    return None
                self._pending = tail
                break
            self._pending += self._decoder.decode(data)

        while len(self._pending) < limit and self._poll():
            data = os.read(self._fd, limit - len(self._pending))
            if not data:
                break
            self._pending += self._decoder.decode(data)

        run, self._pending = self._pending[:limit], self._pending[limit:]
        return run
