"""Immutable snapshot of a termios attribute record and its raw-mode derivation."""

from __future__ import annotations

import termios
from collections.abc import Sequence
from dataclasses import dataclass, replace

# Local flags cleared for raw mode: echo, canonical input, extended input
# processing and signal generation
RAW_LFLAG_CLEAR = (
    termios.ECHO | termios.ECHONL | termios.ICANON | termios.IEXTEN | termios.ISIG
)
# Input flags cleared for raw mode: flow control, CR->NL, 8th-bit stripping
RAW_IFLAG_CLEAR = termios.IXON | termios.IXANY | termios.ICRNL | termios.ISTRIP
# Output flags cleared for raw mode: post-processing
RAW_OFLAG_CLEAR = termios.OPOST


@dataclass(frozen=True)
class TerminalAttributes:
    """A termios record as returned by ``termios.tcgetattr``.

    Frozen so the snapshot captured by ``Terminal.begin()`` can be handed
    back to ``tcsetattr`` unchanged when the session ends.
    """

    iflag: int
    oflag: int
    cflag: int
    lflag: int
    ispeed: int
    ospeed: int
    cc: tuple[bytes | int, ...]

    @classmethod
    def from_list(cls, attrs: Sequence) -> TerminalAttributes:
        """Build a snapshot from the 7-item list ``tcgetattr`` returns."""
        if len(attrs) != 7:
            raise ValueError(f"Expected 7 termios fields, got {len(attrs)}")
        iflag, oflag, cflag, lflag, ispeed, ospeed, cc = attrs
        return cls(
            iflag=int(iflag),
            oflag=int(oflag),
            cflag=int(cflag),
            lflag=int(lflag),
            ispeed=int(ispeed),
            ospeed=int(ospeed),
            cc=tuple(cc),
        )

    def to_list(self) -> list:
        """Return a fresh list in the layout ``tcsetattr`` expects."""
        return [
            self.iflag,
            self.oflag,
            self.cflag,
            self.lflag,
            self.ispeed,
            self.ospeed,
            list(self.cc),
        ]

    def raw(self) -> TerminalAttributes:
        """Derive the raw-mode variant of this snapshot."""
        return replace(
            self,
            iflag=self.iflag & ~RAW_IFLAG_CLEAR,
            oflag=self.oflag & ~RAW_OFLAG_CLEAR,
            lflag=self.lflag & ~RAW_LFLAG_CLEAR,
        )

    @property
    def is_raw(self) -> bool:
        return (
            not self.lflag & RAW_LFLAG_CLEAR
            and not self.iflag & RAW_IFLAG_CLEAR
            and not self.oflag & RAW_OFLAG_CLEAR
        )
