"""Terminality: raw-mode terminal control, key decoding and ANSI output."""

from terminality.errors import (
    CapabilityQueryError,
    NotATerminalError,
    NotInitializedError,
    OsCallError,
    SessionStateError,
    TerminalError,
)
from terminality.keys.decoder import decode
from terminality.keys.models import KeyStroke, KeyType
from terminality.rendition import TextRendition
from terminality.session.models import SessionState, WindowSize
from terminality.session.terminal import Terminal

__version__ = "0.1.0"

__all__ = [
    "CapabilityQueryError",
    "KeyStroke",
    "KeyType",
    "NotATerminalError",
    "NotInitializedError",
    "OsCallError",
    "SessionState",
    "SessionStateError",
    "Terminal",
    "TerminalError",
    "TextRendition",
    "WindowSize",
    "decode",
]
