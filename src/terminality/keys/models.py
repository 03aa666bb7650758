"""Key event data models: immutable values produced by the key decoder."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class KeyType(enum.Enum):
    """What kind of key a KeyStroke represents."""

    CHARACTER = "character"
    LF = "lf"
    CR = "cr"
    TAB = "tab"
    BACKSPACE = "backspace"
    ESCAPE = "escape"
    DELETE = "delete"
    EOF = "eof"
    HOME = "home"
    END = "end"
    INSERT = "insert"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"
    REVERSE_TAB = "reverse_tab"


@dataclass(frozen=True)
class KeyStroke:
    """A single decoded key press.

    ``character`` carries the literal character for ``KeyType.CHARACTER``
    strokes and is empty for every named key.
    """

    type: KeyType = KeyType.CHARACTER
    character: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    def __post_init__(self) -> None:
        if self.type is KeyType.CHARACTER:
            if len(self.character) != 1:
                raise ValueError("CHARACTER keystrokes carry exactly one character")
        elif self.character:
            raise ValueError(f"{self.type.name} keystrokes carry no character")

    @classmethod
    def of(cls, character: str, ctrl: bool = False, alt: bool = False) -> KeyStroke:
        """Shorthand for a literal-character keystroke."""
        return cls(KeyType.CHARACTER, character, ctrl=ctrl, alt=alt)

    @property
    def is_character(self) -> bool:
        return self.type is KeyType.CHARACTER

    def __str__(self) -> str:
        parts = []
        if self.ctrl:
            parts.append("Ctrl")
        if self.alt:
            parts.append("Alt")
        if self.shift:
            parts.append("Shift")
        if self.is_character:
            parts.append("Space" if self.character == " " else self.character)
        else:
            parts.append(self.type.name)
        return "+".join(parts)
