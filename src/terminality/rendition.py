"""ANSI text renditions (SGR sequences) and the named color catalog."""

from __future__ import annotations

from typing import ClassVar

_PREFIX = "\x1b["
_POSTFIX = "m"
_SEPARATOR = ";"

# Order matches the SGR color indices 0-7
COLOR_NAMES = ("BLACK", "RED", "GREEN", "YELLOW", "BLUE", "PURPLE", "CYAN", "WHITE")


class TextRendition:
    """Immutable SGR escape sequence built from one or more attribute codes.

    Blank codes are skipped, so ``TextRendition("1", "", "31")`` renders
    ``ESC [ 1 ; 31 m``. The named catalog (``TextRendition.FG_RED``,
    ``TextRendition.BG_BLUE_INTENSE`` ...) is attached below the class.
    """

    __slots__ = ("_sequence",)

    RESET_ALL: ClassVar[TextRendition]

    def __init__(self, *codes: str) -> None:
        parts = [str(code).strip() for code in codes]
        body = _SEPARATOR.join(part for part in parts if part)
        self._sequence = _PREFIX + body + _POSTFIX

    @property
    def sequence(self) -> str:
        return self._sequence

    @staticmethod
    def join(*renditions: TextRendition) -> str:
        """Concatenate the sequences of several renditions."""
        return "".join(r.sequence for r in renditions)

    def __str__(self) -> str:
        return self._sequence

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextRendition):
            return NotImplemented
        return self._sequence == other._sequence

    def __hash__(self) -> int:
        return hash(self._sequence)

    def __repr__(self) -> str:
        return f"TextRendition({self._sequence[len(_PREFIX):-len(_POSTFIX)]!r})"


TextRendition.RESET_ALL = TextRendition("0")


def _build_catalog() -> None:
    for index, name in enumerate(COLOR_NAMES):
        fg = str(30 + index)
        fg_intense = str(90 + index)
        bg = str(40 + index)
        bg_intense = str(100 + index)
        variants = {
            f"FG_{name}": ("0", fg),
            f"FG_{name}_BOLD": ("1", fg),
            f"FG_{name}_UNDERLINE": ("4", fg),
            f"FG_{name}_INTENSE": ("0", fg_intense),
            f"FG_{name}_BOLD_INTENSE": ("1", fg_intense),
            f"BG_{name}": (bg,),
            f"BG_{name}_INTENSE": ("0", bg_intense),
        }
        for attr, codes in variants.items():
            setattr(TextRendition, attr, TextRendition(*codes))


_build_catalog()
