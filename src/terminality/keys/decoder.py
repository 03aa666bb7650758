"""Key decoder: turns a run of raw input characters into a KeyStroke.

A run is whatever the session managed to read in one go (at most
``MAX_SEQUENCE_LENGTH`` characters). Single characters are literal keys or
C0 control codes, ``ESC x`` pairs are Alt combinations, and anything longer
goes through a small DFA that understands CSI (``ESC [``) and SS3
(``ESC O``) sequences with an optional ``;``-separated modifier field.

Nothing here raises on bad input: an unrecognised run decodes to ``None``.
"""

from __future__ import annotations

import enum

from terminality.keys.models import KeyStroke, KeyType

ESC = "\x1b"
DEL = "\x7f"

# Lookahead used by the session when pulling a run off the input stream
MAX_SEQUENCE_LENGTH = 7

CSI_INTRO = "["
SS3_INTRO = "O"

_NAMED_CONTROLS = {
    "\n": KeyType.LF,
    "\r": KeyType.CR,
    "\t": KeyType.TAB,
    "\x08": KeyType.BACKSPACE,
    ESC: KeyType.ESCAPE,
}

# Control codes that do not map onto a letter
_CTRL_SYMBOLS = {
    "\x00": " ",
    "\x1c": "\\",
    "\x1d": "]",
    "\x1e": "^",
    "\x1f": "_",
}

# ESC [ <id> ~
_TILDE_KEYS = {
    1: KeyType.HOME,
    2: KeyType.INSERT,
    3: KeyType.DELETE,
    4: KeyType.END,
    5: KeyType.PAGE_UP,
    6: KeyType.PAGE_DOWN,
    11: KeyType.F1,
    12: KeyType.F2,
    13: KeyType.F3,
    14: KeyType.F4,
    15: KeyType.F5,
    16: KeyType.F5,
    17: KeyType.F6,
    18: KeyType.F7,
    19: KeyType.F8,
    20: KeyType.F9,
    21: KeyType.F10,
    23: KeyType.F11,
    24: KeyType.F12,
}

# ESC [ <final> and ESC O <final>
_FINAL_KEYS = {
    "A": KeyType.ARROW_UP,
    "B": KeyType.ARROW_DOWN,
    "C": KeyType.ARROW_RIGHT,
    "D": KeyType.ARROW_LEFT,
    "H": KeyType.HOME,
    "F": KeyType.END,
    "P": KeyType.F1,
    "Q": KeyType.F2,
    "R": KeyType.F3,
    "S": KeyType.F4,
    "Z": KeyType.REVERSE_TAB,
}

_ARROW_FINALS = frozenset("ABCD")

# xterm modifier parameter, minus one
_CTRL_BIT = 4
_ALT_BIT = 2
_SHIFT_BIT = 1


class _State(enum.Enum):
    START = "start"
    INTRO_CHAR = "intro_char"
    KEY_ID = "key_id"
    MOD_STATE = "mod_state"
    MATCH = "match"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def control_key(ch: str) -> KeyStroke | None:
    """Decode a C0 control character, or return None for anything else."""
    code = ord(ch)
    if code >= 32:
        return None
    named = _NAMED_CONTROLS.get(ch)
    if named is not None:
        return KeyStroke(named)
    key = _CTRL_SYMBOLS.get(ch, chr(96 + code))
    return KeyStroke.of(key, ctrl=True)


def alt_key(first: str, second: str) -> KeyStroke | None:
    """Decode an ``ESC x`` pair as Alt+x (or Alt+Ctrl+x)."""
    if first != ESC:
        return None
    stroke = control_key(second)
    if stroke is not None:
        return KeyStroke(stroke.type, stroke.character, ctrl=stroke.ctrl, alt=True)
    if second == DEL:
        return KeyStroke(KeyType.DELETE, alt=True)
    return KeyStroke.of(second, alt=True)


def match_sequence(chars: str) -> KeyStroke | None:
    """Run a CSI/SS3 escape sequence through the matcher DFA."""
    state = _State.START
    key_id = 0
    mod_state: int | None = None
    intro = ""
    final = ""
    double_esc = False

    for ch in chars:
        if state is _State.START:
            if ch != ESC:
                return None
            state = _State.INTRO_CHAR
        elif state is _State.INTRO_CHAR:
            if ch == ESC and not double_esc:
                double_esc = True
                continue
            if ch not in (CSI_INTRO, SS3_INTRO):
                return None
            intro = ch
            state = _State.KEY_ID
        elif state is _State.KEY_ID:
            if ch == ";":
                mod_state = 0
                state = _State.MOD_STATE
            elif _is_digit(ch):
                key_id = key_id * 10 + int(ch)
            else:
                final = ch
                state = _State.MATCH
        elif state is _State.MOD_STATE:
            if _is_digit(ch):
                mod_state = (mod_state or 0) * 10 + int(ch)
            else:
                final = ch
                state = _State.MATCH
        else:
            # Trailing input after the final byte
            return None

    if state is not _State.MATCH:
        return None

    mods = mod_state - 1 if mod_state is not None else -1
    legacy_ctrl = False
    if final == "~":
        key_type = _TILDE_KEYS.get(key_id)
    else:
        key_type = _FINAL_KEYS.get(final)
        if intro == SS3_INTRO:
            # PuTTY sends ESC O A..D for Ctrl+arrows
            if final in _ARROW_FINALS:
                legacy_ctrl = True
            # ESC O ... R collides with cursor position reports
            if final == "R":
                mods = -1

    if key_type is None:
        return None

    ctrl = alt = shift = False
    if mods >= 0:
        ctrl = bool(mods & _CTRL_BIT)
        alt = bool(mods & _ALT_BIT)
        shift = bool(mods & _SHIFT_BIT)
    if double_esc:
        alt = True
    if legacy_ctrl:
        ctrl = True
    return KeyStroke(key_type, ctrl=ctrl, alt=alt, shift=shift)


def decode(chars: str) -> KeyStroke | None:
    """Decode one run of input characters into at most one KeyStroke."""
    if not chars:
        return None
    if len(chars) == 1:
        ch = chars[0]
        stroke = control_key(ch)
        if stroke is not None:
            return stroke
        if ch == DEL:
            return KeyStroke(KeyType.DELETE)
        return KeyStroke.of(ch)
    if len(chars) == 2:
        return alt_key(chars[0], chars[1])
    return match_sequence(chars)
