"""Session data models: lifecycle state and window size."""

from __future__ import annotations

import enum
from typing import NamedTuple


class SessionState(enum.Enum):
    """Lifecycle state of a terminal session."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    RESTORED = "restored"


class WindowSize(NamedTuple):
    """Terminal window dimensions in character cells."""

    rows: int
    columns: int
