"""Terminal capability queries that shell out to terminfo helpers."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from terminality.config import DEFAULT_COLOR_COMMAND
from terminality.errors import CapabilityQueryError

logger = logging.getLogger(__name__)

NO_COLOR = -1


def query_color_count(command: Sequence[str] = DEFAULT_COLOR_COMMAND) -> int:
    """Run ``tput colors`` (or ``command``) and parse its one-line output.

    Raises CapabilityQueryError when the helper cannot be run or does not
    print a decimal number.
    """
    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, PermissionError) as exc:
        raise CapabilityQueryError(f"{' '.join(command)} could not be run: {exc}") from exc

    lines = result.stdout.splitlines()
    first = lines[0].strip() if lines else ""
    try:
        return int(first)
    except ValueError:
        raise CapabilityQueryError(
            f"{' '.join(command)} printed {first!r}, expected a number"
        ) from None


def get_colors(command: Sequence[str] = DEFAULT_COLOR_COMMAND) -> int:
    """Number of colors the terminal supports, or -1 if unknown."""
    try:
        return query_color_count(command)
    except CapabilityQueryError as exc:
        logger.debug("Color query failed, assuming no color support: %s", exc)
        return NO_COLOR
