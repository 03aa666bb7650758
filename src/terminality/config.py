"""Session configuration: defaults and environment overrides."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass

DEFAULT_ENCODING = "utf-8"
DEFAULT_POLL_INTERVAL = 0.005  # seconds, ~200 polls per second
DEFAULT_COLOR_COMMAND = ("tput", "colors")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _env_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (got {value!r})")


@dataclass
class TerminalConfig:
    """Options a Terminal session is constructed with."""

    handle_resize_signal: bool = True
    handle_termination_signals: bool = True
    async_io: bool = False
    encoding: str = DEFAULT_ENCODING
    poll_interval: float = DEFAULT_POLL_INTERVAL
    color_command: tuple[str, ...] = DEFAULT_COLOR_COMMAND

    def __post_init__(self) -> None:
        # Fail early on an unknown codec rather than on the first put()
        codecs.lookup(self.encoding)
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")

    @classmethod
    def load(cls) -> TerminalConfig:
        """Load config from environment variables over the defaults."""
        config = cls()

        env_encoding = os.environ.get("TERMINALITY_ENCODING")
        if env_encoding:
            try:
                codecs.lookup(env_encoding)
            except LookupError:
                raise ValueError(
                    f"TERMINALITY_ENCODING names an unknown codec ({env_encoding!r})"
                ) from None
            config.encoding = env_encoding

        env_interval = os.environ.get("TERMINALITY_POLL_INTERVAL")
        if env_interval:
            try:
                interval = float(env_interval)
            except ValueError:
                raise ValueError(
                    f"TERMINALITY_POLL_INTERVAL must be a number (got {env_interval!r})"
                ) from None
            if interval <= 0:
                raise ValueError("TERMINALITY_POLL_INTERVAL must be positive")
            config.poll_interval = interval

        env_async = os.environ.get("TERMINALITY_ASYNC_IO")
        if env_async:
            config.async_io = _env_bool("TERMINALITY_ASYNC_IO", env_async)

        env_resize = os.environ.get("TERMINALITY_HANDLE_RESIZE")
        if env_resize:
            config.handle_resize_signal = _env_bool("TERMINALITY_HANDLE_RESIZE", env_resize)

        return config
