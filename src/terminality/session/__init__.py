"""Terminal sessions: lifecycle, output buffering and key input."""

from terminality.session.models import SessionState, WindowSize
from terminality.session.terminal import Terminal

__all__ = ["SessionState", "Terminal", "WindowSize"]
