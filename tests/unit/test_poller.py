"""Tests for the background key poller."""

from __future__ import annotations

import time

import pytest

from terminality.keys.models import KeyStroke, KeyType
from terminality.session.poller import KeyPoller


def _feed(*strokes: KeyStroke | None):
    """A read function returning ``strokes`` in order, then None forever."""
    items = list(strokes)

    def read():
        return items.pop(0) if items else None

    return read


def _drain(poller: KeyPoller, expected: int, timeout: float = 2.0) -> list[KeyStroke]:
    got: list[KeyStroke] = []
    deadline = time.monotonic() + timeout
    while len(got) < expected and time.monotonic() < deadline:
        stroke = poller.get_nowait()
        if stroke is None:
            time.sleep(0.001)
        else:
            got.append(stroke)
    return got


def test_fifo_order():
    strokes = [KeyStroke.of("a"), KeyStroke(KeyType.ARROW_UP, ctrl=True), KeyStroke.of("b")]
    poller = KeyPoller(_feed(*strokes), interval=0.001)
    poller.start()
    try:
        assert _drain(poller, 3) == strokes
    finally:
        poller.stop()


def test_none_results_are_not_queued():
    poller = KeyPoller(_feed(None, KeyStroke.of("x"), None), interval=0.001)
    poller.start()
    try:
        assert _drain(poller, 1) == [KeyStroke.of("x")]
        time.sleep(0.02)
        assert poller.get_nowait() is None
    finally:
        poller.stop()


def test_exits_after_eof():
    poller = KeyPoller(_feed(KeyStroke.of("a"), KeyStroke(KeyType.EOF)), interval=0.001)
    poller.start()
    assert _drain(poller, 2) == [KeyStroke.of("a"), KeyStroke(KeyType.EOF)]
    deadline = time.monotonic() + 2.0
    while poller.is_running and time.monotonic() < deadline:
        time.sleep(0.001)
    assert not poller.is_running
    poller.stop()


def test_stop_joins_thread():
    poller = KeyPoller(_feed(), interval=0.001)
    poller.start()
    assert poller.is_running
    poller.stop()
    assert not poller.is_running


def test_start_twice_raises():
    poller = KeyPoller(_feed(), interval=0.001)
    poller.start()
    try:
        with pytest.raises(RuntimeError, match="already started"):
            poller.start()
    finally:
        poller.stop()


def test_read_error_stops_loop(caplog):
    def broken():
        raise OSError("read failed")

    poller = KeyPoller(broken, interval=0.001)
    with caplog.at_level("ERROR", logger="terminality.session.poller"):
        poller.start()
        deadline = time.monotonic() + 2.0
        while poller.is_running and time.monotonic() < deadline:
            time.sleep(0.001)
        poller.stop()
    assert not poller.is_running
    assert "input error" in caplog.text


def test_pending_count():
    poller = KeyPoller(_feed(KeyStroke.of("a"), KeyStroke(KeyType.EOF)), interval=0.001)
    poller.start()
    deadline = time.monotonic() + 2.0
    while poller.is_running and time.monotonic() < deadline:
        time.sleep(0.001)
    assert poller.pending() == 2
    poller.stop()
