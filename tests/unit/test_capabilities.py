"""Tests for the tput color query."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from terminality.capabilities import NO_COLOR, get_colors, query_color_count
from terminality.errors import CapabilityQueryError


def _completed(stdout: str, returncode: int = 0) -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    result.returncode = returncode
    return result


@patch("terminality.capabilities.subprocess.run")
def test_parses_color_count(mock_run):
    mock_run.return_value = _completed("256\n")
    assert query_color_count() == 256
    args, kwargs = mock_run.call_args
    assert args[0] == ["tput", "colors"]
    assert kwargs["capture_output"] is True
    assert kwargs["text"] is True


@patch("terminality.capabilities.subprocess.run")
def test_custom_command(mock_run):
    mock_run.return_value = _completed("8")
    assert get_colors(("my-tput", "colors")) == 8
    assert mock_run.call_args.args[0] == ["my-tput", "colors"]


@patch("terminality.capabilities.subprocess.run")
def test_tput_reports_no_color(mock_run):
    mock_run.return_value = _completed("-1\n")
    assert get_colors() == -1


@patch("terminality.capabilities.subprocess.run")
def test_unparsable_output(mock_run):
    mock_run.return_value = _completed("", returncode=1)
    with pytest.raises(CapabilityQueryError, match="expected a number"):
        query_color_count()
    assert get_colors() == NO_COLOR


@patch("terminality.capabilities.subprocess.run", side_effect=FileNotFoundError("tput"))
def test_missing_tput(mock_run):
    with pytest.raises(CapabilityQueryError, match="could not be run"):
        query_color_count()
    assert get_colors() == NO_COLOR


@patch(
    "terminality.capabilities.subprocess.run",
    side_effect=subprocess.TimeoutExpired(cmd="tput", timeout=5),
)
def test_tput_timeout(mock_run):
    assert get_colors() == NO_COLOR
