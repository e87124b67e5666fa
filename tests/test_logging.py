"""
Tests for gamever.logging module.

Tests the logger implementations including:
- Verbosity gating of verbose and debug output
- Warnings on stderr regardless of verbosity
- The silent default and global logger replacement
"""

from __future__ import annotations

import pytest

from gamever.logging import (
    DefaultLogger,
    SilentLogger,
    get_global_logger,
    get_logger,
    set_global_logger,
)

# All tests in this file are unit tests (fast, no I/O)
pytestmark = pytest.mark.unit


def _emit_all(logger) -> None:
    logger.warning("LOOKUP", "bad field")
    logger.verbose("LOOKUP", "trying metadata")
    logger.debug("CLASS", "312 constants")


class TestDefaultLogger:
    """Tests for DefaultLogger."""

    def test_quiet(self, capsys):
        """Test that only warnings are printed without verbosity."""
        _emit_all(DefaultLogger())

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "[LOOKUP] WARNING: bad field\n"

    def test_verbose(self, capsys):
        """Test that verbose mode prints verbose but not debug messages."""
        _emit_all(get_logger(verbose=True))

        out = capsys.readouterr().out
        assert out == "[LOOKUP] trying metadata\n"

    def test_debug_implies_verbose(self, capsys):
        """Test that debug mode prints both verbose and debug messages."""
        _emit_all(get_logger(debug=True))

        out = capsys.readouterr().out
        assert out == "[LOOKUP] trying metadata\n[CLASS] 312 constants\n"


class TestGlobalLogger:
    """Tests for the global logger accessors."""

    def test_default_is_silent(self, capsys):
        """Test that the default global logger prints nothing."""
        logger = get_global_logger()
        _emit_all(logger)

        assert isinstance(logger, SilentLogger)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_set_global_logger(self):
        """Test that the global logger can be replaced."""
        logger = get_logger(verbose=True)

        set_global_logger(logger)

        assert get_global_logger() is logger
