"""
Tests for gamever.cli module.

Tests command handlers and dispatch including:
- check output, invalid listing and exit codes
- lookup result display
- parse and compare output
- argparse dispatch through main()
"""

from __future__ import annotations

import argparse
import sys

import pytest

from gamever import cli

# All tests in this file are unit tests (fast, local files only)
pytestmark = pytest.mark.unit


def _check_args(path, config=None) -> argparse.Namespace:
    return argparse.Namespace(path=str(path), config=config, verbose=False, debug=False)


class TestCmdCheck:
    """Tests for 'gamever check'."""

    def test_all_passed(self, tmp_test_dir, create_jar, capsys):
        """Test output when every artifact normalizes."""
        create_jar("1.20.4.jar", {"version.json": {"id": "1.20.4"}})
        create_jar("24w03a.jar", {})

        exit_code = cli.cmd_check(_check_args(tmp_test_dir))

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "1.20.4.jar: 1.20.4 (raw=1.20.4 id=1.20.4 name=None)" in out
        assert "24w03a.jar: 1.20.5-alpha.24.3.a (raw=24w03a id=None name=None)" in out
        assert "** invalid!" not in out
        assert out.rstrip().endswith("All passed!")

    def test_invalid_listed(self, tmp_test_dir, create_jar, capsys):
        """Test that invalid results are flagged and listed at the end."""
        create_jar("ok.jar", {"version.json": {"id": "1.20.4"}})
        create_jar("odd.jar", {"version.json": {"id": "nightly build"}})

        exit_code = cli.cmd_check(_check_args(tmp_test_dir))

        lines = capsys.readouterr().out.splitlines()
        assert exit_code == 0
        odd_line = "odd.jar: nightly build (raw=nightly build id=nightly build name=None)"
        assert lines[0] == odd_line
        assert lines[1] == "** invalid!"
        assert "Invalid:" in lines
        assert lines[-2] == odd_line
        assert lines[-1] == "1 invalid results"

    def test_missing_path(self, tmp_test_dir, capsys):
        """Test that a missing path exits with 1."""
        exit_code = cli.cmd_check(_check_args(tmp_test_dir / "missing"))

        assert exit_code == 1
        assert "Error: Path not found" in capsys.readouterr().out

    def test_config_error(self, tmp_test_dir, create_jar, capsys):
        """Test that a broken configuration file exits with 1."""
        create_jar("1.20.4.jar", {})
        bad = tmp_test_dir / "bad.yaml"
        bad.write_text("lookup: [unclosed\n")

        exit_code = cli.cmd_check(_check_args(tmp_test_dir, config=str(bad)))

        assert exit_code == 1
        assert "Error:" in capsys.readouterr().out

    def test_config_found_upward(self, tmp_test_dir, create_jar, create_yaml_file, capsys):
        """Test that gamever.yaml next to the artifacts is applied."""
        create_yaml_file("gamever.yaml", {"special_versions": {"odd": "1.20-alpha.23.1.a"}})
        create_jar("odd.jar", {})

        exit_code = cli.cmd_check(_check_args(tmp_test_dir))

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "odd.jar: 1.20-alpha.23.1.a (raw=odd id=None name=None)" in out
        assert "All passed!" in out


class TestCmdLookup:
    """Tests for 'gamever lookup'."""

    def test_lookup_results(self, create_jar, class_file, capsys):
        """Test the lookup result block."""
        jar = create_jar(
            "x.jar",
            {
                "version.json": {"id": "1.14_pre2", "name": "1.14 Pre-Release 2"},
                "net/minecraft/client/Minecraft.class": class_file(major=52),
            },
        )
        args = argparse.Namespace(
            artifact=str(jar), config=None, version_name=None, verbose=False, debug=False
        )

        exit_code = cli.cmd_lookup(args)

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "LOOKUP RESULTS" in out
        assert "Version Source:  metadata" in out
        assert "Class Version:   52" in out

    def test_unreadable_artifact(self, tmp_test_dir, capsys):
        """Test that an unreadable artifact exits with 1."""
        bogus = tmp_test_dir / "broken.jar"
        bogus.write_bytes(b"garbage")
        args = argparse.Namespace(
            artifact=str(bogus), config=None, version_name=None, verbose=False, debug=False
        )

        assert cli.cmd_lookup(args) == 1
        assert "cannot open artifact" in capsys.readouterr().out


class TestCmdParse:
    """Tests for 'gamever parse'."""

    def test_semantic(self, capsys):
        """Test output for a structured version."""
        exit_code = cli.cmd_parse(argparse.Namespace(version="1.0.0-rc.1+b7", strict=False))

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Kind:        semantic" in out
        assert "Pre-release: rc.1" in out
        assert "Build:       b7" in out

    def test_string_fallback(self, capsys):
        """Test output for an opaque version."""
        exit_code = cli.cmd_parse(argparse.Namespace(version="Beta 1.7.3", strict=False))

        assert exit_code == 0
        assert "Kind:        string" in capsys.readouterr().out

    def test_strict_rejects(self, capsys):
        """Test that --strict turns grammar violations into exit code 1."""
        exit_code = cli.cmd_parse(argparse.Namespace(version="1.a.0", strict=True))

        assert exit_code == 1
        assert "could not parse version component" in capsys.readouterr().out


class TestCmdCompare:
    """Tests for 'gamever compare'."""

    @pytest.mark.parametrize(
        "first, second, expected",
        [
            ("1.0.0-beta.2", "1.0.0-rc.1", "1.0.0-beta.2 < 1.0.0-rc.1"),
            ("1.2", "1.2.0", "1.2 == 1.2.0"),
            ("1.20.5", "1.20.5-alpha.24.3.a", "1.20.5 > 1.20.5-alpha.24.3.a"),
        ],
    )
    def test_compare(self, first, second, expected, capsys):
        """Test comparison output."""
        exit_code = cli.cmd_compare(argparse.Namespace(first=first, second=second))

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == expected

    def test_empty_version(self, capsys):
        """Test that an empty version exits with 1."""
        assert cli.cmd_compare(argparse.Namespace(first="", second="1.0")) == 1


class TestMain:
    """Tests for argument parsing and dispatch."""

    def test_dispatch_exit_code(self, monkeypatch, capsys):
        """Test that main() exits with the handler's exit code."""
        monkeypatch.setattr(sys, "argv", ["gamever", "compare", "2", "10"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "2 < 10"

    def test_command_required(self, monkeypatch):
        """Test that a missing subcommand is a usage error."""
        monkeypatch.setattr(sys, "argv", ["gamever"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 2
