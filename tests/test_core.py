"""
Tests for gamever.core module.

Tests the artifact check orchestration including:
- Single artifacts and recursive directory walks
- Report lines and invalid result collection
- Unreadable artifacts that do not abort the run
"""

from __future__ import annotations

import pytest

from gamever.core import check_artifact, check_artifacts, find_artifacts
from gamever.results import CheckReport

# All tests in this file are unit tests (fast, local files only)
pytestmark = pytest.mark.unit


class TestFindArtifacts:
    """Tests for find_artifacts."""

    def test_single_file(self, create_jar):
        """Test that a file is its own only artifact."""
        jar = create_jar("1.20.4.jar", {})

        assert find_artifacts(jar) == [(jar, "1.20.4.jar")]

    def test_directory_recursive_sorted(self, tmp_test_dir, create_jar):
        """Test that jars are found recursively and sorted by relative name."""
        create_jar("b/2.jar", {})
        create_jar("a/1.jar", {})
        create_jar("a/nested/3.jar", {})
        (tmp_test_dir / "notes.txt").write_text("not a jar")

        names = [name for _, name in find_artifacts(tmp_test_dir)]

        assert names == ["a/1.jar", "a/nested/3.jar", "b/2.jar"]


class TestCheckArtifact:
    """Tests for check_artifact."""

    def test_report_line(self, create_jar):
        """Test the report line format."""
        jar = create_jar("x.jar", {"version.json": {"id": "24w03a", "name": "24w03a"}})

        result = check_artifact(jar, "x.jar")

        assert result.valid is True
        assert result.error is None
        assert result.line == (
            "x.jar: 1.20.5-alpha.24.3.a (raw=24w03a id=24w03a name=24w03a)"
        )

    def test_invalid_normalized_version(self, create_jar):
        """Test that an unrecognized label is reported as invalid."""
        jar = create_jar("x.jar", {"version.json": {"id": "My Custom Build"}})

        result = check_artifact(jar, "x.jar")

        assert result.valid is False
        assert result.version.normalized == "My Custom Build"

    def test_unreadable_artifact(self, tmp_test_dir):
        """Test that an unreadable artifact is reported instead of raised."""
        bogus = tmp_test_dir / "broken.jar"
        bogus.write_bytes(b"garbage")

        result = check_artifact(bogus, "broken.jar")

        assert result.valid is False
        assert result.version is None
        assert "cannot open artifact" in result.error
        assert result.line.startswith("broken.jar: unreadable (")


class TestCheckArtifacts:
    """Tests for check_artifacts."""

    def test_directory_report(self, tmp_test_dir, create_jar):
        """Test a mixed directory: valid, invalid and unreadable artifacts."""
        create_jar("1.20.4/1.20.4.jar", {"version.json": {"id": "1.20.4"}})
        create_jar("weird/weird.jar", {"version.json": {"id": "nightly build"}})
        (tmp_test_dir / "zz-broken.jar").write_bytes(b"garbage")

        report = check_artifacts(tmp_test_dir)

        assert isinstance(report, CheckReport)
        assert [r.name for r in report.results] == [
            "1.20.4/1.20.4.jar",
            "weird/weird.jar",
            "zz-broken.jar",
        ]
        assert report.passed == 1
        assert report.failed == 2
        assert [r.name for r in report.invalid] == ["weird/weird.jar", "zz-broken.jar"]

    def test_single_artifact(self, create_jar):
        """Test checking a single file."""
        jar = create_jar("b1.7.3.jar", {})

        report = check_artifacts(jar)

        assert len(report.results) == 1
        assert report.results[0].line == (
            "b1.7.3.jar: 1.0.0-beta.7.3 (raw=b1.7.3 id=None name=None)"
        )
        assert report.failed == 0

    def test_empty_directory(self, tmp_test_dir):
        """Test that an empty directory yields an empty, passing report."""
        report = check_artifacts(tmp_test_dir)

        assert report.results == ()
        assert report.invalid == ()

    def test_missing_path(self, tmp_test_dir):
        """Test that a missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            check_artifacts(tmp_test_dir / "missing")
