"""
Pytest configuration and shared fixtures for gamever tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
import struct
from typing import Any
import zipfile

import pytest
import yaml

from gamever.logging import get_global_logger, set_global_logger


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Restore the silent global logger after every test (the CLI replaces it)."""
    previous = get_global_logger()
    yield
    set_global_logger(previous)


def build_class_file(strings: tuple[str, ...] = (), major: int = 52) -> bytes:
    """Build a minimal class file whose constant pool holds ``strings``.

    Every string gets a CONSTANT_Utf8 entry followed by a CONSTANT_String
    entry pointing at it. A CONSTANT_Long is added first to exercise the
    double-slot entries.
    """
    pool = struct.pack(">BQ", 5, 1234567890)
    count = 3  # index 0 unused, Long takes slots 1 and 2
    for value in strings:
        encoded = value.encode("utf-8")
        pool += struct.pack(">BH", 1, len(encoded)) + encoded
        utf8_index = count
        count += 1
        pool += struct.pack(">BH", 8, utf8_index)
        count += 1
    header = struct.pack(">IHHH", 0xCAFEBABE, 0, major, count)
    # access flags, this/super class, zero interfaces/fields/methods/attributes
    tail = struct.pack(">HHHHHHH", 0x21, 0, 0, 0, 0, 0, 0)
    return header + pool + tail


@pytest.fixture
def class_file():
    """
    Factory fixture for class file bytes.

    Usage:
        data = class_file(("Minecraft Beta 1.7.3",), major=50)
    """
    return build_class_file


@pytest.fixture
def create_jar(tmp_test_dir: Path):
    """
    Factory fixture for creating jar archives.

    Values may be bytes, str (UTF-8 encoded) or dict (dumped as JSON).

    Usage:
        jar = create_jar("1.20.4.jar", {"version.json": {"id": "1.20.4"}})
    """

    def _create(filename: str, entries: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            for name, value in entries.items():
                if isinstance(value, dict):
                    value = json.dumps(value)
                if isinstance(value, str):
                    value = value.encode("utf-8")
                zf.writestr(name, value)
        return path

    return _create


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("gamever.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
