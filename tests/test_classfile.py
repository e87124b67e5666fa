"""
Tests for gamever.versioning.classfile module.

Tests class file inspection including:
- Header format version
- String constants from the constant pool
- Double-slot constant pool entries
- Rejection of malformed data
"""

from __future__ import annotations

import struct

import pytest

from gamever.versioning.classfile import (
    ClassFormatError,
    is_class_file,
    read_class_info,
    read_class_version,
)

# All tests in this file are unit tests (fast, no I/O)
pytestmark = pytest.mark.unit


class TestReadClassInfo:
    """Tests for read_class_info."""

    def test_header_versions(self, class_file):
        """Test that the format version is read from the header."""
        info = read_class_info(class_file(major=52))

        assert info.major_version == 52
        assert info.minor_version == 0
        assert info.java_version == 8

    def test_string_constants_in_pool_order(self, class_file):
        """Test that CONSTANT_String values are returned in order."""
        info = read_class_info(class_file(("Minecraft Beta 1.7.3", "/title/bg.png")))

        assert info.strings == ("Minecraft Beta 1.7.3", "/title/bg.png")

    def test_no_strings(self, class_file):
        """Test a class without string constants."""
        assert read_class_info(class_file()).strings == ()

    def test_unreferenced_utf8_ignored(self):
        """Test that UTF-8 entries are only reported through String entries."""
        name = b"net/minecraft/Foo"
        pool = struct.pack(">BH", 1, len(name)) + name
        data = struct.pack(">IHHH", 0xCAFEBABE, 0, 50, 2) + pool

        assert read_class_info(data).strings == ()

    def test_bad_magic(self, class_file):
        """Test that non-class data is rejected."""
        data = b"\x00\x00\x00\x00" + class_file()[4:]

        with pytest.raises(ClassFormatError, match="magic"):
            read_class_info(data)

    def test_truncated_header(self):
        """Test that a short header is rejected."""
        with pytest.raises(ClassFormatError, match="truncated"):
            read_class_info(b"\xca\xfe\xba\xbe\x00")

    def test_truncated_pool(self, class_file):
        """Test that a cut-off constant pool is rejected."""
        data = class_file(("1.20.4",))

        with pytest.raises(ClassFormatError, match="truncated"):
            read_class_info(data[:22])

    def test_unknown_tag(self):
        """Test that an unknown constant pool tag is rejected."""
        data = struct.pack(">IHHH", 0xCAFEBABE, 0, 52, 2) + b"\x63\x00\x00"

        with pytest.raises(ClassFormatError, match="unknown constant pool tag 99"):
            read_class_info(data)

    def test_class_format_error_is_value_error(self):
        """Test that ClassFormatError can be caught as ValueError."""
        with pytest.raises(ValueError):
            read_class_info(b"")


class TestIsClassFile:
    """Tests for is_class_file."""

    def test_class_bytes(self, class_file):
        """Test detection of the class file magic."""
        assert is_class_file(class_file()) is True

    def test_other_bytes(self):
        """Test that other data is not a class file."""
        assert is_class_file(b"PK\x03\x04") is False
        assert is_class_file(b"") is False


class TestReadClassVersion:
    """Tests for read_class_version."""

    def test_header_only(self, class_file):
        """Test that only the header is needed, not the constant pool."""
        data = class_file(("1.20.4",), major=61)[:8]

        assert read_class_version(data) == (61, 0)

    def test_bad_magic(self):
        """Test that non-class data is rejected."""
        with pytest.raises(ClassFormatError, match="magic 0x504B0304"):
            read_class_version(b"PK\x03\x04\x00\x00\x00\x00")

    def test_truncated(self):
        """Test that fewer than eight bytes are rejected."""
        with pytest.raises(ClassFormatError, match="truncated"):
            read_class_version(b"\xca\xfe\xba\xbe")
