# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JVM class file inspection for gamever.

Old game builds ship no version metadata at all. What they do ship is
compiled classes, and two things inside those are useful:

- The class file format version (major.minor) in the header, which tells
  which Java release the build targets.
- String constants from the constant pool. Builds without version.json
  still embed their version label as a string literal somewhere in a few
  well-known classes.

Only the header and constant pool are decoded; fields, methods and
attributes are never touched.

Example:
    Inspect a class read from an archive:

        from gamever.versioning.classfile import read_class_info

        info = read_class_info(jar.read("net/minecraft/client/Minecraft.class"))
        print(info.major_version, info.java_version)  # 52 8
        print(info.strings[:3])

Note:
    Pure byte parsing; no archive or file I/O happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
import struct

_MAGIC = 0xCAFEBABE

_TAG_UTF8 = 1
_TAG_STRING = 8
# Long and Double take two constant pool slots
_TAG_WIDE = frozenset({5, 6})

# Payload sizes of the fixed-size constant pool entries, keyed by tag
_FIXED_SIZES: dict[int, int] = {
    3: 4,  # Integer
    4: 4,  # Float
    5: 8,  # Long
    6: 8,  # Double
    7: 2,  # Class
    8: 2,  # String
    9: 4,  # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}


class ClassFormatError(ValueError):
    """Raised when bytes are not a well-formed class file header/constant pool."""

    pass


@dataclass(frozen=True)
class ClassInfo:
    """What gamever reads from a class file.

    Attributes:
        major_version: Class file major version (e.g., 52 for Java 8).
        minor_version: Class file minor version.
        strings: Values of the CONSTANT_String entries, in pool order.

    """

    major_version: int
    minor_version: int
    strings: tuple[str, ...]

    @property
    def java_version(self) -> int:
        """Java release targeted by this class (52 -> 8, 65 -> 21)."""
        return self.major_version - 44


def is_class_file(data: bytes) -> bool:
    """Return True if ``data`` starts with the class file magic."""
    return len(data) >= 4 and struct.unpack_from(">I", data, 0)[0] == _MAGIC


def read_class_version(data: bytes) -> tuple[int, int]:
    """Read the (major, minor) format version from a class file header.

    Raises:
        ClassFormatError: If the data is shorter than the header or the magic
            is wrong.

    """
    if len(data) < 8:
        raise ClassFormatError("truncated class file header")
    if not is_class_file(data):
        (magic,) = struct.unpack_from(">I", data, 0)
        raise ClassFormatError(f"bad class file magic 0x{magic:08X}")
    minor, major = struct.unpack_from(">HH", data, 4)
    return major, minor


def read_class_info(data: bytes) -> ClassInfo:
    """Parse the header and constant pool of a class file.

    Args:
        data: Complete class file bytes.

    Returns:
        Parsed format version and string constants.

    Raises:
        ClassFormatError: If the magic is wrong, the data is truncated, or the
            constant pool contains an unknown tag.

    """
    major, minor = read_class_version(data)
    if len(data) < 10:
        raise ClassFormatError("truncated class file header")
    (pool_count,) = struct.unpack_from(">H", data, 8)

    utf8: dict[int, str] = {}
    string_refs: list[int] = []
    offset = 10
    index = 1

    try:
        while index < pool_count:
            tag = data[offset]
            offset += 1
            if tag == _TAG_UTF8:
                (length,) = struct.unpack_from(">H", data, offset)
                offset += 2
                raw = data[offset : offset + length]
                if len(raw) != length:
                    raise ClassFormatError(f"truncated UTF-8 constant at entry {index}")
                # Modified UTF-8; version labels are plain ASCII in practice
                utf8[index] = raw.decode("utf-8", errors="replace")
                offset += length
            elif tag == _TAG_STRING:
                (ref,) = struct.unpack_from(">H", data, offset)
                string_refs.append(ref)
                offset += 2
            elif tag in _FIXED_SIZES:
                offset += _FIXED_SIZES[tag]
            else:
                raise ClassFormatError(
                    f"unknown constant pool tag {tag} at entry {index}"
                )
            index += 2 if tag in _TAG_WIDE else 1
    except (IndexError, struct.error) as err:
        raise ClassFormatError("truncated constant pool") from err

    if offset > len(data):
        raise ClassFormatError("truncated constant pool")

    strings = tuple(utf8[ref] for ref in string_refs if ref in utf8)
    return ClassInfo(major_version=major, minor_version=minor, strings=strings)
