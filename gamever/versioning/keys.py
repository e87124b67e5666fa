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

"""Core version comparison utilities for gamever.

This module is format-agnostic: it does NOT read artifacts. It only orders
parsed versions consistently, whatever source they came from.

Ordering rules:

1. Release components are compared left to right; a missing trailing
   component counts as 0, a wildcard component matches anything.
2. With equal releases, a version without pre-release is newer than one with
   a pre-release. Against a wildcard range version, a pre-release compares
   equal (the range matches it).
3. Pre-release identifiers are compared left to right. Numeric identifiers
   compare by value and sort before alphanumeric ones. The first identifier
   is the pre-release key: "alpha" < "beta" < "rc", any other key sorts
   before "alpha" (lexicographically among themselves). Later alphanumeric
   identifiers compare as ASCII strings. When one list is a prefix of the
   other, the shorter one is older ("rc.1" < "rc.1.a").
4. Build metadata is ignored.
5. StringVersion values compare as plain strings and are always newer than
   any SemanticVersion, so mixed lists sort deterministically.
"""

from __future__ import annotations

from enum import IntEnum
import re

from .model import WILDCARD, SemanticVersion, StringVersion, Version
from .parser import parse_version

# ----------------------------
# Comparison core
# ----------------------------


class Ordering(IntEnum):
    """Result of compare_versions; usable wherever -1/0/1 is expected."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


# Declared precedence of pre-release keys (higher = closer to release)
_PRE_KEY_RANK: dict[str, int] = {
    "alpha": 1,
    "beta": 2,
    "rc": 3,
}
_UNKNOWN_KEY_RANK = 0  # unknown keys sort before alpha

_UNSIGNED_INTEGER = re.compile(r"0|[1-9][0-9]*")


def _pre_part_key(part: str, is_key: bool) -> tuple[int, int, int, str]:
    """Encode one pre-release identifier as a sortable tuple.

    (0, 0, n, "")       numeric identifiers, by value
    (1, rank, 0, text)  alphanumeric identifiers; rank only applies to the key
    """
    if _UNSIGNED_INTEGER.fullmatch(part):
        return (0, 0, int(part), "")
    rank = _PRE_KEY_RANK.get(part, _UNKNOWN_KEY_RANK) if is_key else 0
    return (1, rank, 0, part)


def _pre_key(v: SemanticVersion) -> tuple[tuple[int, int, int, str], ...]:
    return tuple(
        _pre_part_key(part, i == 0) for i, part in enumerate(v.prerelease_parts)
    )


def _sign(x: int) -> Ordering:
    return Ordering((x > 0) - (x < 0))


def _cmp(a, b) -> Ordering:
    return Ordering((a > b) - (a < b))


def compare_versions(a: Version, b: Version) -> Ordering:
    """Compare two parsed versions.

    Args:
        a: First version.
        b: Second version.

    Returns:
        Ordering.LESS if a is older than b, EQUAL if they are the same
        version, GREATER if a is newer.

    """
    if isinstance(a, StringVersion) or isinstance(b, StringVersion):
        if isinstance(a, StringVersion) and isinstance(b, StringVersion):
            return _cmp(a.version, b.version)
        return Ordering.LESS if isinstance(a, SemanticVersion) else Ordering.GREATER

    for i in range(max(len(a.components), len(b.components))):
        first = a.component(i)
        second = b.component(i)
        if first == WILDCARD or second == WILDCARD:
            continue
        if first != second:
            return _sign(first - second)

    if a.prerelease is None and b.prerelease is None:
        return Ordering.EQUAL
    if a.prerelease is not None and b.prerelease is not None:
        return _cmp(_pre_key(a), _pre_key(b))
    if a.prerelease is not None:
        return Ordering.EQUAL if b.wildcard else Ordering.LESS
    return Ordering.EQUAL if a.wildcard else Ordering.GREATER


def version_key(v: Version) -> tuple:
    """Compute a sortable key for a concrete version.

    Keys order exactly like compare_versions. Wildcard versions describe a
    range rather than a point and have no key.

    Raises:
        ValueError: If ``v`` contains a wildcard.

    """
    if isinstance(v, StringVersion):
        return (1, v.version)
    if v.wildcard:
        raise ValueError(f"wildcard version {v} has no sort key")
    comps = list(v.components)
    while comps and comps[-1] == 0:
        comps.pop()
    pre = (1,) if v.prerelease is None else (0, _pre_key(v))
    return (0, tuple(comps), pre)


def version_key_any(s: str) -> tuple:
    """Compute a sortable key for any version string."""
    return version_key(parse_version(s))


def compare_any(a: str, b: str) -> int:
    """Compare two version strings.
    Returns -1 if a < b, 0 if equal, 1 if a > b.
    """
    from gamever.logging import get_global_logger

    result = compare_versions(parse_version(a), parse_version(b))
    logger = get_global_logger()
    if result < 0:
        logger.debug("COMPARE", f"{a!r} is older than {b!r}")
    elif result > 0:
        logger.debug("COMPARE", f"{a!r} is newer than {b!r}")
    else:
        logger.debug("COMPARE", f"{a!r} is the same as {b!r}")
    return int(result)


def is_newer_any(remote: str, current: str | None) -> bool:
    """Decide if 'remote' should be considered newer than 'current'.
    Returns True iff remote > current; any version is newer than None.
    """
    if current is None:
        return True
    return compare_any(remote, current) > 0
