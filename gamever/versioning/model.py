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

"""Version value types for gamever.

A parsed version is one of two immutable variants:

- SemanticVersion: numeric release components plus optional pre-release and
  build metadata, produced when the input matches the structured grammar.
- StringVersion: the untouched input string, used for everything else.

Both variants are ordered by the comparator in gamever.versioning.keys, so
``sorted()`` and the rich comparison operators work on mixed lists.

Example:
    Working with parsed versions:

        from gamever.versioning import parse_version

        v = parse_version("1.20.4-rc.1+build.7")
        print(v.components)       # (1, 20, 4)
        print(v.prerelease_key)   # rc
        print(v.build)            # build.7
        print(v < parse_version("1.20.4"))  # True

Note:
    Build metadata is carried for display only. It never takes part in
    equality, hashing, or ordering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Component value marking a wildcard ("x", "X" or "*") in a range version.
WILDCARD = -1


class _Ordered:
    """Rich comparison operators delegating to compare_versions."""

    def _compare(self, other: object) -> int:
        from .keys import compare_versions

        if not isinstance(other, (SemanticVersion, StringVersion)):
            return NotImplemented
        return int(compare_versions(self, other))  # type: ignore[arg-type]

    def __lt__(self, other: object) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result < 0

    def __le__(self, other: object) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result > 0

    def __ge__(self, other: object) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result >= 0


@dataclass(frozen=True, eq=False)
class SemanticVersion(_Ordered):
    """A version that matched the structured grammar.

    Attributes:
        components: Release components, at least one. The last one may be
            WILDCARD when the version came from the range parser.
        prerelease: Dot-separated pre-release identifiers (e.g., "beta.2"),
            or None.
        build: Build metadata after "+", or None.
        wildcard: True if the last release component is a wildcard.

    """

    components: tuple[int, ...]
    prerelease: str | None = None
    build: str | None = None
    wildcard: bool = False

    def __post_init__(self) -> None:
        if not self.components:
            raise ValueError("a semantic version needs at least one component")
        if self.prerelease == "":
            raise ValueError("pre-release must have at least one identifier")

    @property
    def prerelease_parts(self) -> tuple[str, ...]:
        """Pre-release identifiers in order (empty tuple if none)."""
        if self.prerelease is None:
            return ()
        return tuple(self.prerelease.split("."))

    @property
    def prerelease_key(self) -> str | None:
        """First pre-release identifier (e.g., "alpha"), or None."""
        parts = self.prerelease_parts
        return parts[0] if parts else None

    def component(self, pos: int) -> int:
        """Return the release component at ``pos``.

        Positions past the end read as WILDCARD for wildcard versions and as
        0 otherwise, so "1.2" and "1.2.0" line up component by component.
        """
        if pos < 0:
            raise IndexError(f"negative component position: {pos}")
        if pos < len(self.components):
            return self.components[pos]
        return WILDCARD if self.wildcard else 0

    @property
    def friendly_string(self) -> str:
        parts = ["x" if c == WILDCARD else str(c) for c in self.components]
        text = ".".join(parts)
        if self.prerelease is not None:
            text += f"-{self.prerelease}"
        if self.build is not None:
            text += f"+{self.build}"
        return text

    def _identity(self) -> tuple:
        # Trailing zeros are insignificant: 1.2 == 1.2.0
        comps = list(self.components)
        if not self.wildcard:
            while len(comps) > 1 and comps[-1] == 0:
                comps.pop()
        return (tuple(comps), self.prerelease, self.wildcard)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __str__(self) -> str:
        return self.friendly_string


@dataclass(frozen=True)
class StringVersion(_Ordered):
    """A version string that did not match the structured grammar.

    Attributes:
        version: The original input, verbatim.

    """

    version: str

    @property
    def friendly_string(self) -> str:
        return self.version

    def __str__(self) -> str:
        return self.version


Version = Union[SemanticVersion, StringVersion]
