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

"""Version string parsing for gamever.

Three entry points share one grammar:

- parse_version: total. Returns a SemanticVersion when the structured grammar
  matches and a StringVersion otherwise. Only empty input is an error.
- parse_semantic: strict. Raises InvalidVersion with a reason on any
  violation and never falls back.
- parse_range_version: strict, but also accepts trailing wildcards
  ("2.x", "1.3.*") as used in dependency ranges.

Structured grammar:

    version     := release ("-" prerelease)? ("+" build)?
    release     := number ("." number)*
    number      := "0" | [1-9][0-9]*
    prerelease  := ident ("." ident)*
    ident       := [0-9A-Za-z-]+
    build       := anything

The build metadata is split off at the first "+", then the pre-release at the
first "-", so "1.0.0-beta-2+exp.sha" has pre-release "beta-2".

Example:
    General parsing never fails on odd input:

        >>> from gamever.versioning import parse_version
        >>> parse_version("1.20.4")
        SemanticVersion(components=(1, 20, 4), prerelease=None, build=None, wildcard=False)
        >>> parse_version("not a version!!")
        StringVersion(version='not a version!!')
"""

from __future__ import annotations

import re

from gamever.exceptions import InvalidVersion

from .model import WILDCARD, SemanticVersion, StringVersion, Version

_UNSIGNED_INTEGER = re.compile(r"0|[1-9][0-9]*")
_DOT_SEPARATED_ID = re.compile(r"[-0-9A-Za-z]+(\.[-0-9A-Za-z]+)*")
_WILDCARDS = frozenset({"x", "X", "*"})


def _parse_structured(text: str, allow_wildcard: bool) -> SemanticVersion | str:
    """Match ``text`` against the structured grammar.

    Returns the parsed version, or a reason string describing the first
    violation. Callers decide whether a violation is an error.
    """
    build: str | None = None
    prerelease: str | None = None

    i = text.find("+")
    if i >= 0:
        build = text[i + 1 :]
        text = text[:i]

    i = text.find("-")
    if i >= 0:
        prerelease = text[i + 1 :]
        text = text[:i]

    if prerelease is not None and not _DOT_SEPARATED_ID.fullmatch(prerelease):
        return f"invalid pre-release string {prerelease!r}"

    if not text:
        return "missing release components"
    if text.startswith("."):
        return "missing version component before '.'"
    if text.endswith("."):
        return "missing version component after '.'"

    components: list[int] = []
    first_wildcard = -1
    for pos, comp in enumerate(text.split(".")):
        if allow_wildcard and comp in _WILDCARDS:
            if prerelease is not None:
                return "pre-release versions may not use wildcards"
            if first_wildcard < 0:
                first_wildcard = pos
            components.append(WILDCARD)
            continue
        if first_wildcard >= 0:
            return "wildcards must only appear at the end (e.g. 1.x, not 1.x.2)"
        if not comp:
            return "missing version component"
        if not _UNSIGNED_INTEGER.fullmatch(comp):
            return f"could not parse version component {comp!r}"
        components.append(int(comp))

    if first_wildcard == 0:
        return "a version may not consist of a wildcard only"
    if first_wildcard > 0:
        # 1.x.x is the same range as 1.x
        components = components[: first_wildcard + 1]

    return SemanticVersion(
        components=tuple(components),
        prerelease=prerelease,
        build=build,
        wildcard=first_wildcard > 0,
    )


def _require_text(s: str | None) -> str:
    if s is None or s == "":
        raise InvalidVersion(s, "version must be a non-empty string")
    return s


def parse_version(s: str | None) -> Version:
    """Parse any version string.

    Args:
        s: Version string.

    Returns:
        A SemanticVersion when ``s`` matches the structured grammar, otherwise
        a StringVersion wrapping ``s`` unchanged.

    Raises:
        InvalidVersion: If ``s`` is None or empty.

    """
    text = _require_text(s)
    result = _parse_structured(text, allow_wildcard=False)
    if isinstance(result, SemanticVersion):
        return result
    return StringVersion(text)


def parse_semantic(s: str | None) -> SemanticVersion:
    """Parse a version that must follow the structured grammar.

    Args:
        s: Version string.

    Returns:
        The parsed SemanticVersion.

    Raises:
        InvalidVersion: If ``s`` is None, empty, or violates the grammar.
            The exception's ``reason`` names the violation.

    """
    text = _require_text(s)
    result = _parse_structured(text, allow_wildcard=False)
    if isinstance(result, str):
        raise InvalidVersion(text, result)
    return result


def parse_range_version(s: str | None) -> SemanticVersion:
    """Parse a version used inside a dependency range.

    Same as parse_semantic, but a trailing run of wildcard components is
    accepted and collapsed ("2.x.x" -> "2.x").

    Raises:
        InvalidVersion: If ``s`` is None, empty, or violates the grammar.

    """
    text = _require_text(s)
    result = _parse_structured(text, allow_wildcard=True)
    if isinstance(result, str):
        raise InvalidVersion(text, result)
    return result
