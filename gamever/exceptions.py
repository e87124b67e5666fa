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

"""Exception hierarchy for gamever.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- InvalidVersion: A version string failed strict parsing
- ArtifactUnreadable: An artifact could not be opened at all
- ConfigError: Configuration-related errors (YAML parse, invalid fields)
- SourceUnavailable: A single version source inside an artifact could not
  be read (internal, never raised out of the lookup)

All exceptions inherit from GameverError, allowing users to catch all
gamever errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from gamever.exceptions import ArtifactUnreadable
        from gamever.versioning import lookup_version

        try:
            result = lookup_version(Path("client.jar"))
        except ArtifactUnreadable as e:
            print(f"Cannot open {e.path}: {e}")
        ```

    Strict parsing:
        ```python
        from gamever.exceptions import InvalidVersion
        from gamever.versioning import parse_semantic

        try:
            parse_semantic("1.a.0")
        except InvalidVersion as e:
            print(e.reason)
        ```
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "GameverError",
    "InvalidVersion",
    "ArtifactUnreadable",
    "ConfigError",
    "SourceUnavailable",
]


class GameverError(Exception):
    """Base exception for all gamever errors.

    All gamever-specific exceptions inherit from this class, allowing users
    to catch all gamever errors with a single except clause if needed.
    """

    pass


class InvalidVersion(GameverError, ValueError):
    """Raised when a version string cannot be parsed.

    The general-purpose parser only raises this for empty input; the strict
    and range parsers raise it for any grammar violation.

    Attributes:
        version: The offending input (may be None).
        reason: Human-readable description of the violation.
    """

    def __init__(self, version: str | None, reason: str) -> None:
        self.version = version
        self.reason = reason
        if version:
            super().__init__(f"invalid version {version!r}: {reason}")
        else:
            super().__init__(reason)


class ArtifactUnreadable(GameverError):
    """Raised when an artifact cannot be opened or listed.

    This is the only hard failure of a version lookup: without access to the
    bytes of the artifact no source can be inspected.

    Attributes:
        path: Path of the artifact that could not be opened.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class ConfigError(GameverError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Missing configuration files that were explicitly requested
    - Invalid field types or malformed snapshot ranges

    Example:
        Catching configuration errors:
            ```python
            from gamever.exceptions import ConfigError

            try:
                config = load_config(Path("gamever.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class SourceUnavailable(GameverError):
    """Raised by a lookup probe when its source exists but cannot be used.

    Malformed metadata JSON, an undecodable manifest or a corrupt class file
    all end up here. The lookup catches it and moves on to the next source.
    """

    pass
