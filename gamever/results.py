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

"""Public API return types for gamever.

This module defines dataclasses for return values of the diagnostic API in
gamever.core.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using result types:
        ```python
        from pathlib import Path
        from gamever.core import check_artifacts

        report = check_artifacts(Path("versions/"))
        print(f"{report.passed} passed, {report.failed} failed")
        ```

Note:
    Only public API return types belong in this module. Domain types
    (like ArtifactVersion) and internal types (like VersionHint) remain
    co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass

from gamever.versioning.lookup import ArtifactVersion


@dataclass(frozen=True)
class ArtifactCheck:
    """Outcome of checking one artifact.

    Attributes:
        name: Artifact name, relative to the checked directory.
        line: Report line, "<name>: <normalized> (raw=... id=... name=...)".
        version: Lookup result, or None if the artifact was unreadable.
        valid: True if the normalized version matches the public grammar.
        error: Reason the artifact could not be read, if any.
    """

    name: str
    line: str
    version: ArtifactVersion | None
    valid: bool
    error: str | None = None


@dataclass(frozen=True)
class CheckReport:
    """Result from checking a file or a directory of artifacts.

    Attributes:
        results: One entry per artifact, in check order.
    """

    results: tuple[ArtifactCheck, ...]

    @property
    def invalid(self) -> tuple[ArtifactCheck, ...]:
        return tuple(r for r in self.results if not r.valid)

    @property
    def passed(self) -> int:
        return len(self.results) - self.failed

    @property
    def failed(self) -> int:
        return len(self.invalid)
