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

"""Diagnostic orchestration for gamever.

This module checks how well the version lookup copes with a collection of
real builds: every artifact is looked up, and any result whose normalized
version does not match the public grammar is collected as invalid.

Design Principles:

- One unreadable artifact never aborts the run; it is reported and the
  check moves on to the next artifact
- Results are returned as data (CheckReport); printing is left to the CLI

Example:
    Check a directory of builds:
        ```python
        from pathlib import Path
        from gamever.core import check_artifacts

        report = check_artifacts(Path("versions/"))
        for result in report.invalid:
            print(result.line)
        ```
"""

from __future__ import annotations

from pathlib import Path

from gamever.exceptions import ArtifactUnreadable
from gamever.logging import Logger, get_global_logger
from gamever.results import ArtifactCheck, CheckReport
from gamever.versioning.lookup import LookupConfig, lookup_version

__all__ = ["check_artifact", "check_artifacts", "find_artifacts"]

ARTIFACT_SUFFIX = ".jar"


def find_artifacts(path: Path) -> list[tuple[Path, str]]:
    """List the artifacts to check under ``path``.

    Args:
        path: A single artifact file or a directory searched recursively for
            jar files.

    Returns:
        (file, display name) pairs sorted by display name. Display names
        are relative to ``path`` for directories.

    """
    if not path.is_dir():
        return [(path, path.name)]
    found = [
        (f, f.relative_to(path).as_posix())
        for f in path.rglob(f"*{ARTIFACT_SUFFIX}")
        if f.is_file()
    ]
    return sorted(found, key=lambda item: item[1])


def check_artifact(
    path: Path,
    name: str,
    config: LookupConfig | None = None,
    logger: Logger | None = None,
) -> ArtifactCheck:
    """Look up one artifact and judge its normalized version.

    Args:
        path: Artifact to inspect.
        name: Display name used in the report line.
        config: Lookup settings; built-in defaults if None.
        logger: Logger for progress output; the global logger if None.

    Returns:
        The check result. Unreadable artifacts are reported as invalid with
        ``error`` set instead of raising.

    """
    try:
        version = lookup_version(path, config, logger=logger)
    except ArtifactUnreadable as err:
        return ArtifactCheck(
            name=name,
            line=f"{name}: unreadable ({err})",
            version=None,
            valid=False,
            error=str(err),
        )

    line = (
        f"{name}: {version.normalized} "
        f"(raw={version.raw} id={version.id} name={version.name})"
    )
    return ArtifactCheck(
        name=name,
        line=line,
        version=version,
        valid=version.is_normalized,
    )


def check_artifacts(
    path: Path,
    config: LookupConfig | None = None,
    logger: Logger | None = None,
) -> CheckReport:
    """Check a single artifact or every jar below a directory.

    Args:
        path: Artifact file or directory.
        config: Lookup settings; built-in defaults if None.
        logger: Logger for progress output; the global logger if None.

    Returns:
        Report with one result per artifact.

    Raises:
        FileNotFoundError: If ``path`` does not exist.

    """
    if logger is None:
        logger = get_global_logger()
    if not path.exists():
        raise FileNotFoundError(f"path not found: {path}")

    artifacts = find_artifacts(path)
    logger.verbose("CHECK", f"Found {len(artifacts)} artifact(s) under {path}")

    results: list[ArtifactCheck] = []
    for i, (file, name) in enumerate(artifacts, start=1):
        logger.debug("CHECK", f"[{i}/{len(artifacts)}] {name}")
        results.append(check_artifact(file, name, config, logger))
    return CheckReport(results=tuple(results))
