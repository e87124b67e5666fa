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

"""Artifact version lookup for gamever.

This module works out which game version a packaged build (a jar/zip, or
the same content unpacked into a directory) contains. No single source is
reliable across all eras of builds, so several sources are tried in order
of trust.

Source Priority:

1. Structured metadata (version.json): "id" and "name", plus an optional
   "release_target". Present in all modern builds.
2. Archive manifest (META-INF/MANIFEST.MF): Implementation-Version or
   Specification-Version from the main section.
3. Class constants: string literals of a few well-known classes that look
   like version labels (old builds hard-code "Minecraft Beta 1.7.3" and
   the like).

If every source comes up empty, the artifact file name is used as the
best-effort raw label. Independently of the winning source, the class file
format version of the first well-known class is recorded.

Failure Policy:

A source that exists but cannot be used (malformed JSON, undecodable
manifest, corrupt zip entry) raises SourceUnavailable inside its probe; the
lookup logs it and moves on to the next source. Corrupt classes are skipped
one by one, so the class source fails only when none of them is usable. Only an
artifact that cannot be opened at all is a hard error (ArtifactUnreadable).

Example:
    Look up a single artifact:

        from pathlib import Path
        from gamever.versioning import lookup_version

        result = lookup_version(Path("versions/24w03a/24w03a.jar"))
        print(result.raw)         # 24w03a
        print(result.normalized)  # 1.20.5-alpha.24.3.a
        print(result.source)      # metadata

Note:
    Every call opens and closes the artifact on its own and shares no
    mutable state, so lookups may run concurrently for different artifacts.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
import json
from pathlib import Path
from types import MappingProxyType
from typing import Optional
import zipfile
import zlib

from gamever.exceptions import ArtifactUnreadable, SourceUnavailable
from gamever.logging import Logger, get_global_logger

from .classfile import ClassFormatError, read_class_info, read_class_version
from .normalize import (
    SNAPSHOT_RELEASES,
    SPECIAL_VERSIONS,
    SnapshotRange,
    get_release,
    is_normalized,
    is_probable_version,
    normalize_version,
)

# ----------------------------
# Data types
# ----------------------------


@dataclass(frozen=True)
class LookupConfig:
    """Settings consumed by the artifact version lookup.

    The defaults are the built-in configuration; gamever.config builds
    instances from YAML files.

    Attributes:
        metadata_entry: Archive entry holding structured version metadata.
        manifest_entry: Archive entry holding the JAR manifest.
        manifest_keys: Manifest main-section keys to read, in priority order.
        class_entries: Class entries scanned for version string constants.
        string_prefixes: Product prefixes stripped from string constants
            before checking them ("Minecraft Beta 1.7.3" -> "Beta 1.7.3").
        special_versions: One-off raw label -> normalized version mapping.
            Stored read-only; left out of the hash.
        snapshot_releases: Year/week ranges for weekly snapshots, newest
            first.
        source_path: Configuration file the values came from, if any.

    """

    metadata_entry: str = "version.json"
    manifest_entry: str = "META-INF/MANIFEST.MF"
    manifest_keys: tuple[str, ...] = (
        "Implementation-Version",
        "Specification-Version",
    )
    class_entries: tuple[str, ...] = (
        "net/minecraft/realms/RealmsSharedConstants.class",
        "net/minecraft/realms/RealmsBridge.class",
        "net/minecraft/server/MinecraftServer.class",
        "net/minecraft/client/Minecraft.class",
        "net/minecraft/client/main/Main.class",
        "com/mojang/minecraft/Minecraft.class",
    )
    string_prefixes: tuple[str, ...] = ("Minecraft Minecraft ", "Minecraft ")
    special_versions: Mapping[str, str] = field(
        default_factory=lambda: SPECIAL_VERSIONS,
        hash=False,
    )
    snapshot_releases: tuple[SnapshotRange, ...] = SNAPSHOT_RELEASES
    source_path: Path | None = None

    def __post_init__(self) -> None:
        # Private read-only copy
        object.__setattr__(
            self, "special_versions", MappingProxyType(dict(self.special_versions))
        )


@dataclass(frozen=True)
class VersionHint:
    """Raw version evidence produced by one source.

    Attributes:
        raw: Raw version label as found (e.g., "1.14 Pre-Release 2").
        release: Release the label belongs to, if known.
        source: Name of the source ("metadata", "manifest", "class", "filename").
        id: Declared identifier from structured metadata, if any.
        name: Declared human-readable name from structured metadata, if any.

    """

    raw: str
    release: str | None
    source: str
    id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class ArtifactVersion:
    """Version of an inspected artifact.

    Attributes:
        raw: Best-evidence raw label, verbatim.
        normalized: Normalized version. Matches the public grammar unless the
            raw label was not recognized (see ``is_normalized``).
        release: Release the raw label belongs to, if known.
        source: Source the raw label came from.
        id: Declared identifier from structured metadata, if any.
        name: Declared human-readable name from structured metadata, if any.
        class_version: Class file major version of the first well-known
            class, if one could be read.

    """

    raw: str
    normalized: str
    release: str | None
    source: str
    id: str | None = None
    name: str | None = None
    class_version: int | None = None

    @property
    def is_normalized(self) -> bool:
        """True if ``normalized`` matches the public grammar."""
        return is_normalized(self.normalized)


# ----------------------------
# Artifact access
# ----------------------------


class ArtifactReader:
    """Read-only access to the entries of an artifact.

    Wraps either an open zip file or an unpacked directory; entry names use
    "/" separators in both cases.
    """

    def __init__(self, path: Path, archive: zipfile.ZipFile | None = None) -> None:
        self.path = path
        self._archive = archive

    def read(self, entry: str) -> bytes | None:
        """Return the bytes of ``entry``, or None if it does not exist.

        Raises:
            SourceUnavailable: If the entry exists but cannot be read.

        """
        try:
            if self._archive is None:
                p = self.path.joinpath(*entry.split("/"))
                return p.read_bytes() if p.is_file() else None
            try:
                info = self._archive.getinfo(entry)
            except KeyError:
                return None
            return self._archive.read(info)
        except (
            OSError,
            zipfile.BadZipFile,
            zlib.error,
            NotImplementedError,
            RuntimeError,
        ) as err:
            raise SourceUnavailable(f"cannot read entry {entry!r}: {err}") from err

    def names(self) -> list[str]:
        """List all entry names."""
        if self._archive is not None:
            return self._archive.namelist()
        return sorted(
            p.relative_to(self.path).as_posix()
            for p in self.path.rglob("*")
            if p.is_file()
        )


@contextmanager
def open_artifact(path: str | Path) -> Iterator[ArtifactReader]:
    """Open an artifact for reading.

    Args:
        path: Path to a zip/jar file or an unpacked directory.

    Yields:
        A reader for the artifact's entries; the archive is closed on exit.

    Raises:
        ArtifactUnreadable: If the path does not exist or is not a readable
            zip archive.

    """
    p = Path(path)
    if p.is_dir():
        yield ArtifactReader(p)
        return
    try:
        archive = zipfile.ZipFile(p)
    except (OSError, zipfile.BadZipFile) as err:
        raise ArtifactUnreadable(p, f"cannot open artifact {p}: {err}") from err
    with archive:
        yield ArtifactReader(p, archive)


# ----------------------------
# Sources
# ----------------------------

Probe = Callable[[ArtifactReader, LookupConfig, Logger], Optional[VersionHint]]


def _probe_metadata(
    reader: ArtifactReader, config: LookupConfig, logger: Logger
) -> VersionHint | None:
    """Read id/name/release_target from the structured metadata entry."""
    data = reader.read(config.metadata_entry)
    if data is None:
        return None
    try:
        obj = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as err:
        raise SourceUnavailable(f"malformed {config.metadata_entry}: {err}") from err
    if not isinstance(obj, dict):
        raise SourceUnavailable(f"{config.metadata_entry} is not a JSON object")

    fields: dict[str, str] = {}
    for key in ("id", "name", "release_target"):
        value = obj.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            logger.warning(
                "LOOKUP",
                f"{config.metadata_entry}: ignoring non-string {key!r} "
                f"({type(value).__name__})",
            )
            continue
        fields[key] = value

    declared_id = fields.get("id")
    declared_name = fields.get("name")
    # The shorter of the two is the bare label; the longer one is decorated
    if declared_name is None or (
        declared_id is not None and len(declared_id) < len(declared_name)
    ):
        version = declared_id
    else:
        version = declared_name
    if not version:
        return None

    release = fields.get("release_target") or get_release(
        version, config.snapshot_releases
    )
    return VersionHint(
        raw=version,
        release=release,
        source="metadata",
        id=declared_id,
        name=declared_name,
    )


def parse_manifest(text: str) -> dict[str, str]:
    """Parse the main section of a JAR manifest.

    Continuation lines (starting with a single space) are joined to the
    previous header. Parsing stops at the first blank line.

    Raises:
        SourceUnavailable: If a line is neither a header nor a continuation.

    """
    attrs: dict[str, str] = {}
    last_key: str | None = None
    for line in text.splitlines():
        if not line:
            break
        if line.startswith(" "):
            if last_key is None:
                raise SourceUnavailable("manifest starts with a continuation line")
            attrs[last_key] += line[1:]
            continue
        key, sep, value = line.partition(":")
        if not sep or not key:
            raise SourceUnavailable(f"malformed manifest line {line!r}")
        last_key = key.strip()
        attrs[last_key] = value.strip()
    return attrs


def _probe_manifest(
    reader: ArtifactReader, config: LookupConfig, logger: Logger
) -> VersionHint | None:
    """Read the version from the manifest main section."""
    data = reader.read(config.manifest_entry)
    if data is None:
        return None
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise SourceUnavailable(f"undecodable manifest: {err}") from err

    attrs = parse_manifest(text)
    for key in config.manifest_keys:
        value = attrs.get(key)
        if value:
            logger.debug("LOOKUP", f"Manifest {key}: {value}")
            return VersionHint(
                raw=value,
                release=get_release(value, config.snapshot_releases),
                source="manifest",
            )
    return None


def _strip_prefix(value: str, prefixes: tuple[str, ...]) -> str:
    for prefix in prefixes:
        if value.startswith(prefix):
            return value[len(prefix) :]
    return value


def _probe_class_constants(
    reader: ArtifactReader, config: LookupConfig, logger: Logger
) -> VersionHint | None:
    """Scan well-known classes for a version-like string constant.

    A class that cannot be read or parsed is skipped. The source only fails
    when every class present was unusable.
    """
    failures: list[str] = []
    parsed = 0
    for entry in config.class_entries:
        try:
            data = reader.read(entry)
            if data is None:
                continue
            info = read_class_info(data)
        except (SourceUnavailable, ClassFormatError) as err:
            logger.verbose("LOOKUP", f"Skipping class {entry}: {err}")
            failures.append(f"{entry}: {err}")
            continue
        parsed += 1
        logger.debug("LOOKUP", f"{entry}: {len(info.strings)} string constant(s)")
        for value in info.strings:
            candidate = _strip_prefix(value, config.string_prefixes)
            if is_probable_version(candidate):
                return VersionHint(
                    raw=candidate,
                    release=get_release(candidate, config.snapshot_releases),
                    source="class",
                )
    if failures and not parsed:
        raise SourceUnavailable(f"no readable class: {'; '.join(failures)}")
    return None


_PROBES: tuple[tuple[str, Probe], ...] = (
    ("metadata", _probe_metadata),
    ("manifest", _probe_manifest),
    ("class", _probe_class_constants),
)


def _hint_from_file_name(path: Path, config: LookupConfig) -> VersionHint:
    name = path.name
    if path.is_file():
        pos = name.rfind(".")
        if pos > 0:
            name = name[:pos]
    return VersionHint(
        raw=name,
        release=get_release(name, config.snapshot_releases),
        source="filename",
    )


def _read_class_version(
    reader: ArtifactReader, config: LookupConfig, logger: Logger
) -> int | None:
    """Class file major version of the first well-known class present."""
    for entry in config.class_entries:
        try:
            data = reader.read(entry)
            if data is None:
                continue
            major, _minor = read_class_version(data)
        except (SourceUnavailable, ClassFormatError) as err:
            logger.debug("LOOKUP", f"Skipping class version of {entry}: {err}")
            continue
        return major
    return None


# ----------------------------
# Public API
# ----------------------------


def lookup_version(
    path: str | Path,
    config: LookupConfig | None = None,
    *,
    version_name: str | None = None,
    logger: Logger | None = None,
) -> ArtifactVersion:
    """Determine the normalized version of an artifact.

    Args:
        path: Path to a jar/zip file or an unpacked directory.
        config: Lookup settings; built-in defaults if None.
        version_name: Known raw version label. When given, no source is
            inspected for the label (the class version is still read).
        logger: Logger for progress output; the global logger if None.

    Returns:
        The raw label, its normalized form and the corroborating evidence.

    Raises:
        ArtifactUnreadable: If the artifact cannot be opened.

    """
    if config is None:
        config = LookupConfig()
    if logger is None:
        logger = get_global_logger()

    with open_artifact(path) as reader:
        logger.verbose("LOOKUP", f"Inspecting artifact: {reader.path.name}")
        hint: VersionHint | None = None

        if version_name is not None:
            hint = VersionHint(
                raw=version_name,
                release=get_release(version_name, config.snapshot_releases),
                source="provided",
            )

        for source, probe in _PROBES:
            if hint is not None:
                break
            logger.debug("LOOKUP", f"Trying source: {source}")
            try:
                hint = probe(reader, config, logger)
            except SourceUnavailable as err:
                logger.verbose("LOOKUP", f"Source {source} unavailable: {err}")
                continue
            if hint is None:
                logger.debug("LOOKUP", f"Source {source} has no version")

        if hint is None:
            hint = _hint_from_file_name(reader.path, config)

        class_version = _read_class_version(reader, config, logger)

    normalized = normalize_version(
        hint.raw, hint.release, special_versions=config.special_versions
    )
    logger.verbose(
        "LOOKUP",
        f"{reader.path.name}: {hint.raw!r} from {hint.source} -> {normalized}",
    )
    return ArtifactVersion(
        raw=hint.raw,
        normalized=normalized,
        release=hint.release,
        source=hint.source,
        id=hint.id,
        name=hint.name,
        class_version=class_version,
    )
