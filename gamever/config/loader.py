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

"""Configuration loading and merging for gamever.

The version lookup works out of the box with built-in defaults. A YAML file
(``gamever.yaml``) can adjust where the lookup looks and teach the
normalizer about builds the built-in tables do not know yet.

Configuration Layers:

1. **Built-in defaults** (DEFAULT_CONFIG, derived from LookupConfig)
2. **User file** (gamever.yaml), either passed explicitly or found by
   walking upward from a start directory

Merge Behavior:

The loader performs deep merging with "last wins" semantics:

- **Dicts**: Recursively merged (keys from overlay override base)
- **Lists**: Completely replaced (NOT appended/extended)
- **Scalars**: Overwritten (strings, numbers, booleans)

Example file:

    lookup:
      class_entries:
        - net/minecraft/client/Minecraft.class
    special_versions:
      "25w14craftmine": "1.21.6-alpha.25.14.craftmine"
    snapshot_releases:
      - {from: 25w41, to: 25w46, release: "1.21.11"}

Two exceptions to the list rule apply when building a LookupConfig:
``special_versions`` and ``snapshot_releases`` extend the built-in tables of
gamever.versioning.normalize rather than replacing them, and user snapshot
ranges win over built-in ones.

Example:
    Basic usage:

        from pathlib import Path
        from gamever.config import load_lookup_config

        config = load_lookup_config(Path("gamever.yaml"))
        print(config.metadata_entry)  # version.json

Error Handling:

- ConfigError: Explicit file missing, YAML parse errors, empty files,
  invalid structure or field types
- All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from gamever.exceptions import ConfigError
from gamever.versioning.lookup import LookupConfig
from gamever.versioning.normalize import (
    SNAPSHOT_RELEASES,
    SPECIAL_VERSIONS,
    SnapshotRange,
)

CONFIG_FILENAME = "gamever.yaml"

_BUILTIN = LookupConfig()

DEFAULT_CONFIG: dict[str, Any] = {
    "lookup": {
        "metadata_entry": _BUILTIN.metadata_entry,
        "manifest_entry": _BUILTIN.manifest_entry,
        "manifest_keys": list(_BUILTIN.manifest_keys),
        "class_entries": list(_BUILTIN.class_entries),
        "string_prefixes": list(_BUILTIN.string_prefixes),
    },
    "special_versions": {},
    "snapshot_releases": [],
}


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Load a YAML file and return the parsed Python object.

    Raises:
        ConfigError: When file does not exist, invalid YAML (parse error),
            or empty files.

    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            # Replace lists and scalars entirely
            result[k] = v
    return result


def _find_config_file(start_dir: Path) -> Path | None:
    """Walk upward from 'start_dir' looking for a gamever.yaml."""
    for parent in [start_dir] + list(start_dir.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


# -------------------------------
# Field conversion
# -------------------------------


def _as_str(section: dict[str, Any], key: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"lookup.{key} must be a non-empty string")
    return value


def _as_str_tuple(section: dict[str, Any], key: str) -> tuple[str, ...]:
    value = section.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"lookup.{key} must be a list of strings")
    return tuple(value)


def _snapshot_ranges(value: Any) -> tuple[SnapshotRange, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError("'snapshot_releases' must be a list")

    ranges: list[SnapshotRange] = []
    for i, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigError(f"snapshot_releases[{i}] must be a mapping")
        missing = [k for k in ("from", "to", "release") if k not in entry]
        if missing:
            raise ConfigError(
                f"snapshot_releases[{i}] is missing: {', '.join(missing)}"
            )
        wrong = [k for k in ("from", "to", "release") if not isinstance(entry[k], str)]
        if wrong:
            raise ConfigError(
                f"snapshot_releases[{i}]: {', '.join(wrong)} must be quoted strings"
            )
        try:
            ranges.append(
                SnapshotRange.from_labels(entry["from"], entry["to"], entry["release"])
            )
        except ValueError as err:
            raise ConfigError(f"snapshot_releases[{i}]: {err}") from err
    return tuple(ranges)


def build_lookup_config(
    data: dict[str, Any], source_path: Path | None = None
) -> LookupConfig:
    """Convert a merged configuration dict into a LookupConfig.

    Args:
        data: Configuration as returned by load_config.
        source_path: File the configuration came from, for reporting.

    Returns:
        Immutable lookup settings.

    Raises:
        ConfigError: If a field has the wrong type or a snapshot range is
            malformed.

    """
    lookup = data.get("lookup")
    if not isinstance(lookup, dict):
        raise ConfigError("'lookup' must be a mapping")

    specials = data.get("special_versions") or {}
    if not isinstance(specials, dict):
        raise ConfigError("'special_versions' must be a mapping of raw -> normalized")
    for raw, normalized in specials.items():
        if not isinstance(raw, str) or not isinstance(normalized, str):
            raise ConfigError(
                f"special_versions: {raw!r} -> {normalized!r} must be quoted strings"
            )

    return LookupConfig(
        metadata_entry=_as_str(lookup, "metadata_entry"),
        manifest_entry=_as_str(lookup, "manifest_entry"),
        manifest_keys=_as_str_tuple(lookup, "manifest_keys"),
        class_entries=_as_str_tuple(lookup, "class_entries"),
        string_prefixes=_as_str_tuple(lookup, "string_prefixes"),
        special_versions={
            **SPECIAL_VERSIONS,
            **specials,
        },
        snapshot_releases=_snapshot_ranges(data.get("snapshot_releases"))
        + SNAPSHOT_RELEASES,
        source_path=source_path,
    )


# -------------------------------
# Public API
# -------------------------------


def load_config(
    config_path: Path | None = None, start_dir: Path | None = None
) -> dict[str, Any]:
    """Load the effective configuration as a plain dict.

    Args:
        config_path: Explicit configuration file. Must exist.
        start_dir: Directory to search upward from when no explicit file is
            given. If neither is given, only the built-in defaults apply.

    Returns:
        DEFAULT_CONFIG deep-merged with the user file.

    Raises:
        ConfigError: On missing explicit file, YAML errors, or a top-level
            value that is not a mapping.

    """
    from gamever.logging import get_global_logger

    logger = get_global_logger()

    path = config_path
    if path is None and start_dir is not None:
        path = _find_config_file(start_dir.resolve())

    if path is None:
        logger.debug("CONFIG", "No configuration file, using built-in defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.verbose("CONFIG", f"Loading configuration: {path}")
    user = _load_yaml_file(path)
    if not isinstance(user, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {path}")

    return _deep_merge_dicts(copy.deepcopy(DEFAULT_CONFIG), user)


def load_lookup_config(
    config_path: Path | None = None, start_dir: Path | None = None
) -> LookupConfig:
    """Load configuration and build the LookupConfig used by the lookup.

    Args:
        config_path: Explicit configuration file. Must exist.
        start_dir: Directory to search upward from when no explicit file is
            given.

    Returns:
        Immutable lookup settings.

    Raises:
        ConfigError: On any configuration problem.

    """
    path = config_path
    if path is None and start_dir is not None:
        path = _find_config_file(start_dir.resolve())
    return build_lookup_config(load_config(path), source_path=path)
