"""
Version parsing, comparison and artifact version lookup for gamever.

This package turns free-form version strings into ordered values and works
out the normalized version of packaged game builds.

Modules
-------
model : module
    SemanticVersion / StringVersion value types.
parser : module
    General (never failing), strict and range parsers.
keys : module
    Total ordering over parsed versions, sort keys, string helpers.
normalize : module
    Rewrite table from raw game labels to the normalized grammar.
classfile : module
    JVM class file header and constant pool reader.
lookup : module
    Multi-source artifact version lookup.

Public API
----------
parse_version : function
    Parse any version; falls back to StringVersion, never fails on content.
parse_semantic : function
    Strict parse; raises InvalidVersion on grammar violations.
parse_range_version : function
    Strict parse that also accepts trailing wildcards ("1.x").
compare_versions : function
    Compare two parsed versions, returning an Ordering.
compare_any : function
    Compare two version strings, returning -1, 0, or 1.
is_newer_any : function
    Check if a remote version is newer than the current version.
version_key / version_key_any : function
    Sortable keys for parsed versions / strings.
normalize_version : function
    Rewrite a raw label (e.g. "24w03a") into the normalized grammar.
is_normalized : function
    Exact-match check against the normalized grammar.
lookup_version : function
    Inspect an artifact and return its ArtifactVersion.

Examples
--------
Pre-release ordering:

    >>> from gamever.versioning import compare_any
    >>> compare_any("1.0.0-beta.1", "1.0.0-alpha.99")
    1
    >>> compare_any("1.0.0", "1.0.0-rc.1")
    1

Snapshot normalization:

    >>> from gamever.versioning import get_release, normalize_version
    >>> normalize_version("24w03a", get_release("24w03a"))
    '1.20.5-alpha.24.3.a'

Notes
-----
- Parsing and comparison are pure; only lookup_version reads files
- All values are frozen dataclasses and safe to share between threads
"""

from .keys import (
    Ordering,
    compare_any,
    compare_versions,
    is_newer_any,
    version_key,
    version_key_any,
)
from .lookup import ArtifactVersion, LookupConfig, lookup_version, open_artifact
from .model import WILDCARD, SemanticVersion, StringVersion, Version
from .normalize import get_release, is_normalized, normalize_version
from .parser import parse_range_version, parse_semantic, parse_version

__all__ = [
    "WILDCARD",
    "ArtifactVersion",
    "LookupConfig",
    "Ordering",
    "SemanticVersion",
    "StringVersion",
    "Version",
    "compare_any",
    "compare_versions",
    "get_release",
    "is_newer_any",
    "is_normalized",
    "lookup_version",
    "normalize_version",
    "open_artifact",
    "parse_range_version",
    "parse_semantic",
    "parse_version",
    "version_key",
    "version_key_any",
]
