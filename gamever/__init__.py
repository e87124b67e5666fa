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

"""gamever - version parsing and lookup for game builds

A Python library and CLI for parsing, ordering and normalizing the versions
of packaged game builds (jar files or unpacked directories).

gamever provides:

- A version parser that never fails on content (semantic or opaque string)
- Strict and wildcard-range parsers for dependency declarations
- A total ordering with pre-release precedence (alpha < beta < rc)
- Normalization of snapshot, pre-release and legacy labels
- Multi-source artifact inspection (metadata, manifest, class constants)
- A diagnostic command that checks lookups over a directory of builds

Quick Start:
Check a directory of builds:

    $ gamever check versions/

Compare two versions:

    $ gamever compare 1.20.5-alpha.24.3.a 1.20.5-rc.1

For full CLI documentation:

    $ gamever --help

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Version parsing, ordering and lookup for game builds"

from gamever.config import load_lookup_config
from gamever.core import check_artifacts
from gamever.exceptions import (
    ArtifactUnreadable,
    ConfigError,
    GameverError,
    InvalidVersion,
)
from gamever.versioning import (
    compare_any,
    compare_versions,
    is_newer_any,
    lookup_version,
    normalize_version,
    parse_range_version,
    parse_semantic,
    parse_version,
)

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ArtifactUnreadable",
    "ConfigError",
    "GameverError",
    "InvalidVersion",
    "check_artifacts",
    "compare_any",
    "compare_versions",
    "is_newer_any",
    "load_lookup_config",
    "lookup_version",
    "normalize_version",
    "parse_range_version",
    "parse_semantic",
    "parse_version",
]
