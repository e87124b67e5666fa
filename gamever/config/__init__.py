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

"""Configuration management for gamever.

This package loads the optional ``gamever.yaml`` file and merges it with the
built-in lookup defaults.

Public API:

- load_config: Load and merge configuration as a plain dict
- load_lookup_config: Load configuration as an immutable LookupConfig
- build_lookup_config: Convert a merged dict into a LookupConfig

Example:
    Basic usage:

        from pathlib import Path
        from gamever.config import load_lookup_config

        config = load_lookup_config(start_dir=Path("instances/1.20"))
        print(config.class_entries[0])

"""

from .loader import (
    DEFAULT_CONFIG,
    build_lookup_config,
    load_config,
    load_lookup_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "build_lookup_config",
    "load_config",
    "load_lookup_config",
]
