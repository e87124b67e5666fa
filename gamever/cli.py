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

"""Command-line interface for gamever.

This module provides the main CLI entry point for the gamever tool, offering
commands to check artifact version lookups and to inspect version strings.

Commands:

    check: Look up every artifact under a path and report invalid versions
    lookup: Show the full lookup result for a single artifact
    parse: Parse a version string and show its structure
    compare: Compare two version strings

Example:
    Check a directory of game builds:
        ```bash
        $ gamever check versions/
        ```

    Show where a build's version came from:
        ```bash
        $ gamever lookup versions/24w03a.jar --verbose
        ```

    Compare two versions:
        ```bash
        $ gamever compare 1.0.0-beta.2 1.0.0-rc.1
        1.0.0-beta.2 < 1.0.0-rc.1
        ```

Exit Codes:

- 0: Success (check always succeeds once it has run; invalid results are
  reported, not fatal)
- 1: Error (configuration, missing path, or invalid version string)

Note:
    Each command has its own handler function (cmd_<command>).
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode.

"""

from __future__ import annotations

import argparse
from importlib.metadata import version
from pathlib import Path
import sys

from gamever.config import load_lookup_config
from gamever.core import check_artifacts
from gamever.exceptions import ArtifactUnreadable, ConfigError, InvalidVersion
from gamever.logging import get_logger, set_global_logger
from gamever.versioning import (
    LookupConfig,
    SemanticVersion,
    compare_versions,
    lookup_version,
    parse_semantic,
    parse_version,
)


def _print_traceback(args: argparse.Namespace) -> None:
    if getattr(args, "verbose", False) or getattr(args, "debug", False):
        import traceback

        traceback.print_exc()


def _lookup_config_for(args: argparse.Namespace, path: Path) -> LookupConfig:
    if args.config:
        return load_lookup_config(Path(args.config).resolve())
    start_dir = path if path.is_dir() else path.parent
    return load_lookup_config(start_dir=start_dir)


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'gamever check' command.

    Looks up the version of a single artifact, or of every jar below a
    directory, and reports each normalized version together with the raw
    evidence. Results that do not match the normalized grammar are listed
    again at the end.

    Args:
        args: Parsed command-line arguments containing the path, optional
            config file, and verbosity flags.

    Returns:
        Exit code (0 once the check ran, 1 for a missing path or a
        configuration error).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    path = Path(args.path).resolve()
    if not path.exists():
        print(f"Error: Path not found: {path}")
        return 1

    try:
        config = _lookup_config_for(args, path)
    except ConfigError as err:
        print(f"Error: {err}")
        _print_traceback(args)
        return 1

    report = check_artifacts(path, config, logger)

    for result in report.results:
        print(result.line)
        if not result.valid:
            print("** invalid!")

    print()
    if not report.invalid:
        print("All passed!")
    else:
        print("Invalid:")
        for result in report.invalid:
            print(result.line)
        print(f"{report.failed} invalid results")

    return 0


def cmd_lookup(args: argparse.Namespace) -> int:
    """Handler for 'gamever lookup' command.

    Args:
        args: Parsed command-line arguments containing the artifact path,
            optional config file, optional known version name, and flags.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    path = Path(args.artifact).resolve()
    if not path.exists():
        print(f"Error: Artifact not found: {path}")
        return 1

    try:
        config = _lookup_config_for(args, path)
        result = lookup_version(
            path, config, version_name=args.version_name, logger=logger
        )
    except (ConfigError, ArtifactUnreadable) as err:
        print(f"Error: {err}")
        _print_traceback(args)
        return 1

    print("=" * 70)
    print("LOOKUP RESULTS")
    print("=" * 70)
    print(f"Artifact:        {path.name}")
    print(f"Raw Version:     {result.raw}")
    print(f"Normalized:      {result.normalized}")
    print(f"Release:         {result.release}")
    print(f"Version Source:  {result.source}")
    print(f"Declared ID:     {result.id}")
    print(f"Declared Name:   {result.name}")
    print(f"Class Version:   {result.class_version}")
    print(f"Status:          {'valid' if result.is_normalized else 'invalid'}")
    print("=" * 70)

    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    """Handler for 'gamever parse' command.

    Args:
        args: Parsed command-line arguments containing the version string
            and the strict flag.

    Returns:
        Exit code (0 for success, 1 if the string is not a valid version).

    """
    try:
        if args.strict:
            parsed = parse_semantic(args.version)
        else:
            parsed = parse_version(args.version)
    except InvalidVersion as err:
        print(f"Error: {err}")
        return 1

    if isinstance(parsed, SemanticVersion):
        print("Kind:        semantic")
        print(f"Version:     {parsed}")
        print(f"Components:  {'.'.join(str(c) for c in parsed.components)}")
        print(f"Pre-release: {parsed.prerelease or '-'}")
        print(f"Build:       {parsed.build or '-'}")
    else:
        print("Kind:        string")
        print(f"Version:     {parsed}")
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'gamever compare' command.

    Args:
        args: Parsed command-line arguments containing both version strings.

    Returns:
        Exit code (0 for success, 1 if either string is empty).

    """
    try:
        first = parse_version(args.first)
        second = parse_version(args.second)
    except InvalidVersion as err:
        print(f"Error: {err}")
        return 1

    symbol = {-1: "<", 0: "==", 1: ">"}[int(compare_versions(first, second))]
    print(f"{args.first} {symbol} {args.second}")
    return 0


def _add_verbosity(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def main() -> None:
    """Main entry point for the gamever CLI.

    This function is registered as the 'gamever' console script in pyproject.toml.
    """
    parser = argparse.ArgumentParser(
        prog="gamever",
        description="gamever - version lookup and comparison for game builds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"gamever {version('gamever')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Check version lookup for an artifact or a directory of jars",
        description="Look up every artifact and report versions that do not match the normalized grammar.",
    )
    parser_check.add_argument(
        "path",
        help="Path to a jar file or a directory searched recursively for jars",
    )
    parser_check.add_argument(
        "--config",
        default=None,
        help="Configuration file (default: gamever.yaml found upward from path)",
    )
    _add_verbosity(parser_check)
    parser_check.set_defaults(func=cmd_check)

    # 'lookup' command
    parser_lookup = subparsers.add_parser(
        "lookup",
        help="Show the lookup result for a single artifact",
        description="Inspect one artifact and show the raw label, normalized version and evidence.",
    )
    parser_lookup.add_argument(
        "artifact",
        help="Path to a jar file or an unpacked directory",
    )
    parser_lookup.add_argument(
        "--config",
        default=None,
        help="Configuration file (default: gamever.yaml found upward from artifact)",
    )
    parser_lookup.add_argument(
        "--version-name",
        default=None,
        help="Known raw version label; skips label detection",
    )
    _add_verbosity(parser_lookup)
    parser_lookup.set_defaults(func=cmd_lookup)

    # 'parse' command
    parser_parse = subparsers.add_parser(
        "parse",
        help="Parse a version string",
        description="Parse a version string and show its components.",
    )
    parser_parse.add_argument("version", help="Version string to parse")
    parser_parse.add_argument(
        "--strict",
        action="store_true",
        help="Reject strings that are not semantic versions",
    )
    parser_parse.set_defaults(func=cmd_parse)

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        help="Compare two version strings",
        description="Compare two version strings using the version ordering.",
    )
    parser_compare.add_argument("first", help="First version")
    parser_compare.add_argument("second", help="Second version")
    parser_compare.set_defaults(func=cmd_compare)

    # Parse and dispatch
    args = parser.parse_args()

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
