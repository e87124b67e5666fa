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

"""Normalization of raw game version labels.

Game builds carry labels that are not semantic versions: weekly snapshots
("24w03a"), pre-releases ("1.14 Pre-Release 2"), release candidates
("1.16-rc1"), old alpha/beta names ("b1.7.3"), indev/infdev dates and a
handful of one-off joke builds. This module rewrites them into the public
normalized grammar so that they sort correctly next to releases:

    version      := release ("-" prerelease)?
    release      := digits ("." digits){1,2}
    prerelease   := prekey "." prenum ("." prenum)? ("." preSuffix)?
    prekey       := "alpha" | "beta" | "rc"
    prenum       := "0" | [1-9][0-9]*
    preSuffix    := prenum | [a-z]

Mapping summary:

- Weekly snapshot "YYwWWx" -> "<release>-alpha.YY.WW.x", the release taken
  from a year/week range table (24w03a -> 1.20.5-alpha.24.3.a).
- "<release>-preN" / "<release> Pre-Release N" -> "<release>-rc.N" up to
  1.16, "<release>-beta.N" afterwards.
- "<release>-rcN" / "<release> Release Candidate N" -> "<release>-rc.N"
  (1.16 release candidates continue after its 8 pre-releases: rc.9, ...).
- "b1.x.y" / "Beta 1.x.y" -> "1.0.0-beta.x.y"; "a1.x.y" -> "1.0.0-alpha.x.y".
- "Infdev 20100618" / "inf-20100618" -> "0.31.20100618".
- "rd-132211" -> "0.0.0-rd.132211"; classic "c0.0.11a" -> "0.0.11.a".
- One-off builds come from SPECIAL_VERSIONS.

Labels that are not recognized at all are returned unchanged; callers flag
them by checking is_normalized().
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import re

from .parser import parse_version

# Public grammar of a normalized version (exact match)
NORMALIZED_VERSION_PATTERN = re.compile(
    r"(0|[1-9][0-9]*)"  # major
    r"\.(0|[1-9][0-9]*)"  # minor
    r"(\.(0|[1-9][0-9]*))?"  # patch
    r"(-(alpha|beta|rc)"  # alpha = snapshot or old alpha, beta = old beta or pre-release
    r"\.(0|[1-9][0-9]*)"  # snapshot year or pre-release number
    r"(\.(0|[1-9][0-9]*))?"  # snapshot week
    r"(\.(0|[1-9][0-9]*|[a-z]))?"  # snapshot letter or suffix
    r")?"
)

# Raw labels known to be game versions
_VERSION_PATTERN = re.compile(
    r"0\.\d+(\.\d+)?a?(_\d+)?"  # classic: 0.1.2a_34
    r"|\d+\.\d+(\.\d+)?(-pre\d+| Pre-[Rr]elease \d+)?"  # release, pre-release
    r"|\d+\.\d+(\.\d+)?(-rc\d+| [Rr]elease Candidate \d+)?"  # release candidate
    r"|\d+w\d+[a-z]"  # weekly snapshot: 12w34a
    r"|[a-c]\d\.\d+(\.\d+)?[a-z]?(_\d+)?[a-z]?"  # short alpha/beta/classic: a1.2.3_45
    r"|(Alpha|Beta) v?\d+\.\d+(\.\d+)?[a-z]?(_\d+)?[a-z]?"  # Alpha v1.2.3_45
    r"|Inf?dev (0\.31 )?\d+(-\d+)?"  # Infdev 12345678-9
    r"|(rd|inf?)-\d+"  # rd-132211, inf-20100618
    r"|1\.RV-Pre1|3D Shareware v1\.34|23w13a_or_b|24w14potato"
    r"|(.*[Ee]xperimental [Ss]napshot )(\d+)",
    re.ASCII,
)
_RELEASE_PATTERN = re.compile(r"\d+\.\d+(\.\d+)?", re.ASCII)
_PRE_RELEASE_PATTERN = re.compile(r".+(?:-pre| Pre-[Rr]elease )(\d+)", re.ASCII)
_RELEASE_CANDIDATE_PATTERN = re.compile(
    r".+(?:-rc| [Rr]elease Candidate )(\d+)", re.ASCII
)
_SNAPSHOT_PATTERN = re.compile(r"(?:Snapshot )?(\d+)w0?(0|[1-9]\d*)([a-z])", re.ASCII)
_EXPERIMENTAL_PATTERN = re.compile(r"(?:.*[Ee]xperimental [Ss]napshot )(\d+)", re.ASCII)
_BETA_PATTERN = re.compile(
    r"(?:b|Beta v?)1\.(\d+(\.\d+)?[a-z]?(_\d+)?[a-z]?)", re.ASCII
)
_ALPHA_PATTERN = re.compile(
    r"(?:a|Alpha v?)[01]\.(\d+(\.\d+)?[a-z]?(_\d+)?[a-z]?)", re.ASCII
)
_INDEV_PATTERN = re.compile(r"(?:inf?-|Inf?dev )(?:0\.31 )?(\d+(-\d+)?)", re.ASCII)
_SNAPSHOT_LABEL = re.compile(r"(\d+)w(\d+)", re.ASCII)

_PRE_RELEASE_MARKERS = (
    "-pre",
    " Pre-Release ",
    " Pre-release ",
    "-rc",
    " Release Candidate ",
    " Experimental Snapshot ",
    " experimental snapshot ",
)

# Pre-releases up to this release are numbered as release candidates
_LAST_RC_STYLE_PRE_RELEASE = parse_version("1.16")


@dataclass(frozen=True)
class SnapshotRange:
    """Weekly snapshots from ``first`` to ``last`` (inclusive) lead to ``release``.

    Attributes:
        first: (year, week) of the first snapshot, e.g. (23, 51).
        last: (year, week) of the last snapshot, e.g. (24, 14).
        release: Release the snapshots lead to, e.g. "1.20.5".

    """

    first: tuple[int, int]
    last: tuple[int, int]
    release: str

    def contains(self, year: int, week: int) -> bool:
        return self.first <= (year, week) <= self.last

    @classmethod
    def from_labels(cls, first: str, last: str, release: str) -> SnapshotRange:
        """Build a range from labels such as "23w51" and "24w14".

        Raises:
            ValueError: If a label is not of the form YYwWW.

        """
        bounds = []
        for label in (first, last):
            m = _SNAPSHOT_LABEL.fullmatch(label)
            if not m:
                raise ValueError(f"invalid snapshot label {label!r} (expected YYwWW)")
            bounds.append((int(m.group(1)), int(m.group(2))))
        return cls(first=bounds[0], last=bounds[1], release=release)


_R = SnapshotRange

# Newest first. Weeks are inclusive.
SNAPSHOT_RELEASES: tuple[SnapshotRange, ...] = (
    _R((25, 31), (25, 37), "1.21.9"),
    _R((25, 15), (25, 21), "1.21.6"),
    _R((24, 44), (25, 10), "1.21.5"),
    _R((24, 33), (24, 40), "1.21.2"),
    _R((24, 18), (24, 21), "1.21"),
    _R((23, 51), (24, 14), "1.20.5"),
    _R((23, 40), (23, 46), "1.20.3"),
    _R((23, 12), (23, 33), "1.20"),
    _R((22, 42), (22, 46), "1.19.3"),
    _R((22, 24), (22, 24), "1.19.1"),
    _R((22, 11), (22, 19), "1.19"),
    _R((22, 3), (22, 7), "1.18.2"),
    _R((21, 37), (21, 44), "1.18"),
    _R((20, 45), (21, 20), "1.17"),
    _R((20, 27), (20, 30), "1.16.2"),
    _R((20, 6), (20, 22), "1.16"),
    _R((19, 34), (19, 46), "1.15"),
    _R((18, 43), (19, 14), "1.14"),
    _R((18, 30), (18, 33), "1.13.1"),
    _R((17, 43), (18, 22), "1.13"),
    _R((17, 31), (17, 31), "1.12.1"),
    _R((17, 6), (17, 18), "1.12"),
    _R((16, 50), (16, 50), "1.11.1"),
    _R((16, 32), (16, 44), "1.11"),
    _R((16, 20), (16, 21), "1.10"),
    _R((16, 14), (16, 15), "1.9.3"),
    _R((15, 31), (16, 7), "1.9"),
    _R((14, 2), (14, 34), "1.8"),
    _R((13, 47), (13, 49), "1.7.4"),
    _R((13, 36), (13, 43), "1.7.2"),
    _R((13, 16), (13, 26), "1.6"),
    _R((13, 11), (13, 12), "1.5.1"),
    _R((13, 1), (13, 10), "1.5"),
    _R((12, 49), (12, 50), "1.4.6"),
    _R((12, 32), (12, 42), "1.4"),
    _R((12, 15), (12, 30), "1.3"),
    _R((12, 3), (12, 8), "1.2"),
    _R((11, 47), (12, 1), "1.1"),
)

del _R

# One-off builds that no rule covers, mapped verbatim
SPECIAL_VERSIONS: dict[str, str] = {
    "13w12~": "1.5.1-alpha.13.12.a",
    "15w14a": "1.10-alpha.15.14.a",
    "1.RV-Pre1": "1.9.2-rv+trendy",
    "3D Shareware v1.34": "1.14-alpha.19.13.shareware",
    "20w14infinite": "1.16-alpha.20.13.inf",
    "20w14∞": "1.16-alpha.20.13.inf",
    "22w13oneblockatatime": "1.19-alpha.22.13.oneblockatatime",
    "23w13a_or_b": "1.20-alpha.23.13.ab",
    "24w14potato": "1.21-alpha.24.13.potato",
    "1.14.3 - Combat Test": "1.14.3-rc.4.combat.1",
    "Combat Test 2": "1.14.5-combat.2",
    "Combat Test 3": "1.14.5-combat.3",
    "Combat Test 4": "1.15-rc.3.combat.4",
    "Combat Test 5": "1.15.2-rc.2.combat.5",
    "Combat Test 6": "1.16.2-beta.3.combat.6",
    "Combat Test 7": "1.16.3-combat.7",
    "1.16_combat-2": "1.16.3-combat.7.b",
    "1.16_combat-3": "1.16.3-combat.7.c",
    "1.16_combat-4": "1.16.3-combat.8",
    "1.16_combat-5": "1.16.3-combat.8.b",
    "1.16_combat-6": "1.16.3-combat.8.c",
    "2point0_red": "1.5.2-red",
    "2point0_purple": "1.5.2-purple",
    "2point0_blue": "1.5.2-blue",
}


def is_normalized(version: str) -> bool:
    """Return True if ``version`` matches the public normalized grammar."""
    return NORMALIZED_VERSION_PATTERN.fullmatch(version) is not None


def is_probable_version(version: str) -> bool:
    """Return True if ``version`` looks like a known game version label."""
    return _VERSION_PATTERN.fullmatch(version) is not None


def get_release(
    version: str, snapshot_releases: tuple[SnapshotRange, ...] = SNAPSHOT_RELEASES
) -> str | None:
    """Determine which release a raw version label belongs to.

    Args:
        version: Raw label, e.g. "1.14 Pre-Release 2" or "24w03a".
        snapshot_releases: Year/week ranges for weekly snapshots, newest first.

    Returns:
        The release (e.g. "1.14", "1.20.5"), the label itself when it is a
        plain release, or None when the label is unrecognized.

    """
    if _RELEASE_PATTERN.fullmatch(version):
        return version
    if not is_probable_version(version):
        return None

    for marker in _PRE_RELEASE_MARKERS:
        pos = version.find(marker)
        if pos > 0:
            return version[:pos]

    m = _SNAPSHOT_PATTERN.fullmatch(version)
    if m:
        year, week = int(m.group(1)), int(m.group(2))
        for snapshot_range in snapshot_releases:
            if snapshot_range.contains(year, week):
                return snapshot_range.release
    return None


def normalize_version(
    name: str,
    release: str | None = None,
    *,
    special_versions: Mapping[str, str] | None = None,
) -> str:
    """Rewrite a raw version label into the normalized grammar.

    Args:
        name: Raw label, e.g. "24w03a".
        release: Release the label belongs to (see get_release), or None.
        special_versions: One-off label mapping; defaults to SPECIAL_VERSIONS.

    Returns:
        The normalized version. Unrecognized labels come back unchanged, so
        the result may still fail is_normalized().

    """
    specials = SPECIAL_VERSIONS if special_versions is None else special_versions

    if not release or name == release:
        return _normalize_standalone(name, specials)

    m = _EXPERIMENTAL_PATTERN.fullmatch(name)
    if m:
        return f"{release}-Experimental.{m.group(1)}"

    if name.startswith(release):
        rc = _RELEASE_CANDIDATE_PATTERN.fullmatch(name)
        pre = _PRE_RELEASE_PATTERN.fullmatch(name)
        if rc:
            build = int(rc.group(1))
            if release == "1.16":
                build += 8
            suffix = f"rc.{build}"
        elif pre:
            legacy = parse_version(release) <= _LAST_RC_STYLE_PRE_RELEASE
            suffix = f"{'rc' if legacy else 'beta'}.{pre.group(1)}"
        else:
            special = specials.get(name)
            if special is not None:
                return special
            suffix = _normalize_legacy(name[len(release) :])
            if not suffix:
                return release
    else:
        snapshot = _SNAPSHOT_PATTERN.fullmatch(name)
        if snapshot:
            year, week, letter = snapshot.groups()
            suffix = f"alpha.{year}.{week}.{letter}"
        else:
            special = specials.get(name)
            if special is not None:
                return special
            suffix = _normalize_legacy(name)

    return f"{release}-{suffix}"


def _normalize_standalone(name: str, specials: Mapping[str, str]) -> str:
    special = specials.get(name)
    if special is not None:
        return special
    if is_normalized(name) or not is_probable_version(name):
        return name
    return _normalize_legacy(name)


def _normalize_legacy(version: str) -> str:
    """Apply the old-era rewrites, then clean up separators.

    Separator rules: keep "." and "-", turn any other non-alphanumeric into
    ".", insert "." between digits and letters, drop leading zeros of numbers
    and collapse repeated separators.
    """
    beta = _BETA_PATTERN.fullmatch(version)
    alpha = _ALPHA_PATTERN.fullmatch(version)
    indev = _INDEV_PATTERN.fullmatch(version)
    if beta:
        version = "1.0.0-beta." + beta.group(1)
    elif alpha:
        version = "1.0.0-alpha." + alpha.group(1)
    elif indev:
        version = "0.31." + indev.group(1)
    elif version.startswith("c0."):
        version = version[1:]
    elif version.startswith("rd-"):
        version = version[len("rd-") :]
        if version == "20090515":
            # the one pre-classic build dated instead of timed
            version = "150000"
        version = "0.0.0-rd." + version

    out: list[str] = []
    last_is_digit = False
    last_is_leading_zero = False
    last_is_separator = False

    for i, c in enumerate(version):
        if "0" <= c <= "9":
            if i > 0 and not last_is_digit and not last_is_separator:
                out.append(".")
            elif last_is_digit and last_is_leading_zero:
                out.pop()
            last_is_leading_zero = c == "0" and (
                not last_is_digit or last_is_leading_zero
            )
            last_is_separator = False
            last_is_digit = True
        elif c in ".-":
            if last_is_separator:
                continue
            last_is_separator = True
            last_is_digit = False
        elif not ("A" <= c <= "Z" or "a" <= c <= "z"):
            if last_is_separator:
                continue
            c = "."
            last_is_separator = True
            last_is_digit = False
        else:
            if last_is_digit:
                out.append(".")
            last_is_separator = False
            last_is_digit = False
        out.append(c)

    return "".join(out).strip(".")
