"""
PolicyKit Policy - Versioning
=============================
Dotted numeric versions used to date policies.

Accepted forms: "3", "3.1", "3.1.4". Missing trailing components are
zero, so "3" == "3.0" == "3.0.0". Comparison is component-wise on
integers, never lexicographic: "2.9" < "2.10".

Pure functions. No state.
"""

from __future__ import annotations

import re
from typing import Tuple

from policykit.policy.exceptions import InvalidVersionError


# ══════════════════════════════════════════════════════════════
# VERSION PATTERN
# ══════════════════════════════════════════════════════════════

VERSION_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+){0,2}")
VERSION_COMPONENTS = 3

VersionTuple = Tuple[int, int, int]


def parse_version(version: str) -> VersionTuple:
    """
    Parse a dotted version into a (major, minor, patch) tuple.

    Raises:
        InvalidVersionError: empty, non-numeric, signed, padded with
            whitespace, or more than three components.
    """
    if not isinstance(version, str) or not version:
        raise InvalidVersionError(version, "expected non-empty string")

    if not VERSION_PATTERN.fullmatch(version):
        if version.count(".") >= VERSION_COMPONENTS:
            raise InvalidVersionError(
                version, f"at most {VERSION_COMPONENTS} components"
            )
        raise InvalidVersionError(version, "components must be numeric")

    parts = [int(p) for p in version.split(".")]
    parts.extend([0] * (VERSION_COMPONENTS - len(parts)))
    return parts[0], parts[1], parts[2]


def compare_versions(a: str, b: str) -> int:
    """Return -1, 0 or 1 as a is lower than, equal to or higher than b."""
    left = parse_version(a)
    right = parse_version(b)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def compare_gte(a: str, b: str) -> bool:
    """True iff version a >= version b."""
    return parse_version(a) >= parse_version(b)
