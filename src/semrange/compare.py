# SPDX-License-Identifier: MIT
"""Version comparison following SemVer 2.0.0 precedence rules.

Pre-release ordering: numeric identifiers < text identifiers, and a release
has higher precedence than any of its pre-releases (1.0.0-rc.1 < 1.0.0).
Build metadata is ignored in comparisons.
"""

from __future__ import annotations

from typing import Union

from .semver import Version

VersionLike = Union[str, Version]


def _coerce(version: VersionLike) -> Version:
    if isinstance(version, Version):
        return version
    return Version.parse(version)


def compare_versions(version1: VersionLike, version2: VersionLike) -> int:
    """Compare two semantic versions.

    Args:
        version1: First version (string or Version object)
        version2: Second version (string or Version object)

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        ValidationError: If either version string is invalid

    Examples:
        >>> compare_versions("1.0.0", "2.0.0")
        -1
        >>> compare_versions("1.0.0+build.1", "1.0.0")
        0
        >>> compare_versions("1.0.0", "1.0.0-alpha")
        1
    """
    return _coerce(version1).compare(_coerce(version2))


def version_key(version: VersionLike) -> tuple:
    """Return a sort key for a version.

    The key orders versions exactly like :meth:`Version.compare`, so it can be
    used with ``sorted()`` on mixed lists of strings.

    Raises:
        ValidationError: If the version string is invalid

    Examples:
        >>> sorted(["1.0.0", "1.0.0-rc.1", "0.9.0"], key=version_key)
        ['0.9.0', '1.0.0-rc.1', '1.0.0']
    """
    v = _coerce(version)

    # A release sorts after all pre-releases. Numeric identifiers sort before
    # text ones; tuple comparison gives the longer pre-release precedence.
    if not v.prerelease:
        prerelease_key: tuple = (1,)
    else:
        parts = tuple(
            (0, identifier.value, "") if identifier.is_numeric else (1, 0, identifier.value)
            for identifier in v.prerelease
        )
        prerelease_key = (0, parts)

    return (v.major, v.minor, v.patch, prerelease_key)


def eq(v: Version, o: Version) -> bool:
    """Check if v is equal to o."""
    return v.compare(o) == 0


def ne(v: Version, o: Version) -> bool:
    """Check if v is not equal to o."""
    return v.compare(o) != 0


def gt(v: Version, o: Version) -> bool:
    """Check if v is greater than o."""
    return v.compare(o) > 0


def ge(v: Version, o: Version) -> bool:
    """Check if v is greater than or equal to o."""
    return v.compare(o) >= 0


def lt(v: Version, o: Version) -> bool:
    """Check if v is less than o."""
    return v.compare(o) < 0


def le(v: Version, o: Version) -> bool:
    """Check if v is less than or equal to o."""
    return v.compare(o) <= 0
