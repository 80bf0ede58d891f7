# SPDX-License-Identifier: MIT
"""Semantic version parsing.

Supports the SemVer 2.0.0 grammar MAJOR.MINOR.PATCH with optional pre-release
and build metadata:
- Pre-release: -alpha, -alpha.1, -0.3.7, -x.7.z.92
- Build metadata: +build, +build.123, +20240101, +001
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any

from .errors import ValidationError
from .identifier import (
    MAX_UINT64,
    Identifiers,
    has_leading_zero,
    new_identifier,
    parse_uint64,
)

VERSION_COMPONENTS = 3


def _parse_number(s: str, what: str) -> int:
    if has_leading_zero(s):
        raise ValidationError(f"{what} must not contain leading zeroes {s!r}", s)
    return parse_uint64(s, what)


def _check_component(value: Any, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{what} must be an int, got {type(value).__name__}")
    if not 0 <= value <= MAX_UINT64:
        raise ValidationError(f"{what} {value} is outside the 64-bit unsigned range")


def _split(version_string: str) -> tuple[int, int, int, Identifiers, Identifiers]:
    """Split and validate a version string into its five fields."""
    if not isinstance(version_string, str):
        raise ValidationError(
            f"Version must be a string, got {type(version_string).__name__}"
        )
    if not version_string:
        raise ValidationError("version string empty", version_string)

    parts = version_string.split(".", VERSION_COMPONENTS - 1)
    if len(parts) != VERSION_COMPONENTS:
        raise ValidationError(
            f"no Major.Minor.Patch elements found in {version_string!r}", version_string
        )

    major = _parse_number(parts[0], "major number")
    minor = _parse_number(parts[1], "minor number")

    # Build metadata is cut first so a '-' inside it is never read as a
    # pre-release separator.
    patch_str = parts[2]
    build_str = prerelease_str = None
    patch_str, plus, rest = patch_str.partition("+")
    if plus:
        build_str = rest
    patch_str, dash, rest = patch_str.partition("-")
    if dash:
        prerelease_str = rest

    patch = _parse_number(patch_str, "patch number")

    # A bare "-" or "+" still introduces a field, whose empty token is rejected.
    prerelease = Identifiers()
    if prerelease_str is not None:
        prerelease = Identifiers(
            new_identifier(s, strict=True) for s in prerelease_str.split(".")
        )

    build = Identifiers()
    if build_str is not None:
        build = Identifiers(new_identifier(s, strict=False) for s in build_str.split("."))

    return major, minor, patch, prerelease, build


@functools.total_ordering
@dataclass(eq=False, slots=True)
class Version:
    """Represents a parsed semantic version.

    Attributes:
        major: Major version number (breaking changes)
        minor: Minor version number (new features, backward compatible)
        patch: Patch version number (bug fixes, backward compatible)
        prerelease: Pre-release identifiers (e.g., alpha.1, rc.2)
        build: Build metadata identifiers (e.g., build.123, 20240101)

    Build metadata is ignored by ``==``, ordering and ``hash``.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: Identifiers = field(default_factory=Identifiers)
    build: Identifiers = field(default_factory=Identifiers)

    def __post_init__(self) -> None:
        _check_component(self.major, "major number")
        _check_component(self.minor, "minor number")
        _check_component(self.patch, "patch number")
        if not isinstance(self.prerelease, Identifiers):
            self.prerelease = Identifiers(self.prerelease)
        if not isinstance(self.build, Identifiers):
            self.build = Identifiers(self.build)

    @classmethod
    def parse(cls, version_string: str) -> Version:
        """Parse a version string, raising ValidationError if it is invalid."""
        major, minor, patch, prerelease, build = _split(version_string)
        return cls(major, minor, patch, prerelease, build)

    def set(self, version_string: str) -> None:
        """Parse version_string into this instance.

        The instance is left untouched if parsing fails.
        """
        major, minor, patch, prerelease, build = _split(version_string)
        self.major = major
        self.minor = minor
        self.patch = patch
        self.prerelease = prerelease
        self.build = build

    def compare(self, other: Version) -> int:
        """Compare precedence with other, returning -1, 0 or 1."""
        for mine, theirs in (
            (self.major, other.major),
            (self.minor, other.minor),
            (self.patch, other.patch),
        ):
            if mine != theirs:
                return 1 if mine > theirs else -1
        return self.prerelease.compare(other.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, tuple(self.prerelease)))

    def increment_major(self) -> Version:
        """Return the next major version, with every other field at its default."""
        return Version(self._bump(self.major, "major number"))

    def increment_minor(self) -> Version:
        """Return the next minor version, with patch at its default."""
        return Version(self.major, self._bump(self.minor, "minor number"))

    def increment_patch(self) -> Version:
        """Return the next patch version without pre-release or build metadata."""
        return Version(self.major, self.minor, self._bump(self.patch, "patch number"))

    @staticmethod
    def _bump(n: int, what: str) -> int:
        if n >= MAX_UINT64:
            raise ValidationError(f"cannot increment {what} {n} past the 64-bit unsigned range")
        return n + 1

    def compatible_under(self, other: Version) -> bool:
        """Return True if this version can be used where other is the floor.

        Both must share a major version and this minor must not be newer.
        """
        return self.major == other.major and self.minor <= other.minor

    def clone(self) -> Version:
        """Return a copy with independent identifier sequences."""
        return Version(
            self.major,
            self.minor,
            self.patch,
            self.prerelease.clone(),
            self.build.clone(),
        )

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version

    @property
    def is_prerelease(self) -> bool:
        """Return True if this is a pre-release version."""
        return bool(self.prerelease)

    @property
    def base_version(self) -> str:
        """Return the base version without pre-release or build metadata."""
        return f"{self.major}.{self.minor}.{self.patch}"


def spec_version() -> Version:
    """Return the latest fully supported SemVer specification version."""
    return Version(2, 0, 0)


def parse_version(version_string: str) -> Version:
    """Parse a semantic version string into a Version object.

    Args:
        version_string: A string following semantic versioning format
            (MAJOR.MINOR.PATCH[-prerelease][+build])

    Returns:
        A Version object with parsed components

    Raises:
        ValidationError: If the string does not follow semantic versioning

    Examples:
        >>> str(parse_version("1.0.0-alpha.1"))
        '1.0.0-alpha.1'

        >>> parse_version("2.0.0-rc.1+build.456").build
        Identifiers('build.456')
    """
    return Version.parse(version_string)


def must_parse_version(version_string: str) -> Version:
    """Parse a version literal, raising RuntimeError if it is invalid.

    Only use this for literals known to be valid; user input belongs in
    :func:`parse_version`.
    """
    try:
        return Version.parse(version_string)
    except ValidationError as e:
        raise RuntimeError(f"invalid version literal {version_string!r}: {e}") from e


def is_valid_semver(version_string: str) -> bool:
    """Check if a string is a valid semantic version.

    Examples:
        >>> is_valid_semver("1.0.0")
        True
        >>> is_valid_semver("1.0")
        False
        >>> is_valid_semver("1.0.0-alpha")
        True
    """
    try:
        _split(version_string)
    except ValidationError:
        return False
    return True
