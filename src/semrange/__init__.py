# SPDX-License-Identifier: MIT
"""Semantic version parsing, comparison and range matching.

This package parses and orders versions following the SemVer 2.0.0
specification and matches them against range expressions.

Example:
    >>> from semrange import parse_version, parse_range, compare_versions
    >>>
    >>> version = parse_version("1.2.3-alpha.1+build.456")
    >>> version.major
    1
    >>> str(version.prerelease)
    'alpha.1'
    >>>
    >>> compare_versions("1.0.0", "1.0.0-rc.1")
    1
    >>>
    >>> supported = parse_range(">=1.2.0 <2.0.0 || 3.x")
    >>> supported("2.0.0"), supported("3.4.0")
    (False, True)
"""

__version__ = "0.1.0"

from .errors import ValidationError
from .identifier import (
    MAX_UINT64,
    Identifier,
    Identifiers,
    new_identifier,
)
from .semver import (
    Version,
    parse_version,
    must_parse_version,
    is_valid_semver,
    spec_version,
)
from .compare import (
    compare_versions,
    version_key,
)
from .ranges import (
    Operator,
    Range,
    VersionRange,
    parse_range,
    must_parse_range,
)

__all__ = [
    # Errors
    "ValidationError",
    # Identifiers
    "MAX_UINT64",
    "Identifier",
    "Identifiers",
    "new_identifier",
    # Version parsing
    "Version",
    "parse_version",
    "must_parse_version",
    "is_valid_semver",
    "spec_version",
    # Version comparison
    "compare_versions",
    "version_key",
    # Ranges
    "Operator",
    "Range",
    "VersionRange",
    "parse_range",
    "must_parse_range",
]
