# SPDX-License-Identifier: MIT
"""Version range expressions.

A range is a set of constraints combined with AND (whitespace) and OR
(``||``)::

    >=1.2.0 <2.0.0 || >=3.0.1 !=3.0.3

Each constraint is an optional comparator followed by a version. The
comparators are ``>``, ``>=``, ``<``, ``<=``, ``=``, ``==``, ``!=`` and ``!``;
no comparator means ``=``. The minor or patch component may be a wildcard
(``x``, ``X`` or ``*``), which expands to a pair of bounds::

    1.x    ->  >=1.0.0 <2.0.0
    1.2.x  ->  >=1.2.0 <1.3.0

A bare ``x`` matches every version.

Parsing produces a :class:`Range`, a reusable predicate over versions::

    >>> r = parse_range(">1.2.2 <1.2.4 || >=2.0.0")
    >>> r("1.2.3"), r("1.2.4"), r("2.1.0")
    (True, False, True)
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Sequence, Union

from . import compare
from .errors import ValidationError
from .identifier import MAX_UINT64, NUMBERS, contains_only, parse_uint64
from .semver import Version

logger = logging.getLogger(__name__)

OR_TOKEN = "||"
WILDCARDS = frozenset({"x", "X", "*"})
COMPARATOR_CHARS = frozenset("<>=!")

Predicate = Callable[[Version], bool]


class Operator(enum.Enum):
    """Comparison applied by a single range constraint."""

    EQ = "="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="

    @property
    def func(self) -> Callable[[Version, Version], bool]:
        return _OPERATOR_FUNCS[self]


_OPERATOR_FUNCS: dict[Operator, Callable[[Version, Version], bool]] = {
    Operator.EQ: compare.eq,
    Operator.NE: compare.ne,
    Operator.GT: compare.gt,
    Operator.GE: compare.ge,
    Operator.LT: compare.lt,
    Operator.LE: compare.le,
}

# Every accepted spelling of a comparator
OPERATORS: dict[str, Operator] = {
    "": Operator.EQ,
    "=": Operator.EQ,
    "==": Operator.EQ,
    "!=": Operator.NE,
    "!": Operator.NE,
    ">": Operator.GT,
    ">=": Operator.GE,
    "<": Operator.LT,
    "<=": Operator.LE,
}


class WildcardType(enum.IntEnum):
    """Position of the wildcard in a range operand."""

    NONE = 0
    MAJOR = 1  # x
    MINOR = 2  # 1.x
    PATCH = 3  # 1.2.x


def parse_operator(token: str) -> Operator:
    """Look up a comparator spelling.

    Raises:
        ValidationError: If token is not a known comparator
    """
    try:
        return OPERATORS[token]
    except KeyError:
        raise ValidationError(f"invalid comparator {token!r}", token) from None


@dataclass(frozen=True)
class VersionRange:
    """A single constraint such as ``>=1.2.0``."""

    operator: Operator
    version: Version

    def matches(self, version: Version) -> bool:
        return self.operator.func(version, self.version)

    def __str__(self) -> str:
        return f"{self.operator.value}{self.version}"


class Range:
    """A reusable predicate over versions.

    Ranges are built by :func:`parse_range` or by wrapping any callable that
    takes a Version and returns a bool. Two ranges combine with ``&`` (both
    must hold) and ``|`` (either holds)::

        >>> wide = parse_range(">=1.0.0") & parse_range("<3.0.0")
        >>> wide("2.5.0")
        True
    """

    __slots__ = ("_predicate",)

    def __init__(self, predicate: Predicate):
        self._predicate = predicate

    def __call__(self, version: Union[Version, str]) -> bool:
        if not isinstance(version, Version):
            version = Version.parse(version)
        return self._predicate(version)

    def and_(self, other: Predicate) -> Range:
        """Return a range satisfied when both self and other are."""
        return Range(lambda v: self._predicate(v) and other(v))

    def or_(self, other: Predicate) -> Range:
        """Return a range satisfied when self or other is."""
        return Range(lambda v: self._predicate(v) or other(v))

    __and__ = and_
    __or__ = or_


def split_and_trim(text: str) -> list[str]:
    """Split a range expression into constraint and ``||`` tokens.

    Whitespace between a comparator and its version is dropped, so
    ``">=  1.2.3"`` becomes the single token ``">=1.2.3"``.

    Raises:
        ValidationError: If a comparator is not followed by a version
    """
    tokens: list[str] = []
    pending = ""
    for token in text.replace(OR_TOKEN, f" {OR_TOKEN} ").split():
        if pending:
            if token == OR_TOKEN:
                raise ValidationError(f"comparator {pending!r} has no version", pending)
            tokens.append(pending + token)
            pending = ""
        elif contains_only(token, COMPARATOR_CHARS):
            pending = token
        else:
            tokens.append(token)
    if pending:
        raise ValidationError(f"comparator {pending!r} has no version", pending)
    return tokens


def split_or_parts(tokens: Sequence[str]) -> list[list[str]]:
    """Group tokens into AND-groups separated by ``||``.

    Raises:
        ValidationError: If the expression is empty or a ``||`` has no
            constraint on one of its sides
    """
    if not tokens:
        raise ValidationError("range expression is empty", "")

    groups: list[list[str]] = [[]]
    for token in tokens:
        if token == OR_TOKEN:
            if not groups[-1]:
                raise ValidationError(f"{OR_TOKEN!r} has no constraint before it", OR_TOKEN)
            groups.append([])
        else:
            groups[-1].append(token)
    if not groups[-1]:
        raise ValidationError(f"{OR_TOKEN!r} has no constraint after it", OR_TOKEN)
    return groups


def split_comparator_version(term: str) -> tuple[Operator, str]:
    """Split a constraint into its operator and version operand.

    Raises:
        ValidationError: If the comparator is unknown or no version follows it
    """
    i = 0
    while i < len(term) and term[i] in COMPARATOR_CHARS:
        i += 1
    prefix, operand = term[:i], term[i:]
    if not operand or not (operand[0] in NUMBERS or operand[0] in WILDCARDS):
        raise ValidationError(f"could not get version from {term!r}", term)
    return parse_operator(prefix), operand


def wildcard_type(operand: str) -> WildcardType:
    """Classify where a wildcard appears in a range operand.

    Raises:
        ValidationError: If a wildcard is in a position that cannot be expanded
    """
    # Identifiers named "x" in a pre-release or build suffix are not wildcards.
    core = operand.split("+", 1)[0].split("-", 1)[0]
    parts = core.split(".")
    if not any(part in WILDCARDS for part in parts):
        return WildcardType.NONE
    if (
        core != operand
        or parts[-1] not in WILDCARDS
        or len(parts) > WildcardType.PATCH
        or not all(part and contains_only(part, NUMBERS) for part in parts[:-1])
    ):
        raise ValidationError(f"invalid wildcard version {operand!r}", operand)
    return WildcardType(len(parts))


def _increment(component: str) -> int:
    n = parse_uint64(component, "wildcard version component")
    if n >= MAX_UINT64:
        raise ValidationError(f"cannot increment wildcard component {component!r}", component)
    return n + 1


def expand_wildcard(operator: Operator, operand: str) -> list[tuple[Operator, str]]:
    """Rewrite a wildcard constraint into concrete constraints.

    A constraint without a wildcard is returned unchanged; a bare ``x``
    expands to nothing.
    """
    kind = wildcard_type(operand)
    if kind is WildcardType.NONE:
        return [(operator, operand)]
    if kind is WildcardType.MAJOR:
        return []

    prefix = operand.split(".")[:-1]
    if kind is WildcardType.MINOR:
        base = f"{prefix[0]}.0.0"
        ceiling = f"{_increment(prefix[0])}.0.0"
    else:
        base = f"{prefix[0]}.{prefix[1]}.0"
        ceiling = f"{prefix[0]}.{_increment(prefix[1])}.0"

    if operator is Operator.EQ:
        return [(Operator.GE, base), (Operator.LT, ceiling)]
    if operator is Operator.GE:
        return [(Operator.GE, base)]
    if operator is Operator.LE:
        return [(Operator.LT, ceiling)]
    if operator is Operator.GT:
        return [(Operator.GE, ceiling)]
    if operator is Operator.LT:
        return [(Operator.LT, base)]
    # Both bounds land in the same AND-group.
    return [(Operator.LT, base), (Operator.GE, ceiling)]


def build_version_range(operator: Operator, operand: str, term: str = "") -> VersionRange:
    """Parse the version of a single constraint.

    Raises:
        ValidationError: If operand is not a valid version
    """
    try:
        version = Version.parse(operand)
    except ValidationError as e:
        token = term or operand
        raise ValidationError(f"invalid version in constraint {token!r}: {e.message}", token) from e
    return VersionRange(operator, version)


def _matches_all(group: tuple[VersionRange, ...], version: Version) -> bool:
    return all(constraint.matches(version) for constraint in group)


def parse_range(text: str) -> Range:
    """Parse a range expression into a Range predicate.

    Args:
        text: Constraints separated by whitespace (AND) and ``||`` (OR)

    Returns:
        A Range that can be called with a Version or version string

    Raises:
        ValidationError: If any part of the expression is invalid; there is no
            partial result

    Examples:
        >>> r = parse_range("1.x || >=2.0.x <2.2.x")
        >>> [r(v) for v in ("0.9.2", "1.2.2", "2.1.8", "2.2.0")]
        [False, True, True, False]
    """
    if not isinstance(text, str):
        raise ValidationError(f"Range must be a string, got {type(text).__name__}")

    tokens = split_and_trim(text)
    logger.debug("range %r tokens: %s", text, tokens)

    or_set: list[tuple[VersionRange, ...]] = []
    for group in split_or_parts(tokens):
        and_group: list[VersionRange] = []
        for term in group:
            operator, operand = split_comparator_version(term)
            for expanded_operator, expanded_operand in expand_wildcard(operator, operand):
                and_group.append(build_version_range(expanded_operator, expanded_operand, term))
        or_set.append(tuple(and_group))

    logger.debug(
        "range %r expanded to: %s",
        text,
        " || ".join(" ".join(str(c) for c in group) or "*" for group in or_set),
    )

    groups = tuple(or_set)
    return Range(lambda v: any(_matches_all(group, v) for group in groups))


def must_parse_range(text: str) -> Range:
    """Parse a range literal, raising RuntimeError if it is invalid.

    Only use this for literals known to be valid; user input belongs in
    :func:`parse_range`.
    """
    try:
        return parse_range(text)
    except ValidationError as e:
        raise RuntimeError(f"invalid range literal {text!r}: {e}") from e
