# SPDX-License-Identifier: MIT
"""Pre-release and build metadata identifiers.

An identifier is one dot-separated token of a pre-release or build metadata
field. It is either numeric (an unsigned 64-bit integer) or text (ASCII
letters, digits and hyphens).

:class:`Identifiers` holds the ordered tokens of one field. Besides precedence
comparison it offers a small key/value view that reads the sequence as
``key.value.key.value...`` pairs, e.g. ``build.42.sha.abc``.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .errors import ValidationError

MAX_UINT64 = 2**64 - 1

NUMBERS = frozenset("0123456789")
ALPHANUM = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-") | NUMBERS


def contains_only(s: str, allowed: frozenset[str]) -> bool:
    """Return True if every character of s is in allowed."""
    return all(c in allowed for c in s)


def has_leading_zero(s: str) -> bool:
    """Return True for digit strings such as ``"01"`` (but not ``"0"``)."""
    return len(s) > 1 and s[0] == "0"


def parse_uint64(s: str, what: str) -> int:
    """Parse a digits-only string as an unsigned 64-bit integer."""
    if not s:
        raise ValidationError(f"{what} is empty", s)
    if not contains_only(s, NUMBERS):
        raise ValidationError(f"invalid character found in {what} {s!r}", s)
    n = int(s)
    if n > MAX_UINT64:
        raise ValidationError(f"{what} {s!r} overflows a 64-bit unsigned integer", s)
    return n


@functools.total_ordering
@dataclass(frozen=True, slots=True, eq=True)
class Identifier:
    """A single pre-release or build metadata identifier.

    Attributes:
        value: int for numeric identifiers, str for text identifiers
    """

    value: Union[int, str]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise ValidationError(f"invalid identifier value {self.value!r}")
        if isinstance(self.value, int):
            if not 0 <= self.value <= MAX_UINT64:
                raise ValidationError(
                    f"numeric identifier {self.value} is outside the 64-bit unsigned range"
                )
        elif isinstance(self.value, str):
            if not self.value:
                raise ValidationError("identifier is empty", self.value)
            if not contains_only(self.value, ALPHANUM):
                raise ValidationError(
                    f"invalid character found in identifier {self.value!r}", self.value
                )
        else:
            raise ValidationError(
                f"identifier must be int or str, got {type(self.value).__name__}"
            )

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, int)

    def compare(self, other: Identifier) -> int:
        """Compare two identifiers, returning -1, 0 or 1.

        Numeric identifiers always have lower precedence than text ones.
        Numeric identifiers compare by value, text ones in ASCII order.
        """
        if self.is_numeric and not other.is_numeric:
            return -1
        if not self.is_numeric and other.is_numeric:
            return 1
        if self.value == other.value:
            return 0
        return 1 if self.value > other.value else -1  # type: ignore[operator]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        return str(self.value)


def new_identifier(token: str, strict: bool = True) -> Identifier:
    """Create a validated Identifier from a token.

    Args:
        token: A single dot-free token
        strict: True for pre-release identifiers, which must not carry
            leading zeroes. Build metadata is parsed with strict=False, where
            ``"01"`` is kept as a text identifier.

    Raises:
        ValidationError: If the token is empty, has a forbidden leading zero,
            overflows 64 bits or contains an invalid character
    """
    if not token:
        raise ValidationError("identifier is empty", token)

    if contains_only(token, NUMBERS):
        if has_leading_zero(token):
            if strict:
                raise ValidationError(
                    f"numeric identifier must not have leading zero {token!r}", token
                )
            return Identifier(token)
        return Identifier(parse_uint64(token, "numeric identifier"))

    if contains_only(token, ALPHANUM):
        return Identifier(token)

    raise ValidationError(f"invalid character in identifier {token!r}", token)


class Identifiers(list):
    """Ordered identifiers of a pre-release or build metadata field.

    The key/value methods read the sequence as pairs: a text identifier at an
    even index is a key and the identifier after it is its value. A key at
    the last index has no value and is treated as absent.
    """

    def __init__(self, items: Iterable[Identifier] = ()):
        super().__init__(items)

    @classmethod
    def parse(cls, text: str, strict: bool = True) -> Identifiers:
        """Parse a dot-separated field such as ``"alpha.1"``."""
        if not text:
            return cls()
        return cls(new_identifier(token, strict) for token in text.split("."))

    def compare(self, other: Identifiers) -> int:
        """Compare precedence, returning -1, 0 or 1.

        An empty sequence is greater than any non-empty one, since a release
        outranks its pre-releases. Otherwise identifiers are compared left to
        right and, if all shared ones are equal, the longer sequence wins.
        """
        if not self and not other:
            return 0
        if not self:
            return 1
        if not other:
            return -1

        for mine, theirs in zip(self, other):
            result = mine.compare(theirs)
            if result != 0:
                return result

        if len(self) == len(other):
            return 0
        return -1 if len(self) < len(other) else 1

    def clone(self) -> Identifiers:
        """Return an independent copy."""
        return Identifiers(self)

    def _value_index(self, key: str) -> Optional[int]:
        for i in range(1, len(self), 2):
            candidate = self[i - 1]
            if not candidate.is_numeric and candidate.value == key:
                return i
        return None

    def get(self, key: str) -> Optional[Identifier]:
        """Return the value stored under key, or None."""
        i = self._value_index(key)
        return None if i is None else self[i]

    def contains(self, key: str) -> bool:
        return self._value_index(key) is not None

    def increment(self, key: str) -> Optional[int]:
        """Increment the numeric value under key in place.

        Returns:
            The new value, or None if key is absent or its value is not numeric
        """
        for i in range(1, len(self), 2):
            candidate = self[i - 1]
            if not candidate.is_numeric and candidate.value == key and self[i].is_numeric:
                self[i] = Identifier(self[i].value + 1)
                return self[i].value
        return None

    def set_with_string(self, key: str, s: str) -> bool:
        """Replace the value under key with a text identifier."""
        return self._set(key, Identifier(s))

    def set_with_number(self, key: str, n: int) -> bool:
        """Replace the value under key with a numeric identifier."""
        return self._set(key, Identifier(n))

    def _set(self, key: str, value: Identifier) -> bool:
        i = self._value_index(key)
        if i is None:
            return False
        self[i] = value
        return True

    def __str__(self) -> str:
        return ".".join(str(identifier) for identifier in self)

    def __repr__(self) -> str:
        return f"Identifiers({str(self)!r})"
