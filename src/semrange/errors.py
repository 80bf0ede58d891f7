# SPDX-License-Identifier: MIT
"""Error types shared by the version and range parsers."""

from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Raised when a version, identifier or range string is invalid.

    Attributes:
        message: Human readable cause
        value: The offending substring, when one can be named
    """

    def __init__(self, message: str, value: Optional[str] = None):
        self.message = message
        self.value = value
        super().__init__(message)
