# SPDX-License-Identifier: MIT
"""Database binding for versions.

Versions are stored as their formatted string in a text column.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from .errors import ValidationError
from .semver import Version


def scan(version: Version, src: Any) -> Version:
    """Load a database value into version.

    Args:
        version: The instance to update in place
        src: A str or UTF-8 encoded bytes value

    Returns:
        The updated version

    Raises:
        ValidationError: If src is not text or is not a valid version
    """
    if isinstance(src, str):
        text = src
    elif isinstance(src, (bytes, bytearray, memoryview)):
        try:
            text = bytes(src).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError(f"version bytes are not valid UTF-8: {e}") from e
    else:
        raise ValidationError(f"cannot convert {type(src).__name__} to string")

    version.set(text)
    return version


def value(version: Version) -> str:
    """Return the database representation of a version."""
    return str(version)


class VersionType(TypeDecorator):
    """SQLAlchemy column type storing a Version as a string.

    Example:
        class Release(Base):
            __tablename__ = "releases"

            id: Mapped[int] = mapped_column(Integer, primary_key=True)
            version: Mapped[Version] = mapped_column(VersionType(64))
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, str):
            value = Version.parse(value)
        if not isinstance(value, Version):
            raise ValidationError(f"cannot bind {type(value).__name__} as a version")
        return str(value)

    def process_result_value(self, value: Any, dialect: Any) -> Optional[Version]:
        if value is None:
            return None
        return scan(Version(), value)
