# SPDX-License-Identifier: MIT
"""JSON and pydantic integration for versions.

Versions travel as JSON strings (``"1.2.3-rc.1+build.5"``). Decoding never
falls back to a default version: any malformed document is an error.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Union

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from .errors import ValidationError
from .semver import Version


def to_json(version: Version) -> str:
    """Encode a version as a JSON string literal."""
    return json.dumps(str(version))


def from_json(data: Union[str, bytes]) -> Version:
    """Decode a JSON string literal into a Version.

    Raises:
        ValidationError: If data is not valid JSON, is not a JSON string, or
            does not hold a valid version
    """
    try:
        decoded = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"invalid JSON version document: {e}") from e
    if not isinstance(decoded, str):
        raise ValidationError(
            f"JSON version must be a string, got {type(decoded).__name__}"
        )
    return Version.parse(decoded)


def _validate(value: Any) -> Version:
    if isinstance(value, Version):
        return value
    if isinstance(value, str):
        return Version.parse(value)
    raise ValidationError(f"Version must be a string, got {type(value).__name__}")


class _SemVerPydanticAnnotation:
    """Validates strings into Version and serializes Version as a string."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "description": "Semantic version (SemVer 2.0.0)"}


# Field type for pydantic models, e.g. ``version: SemVer``
SemVer = Annotated[Version, _SemVerPydanticAnnotation]
