"""Utility modules for schemadoc."""

from schemadoc.utils.constants import ErrorCode, ERROR_MESSAGES
from schemadoc.utils.exceptions import (
    SchemaDocError,
    UnsupportedDialectError,
    InputTooLargeError,
    InvalidSchemaError,
    SchemaParseError,
    VersionNotFoundError,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "SchemaDocError",
    "UnsupportedDialectError",
    "InputTooLargeError",
    "InvalidSchemaError",
    "SchemaParseError",
    "VersionNotFoundError",
]
