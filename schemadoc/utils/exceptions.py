# schemadoc/utils/exceptions.py
"""Exception classes for schemadoc."""

from schemadoc.utils.constants import ErrorCode, ERROR_MESSAGES


class SchemaDocError(Exception):
    """Base exception class for schemadoc."""

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: dict | None = None
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unknown error")
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert the exception to a dictionary format.

        Returns:
            A dictionary representation of the error.
        """
        return {
            "status": "error",
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details
            }
        }


class UnsupportedDialectError(SchemaDocError):
    """Unknown schema dialect requested."""

    def __init__(self, dialect: str):
        super().__init__(
            code=ErrorCode.UNSUPPORTED_DIALECT,
            message=f"Unsupported schema dialect: {dialect}",
            details={"dialect": dialect}
        )


class InputTooLargeError(SchemaDocError):
    """Schema source over the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            code=ErrorCode.INPUT_TOO_LARGE,
            message=f"Schema source is {size} bytes, limit is {limit} bytes",
            details={"size": size, "limit": limit}
        )


class InvalidSchemaError(SchemaDocError):
    """Normalized schema payload failed validation."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.INVALID_SCHEMA,
            message=message
        )


class VersionNotFoundError(SchemaDocError):
    """Requested schema version does not exist."""

    def __init__(self, project_id: str, version: int | None = None):
        if version is None:
            message = f"Project {project_id} has no schema versions"
        else:
            message = f"Version {version} not found for project {project_id}"
        super().__init__(
            code=ErrorCode.VERSION_NOT_FOUND,
            message=message,
            details={"project_id": project_id, "version": version}
        )


class SchemaParseError(SchemaDocError):
    """Schema source produced a parse result with errors."""

    def __init__(self, dialect: str, errors: list[str]):
        super().__init__(
            code=ErrorCode.SCHEMA_PARSE_FAILED,
            message="; ".join(errors) or None,
            details={"dialect": dialect, "errors": errors}
        )
