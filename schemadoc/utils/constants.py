# schemadoc/utils/constants.py
"""Constants for schemadoc."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error code enumeration."""

    INVALID_REQUEST = "ERR_001"
    UNSUPPORTED_DIALECT = "ERR_002"
    INPUT_TOO_LARGE = "ERR_003"
    SCHEMA_PARSE_FAILED = "ERR_004"
    INVALID_SCHEMA = "ERR_005"
    VERSION_NOT_FOUND = "ERR_006"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_REQUEST: "Input parameters are incomplete or malformed",
    ErrorCode.UNSUPPORTED_DIALECT: "Unsupported schema dialect",
    ErrorCode.INPUT_TOO_LARGE: "Schema source exceeds the configured size limit",
    ErrorCode.SCHEMA_PARSE_FAILED: "Schema source could not be parsed",
    ErrorCode.INVALID_SCHEMA: "Normalized schema payload is invalid",
    ErrorCode.VERSION_NOT_FOUND: "Schema version not found",
}

# Normalized column type vocabulary shared by every dialect.
NORMALIZED_TYPES = ("uuid", "integer", "text", "timestamp", "boolean", "serial", "jsonb")

# Raw SQL type tokens (lower-cased) that collapse onto the vocabulary.
SQL_TYPE_ALIASES: dict[str, str] = {
    "uuid": "uuid",
    "int": "integer",
    "int4": "integer",
    "integer": "integer",
    "text": "text",
    "timestamp": "timestamp",
    "bool": "boolean",
    "boolean": "boolean",
    "serial": "serial",
    "jsonb": "jsonb",
}

PRISMA_TYPE_MAP: dict[str, str] = {
    "String": "text",
    "Int": "integer",
    "DateTime": "timestamp",
    "Boolean": "boolean",
    "Json": "jsonb",
}

DRIZZLE_BUILDER_MAP: dict[str, str] = {
    "uuid": "uuid",
    "integer": "integer",
    "int": "integer",
    "serial": "serial",
    "text": "text",
    "varchar": "text",
    "timestamp": "timestamp",
    "boolean": "boolean",
    "jsonb": "jsonb",
}

NO_TABLES_SQL = "No tables found in input."
NO_MODELS_PRISMA = "No models found in Prisma schema."
NO_TABLES_DRIZZLE = (
    'No pgTable definitions found. Expected format: '
    'export const tableName = pgTable("tableName", { ... });'
)
NO_RELATIONS_WARNING = (
    "No foreign key relationships detected. ER diagrams will show tables only."
)
NO_COLUMNS_WARNING = "Tables found but no columns were parsed."
