# schemadoc/services/schema.py
"""Schema parsing, conversion and comparison services."""

import hashlib
import json
import logging
from typing import Callable, Optional

from pydantic import ValidationError

from schemadoc.models.changes import Change
from schemadoc.models.parsing import Dialect, ParsingResult
from schemadoc.models.review import ReviewResults
from schemadoc.models.schema import NormalizedSchema
from schemadoc.services.analyzer import analyze_schema
from schemadoc.services.differ import diff_schemas
from schemadoc.services.drizzle_parser import parse_drizzle
from schemadoc.services.generators import generate_drizzle, generate_prisma, generate_sql
from schemadoc.services.prisma_parser import parse_prisma
from schemadoc.services.sql_parser import parse_sql
from schemadoc.utils.exceptions import (
    InputTooLargeError,
    InvalidSchemaError,
    SchemaParseError,
    UnsupportedDialectError,
)

logger = logging.getLogger("schema-service")

PARSERS: dict[Dialect, Callable[[str], ParsingResult]] = {
    Dialect.SQL: parse_sql,
    Dialect.PRISMA: parse_prisma,
    Dialect.DRIZZLE: parse_drizzle,
}


def schema_hash(schema: NormalizedSchema) -> str:
    """Hash a schema's canonical JSON form.

    Keys are sorted, so two schemas that differ only in mapping order hash
    the same.

    Args:
        schema: The schema to hash.

    Returns:
        Hex-encoded SHA-256 digest.
    """
    canonical = json.dumps(
        schema.to_json_dict(), sort_keys=True, separators=(",", ":")
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class SchemaService:
    """Entry point for every schema operation exposed over MCP."""

    def __init__(
        self,
        allowed_dialects: Optional[list[str]] = None,
        default_dialect: str = "sql",
        max_input_bytes: int = 1_000_000,
        sql_output_dialect: Optional[str] = None,
        large_table_threshold: int = 30,
    ):
        """Initialize the schema service.

        Args:
            allowed_dialects: Dialect names accepted as input and output.
                Defaults to every supported dialect.
            default_dialect: Dialect used when a request names none.
            max_input_bytes: Largest accepted schema source, in UTF-8 bytes.
            sql_output_dialect: sqlglot dialect for generated SQL; None keeps
                the native PostgreSQL output.
            large_table_threshold: Column count above which review flags a table.
        """
        if allowed_dialects is None:
            allowed_dialects = [d.value for d in Dialect]
        self.allowed_dialects = set(allowed_dialects)
        self.default_dialect = default_dialect
        self.max_input_bytes = max_input_bytes
        self.sql_output_dialect = sql_output_dialect
        self.large_table_threshold = large_table_threshold

    def resolve_dialect(self, dialect: Optional[str]) -> Dialect:
        """Validate a dialect name; an empty name selects the default dialect.

        Raises:
            UnsupportedDialectError: If the name is unknown or not allowed.
        """
        name = (dialect or self.default_dialect).strip().lower()
        if name not in self.allowed_dialects:
            raise UnsupportedDialectError(name)
        try:
            return Dialect(name)
        except ValueError:
            raise UnsupportedDialectError(name)

    def parse(self, text: str, dialect: Optional[str] = None) -> ParsingResult:
        """Parse schema source.

        Args:
            text: Schema source.
            dialect: One of ``sql``, ``prisma``, ``drizzle``.

        Returns:
            The parser's result; parse problems are reported inside it.

        Raises:
            UnsupportedDialectError: If the dialect is not accepted.
            InputTooLargeError: If the source exceeds ``max_input_bytes``.
        """
        resolved = self.resolve_dialect(dialect)
        size = len(text.encode("utf-8"))
        if size > self.max_input_bytes:
            raise InputTooLargeError(size, self.max_input_bytes)

        result = PARSERS[resolved](text)
        logger.info(
            "Parsed %s schema (%d bytes): status=%s tables=%d relations=%d",
            resolved.value,
            size,
            result.status.value,
            result.stats.table_count,
            result.stats.relation_count,
        )
        for warning in result.warnings:
            logger.debug("Parse warning: %s", warning)
        return result

    def require_schema(self, text: str, dialect: Optional[str] = None) -> NormalizedSchema:
        """Parse schema source and return its schema, failing on parse errors.

        Raises:
            SchemaParseError: If the parse result carries errors.
        """
        result = self.parse(text, dialect)
        if not result.ok:
            raise SchemaParseError(result.input_type.value, result.errors)
        return result.normalized_schema

    def load_schema(self, payload: dict) -> NormalizedSchema:
        """Rebuild a schema from its persisted JSON form.

        Raises:
            InvalidSchemaError: If the payload does not validate.
        """
        try:
            return NormalizedSchema.model_validate(payload)
        except ValidationError as e:
            logger.warning("Invalid schema payload: %s", e)
            raise InvalidSchemaError(str(e))

    def convert(self, schema: NormalizedSchema, target: str) -> str:
        """Generate source in the target dialect.

        Raises:
            UnsupportedDialectError: If the target dialect is not accepted.
        """
        resolved = self.resolve_dialect(target)
        logger.info(
            "Generating %s from schema with %d tables",
            resolved.value, schema.table_count,
        )
        if resolved == Dialect.PRISMA:
            return generate_prisma(schema)
        if resolved == Dialect.DRIZZLE:
            return generate_drizzle(schema)
        return generate_sql(schema, self.sql_output_dialect or "postgres")

    def diff(self, before: NormalizedSchema, after: NormalizedSchema) -> list[Change]:
        changes = diff_schemas(before, after)
        logger.info("Schema diff produced %d changes", len(changes))
        return changes

    def analyze(self, schema: NormalizedSchema) -> ReviewResults:
        results = analyze_schema(schema, self.large_table_threshold)
        logger.info(
            "Schema review: %d critical, %d warnings, %d suggestions",
            len(results.critical), len(results.warnings), len(results.suggestions),
        )
        return results
