# tests/test_service.py
"""Tests for the schema service layer."""

import pytest
from schemadoc.models.parsing import ParseStatus
from schemadoc.models.schema import Column, NormalizedSchema, Table
from schemadoc.services.schema import SchemaService, schema_hash
from schemadoc.utils.constants import ErrorCode
from schemadoc.utils.exceptions import (
    InputTooLargeError,
    InvalidSchemaError,
    SchemaParseError,
    UnsupportedDialectError,
)


class TestSchemaHash:
    """Canonical hash tests."""

    def test_stable(self, blog_sql):
        """Test equal schemas hash equally."""
        service = SchemaService()
        first = service.parse(blog_sql, "sql").normalized_schema
        second = service.parse(blog_sql, "sql").normalized_schema
        assert schema_hash(first) == schema_hash(second)
        assert len(schema_hash(first)) == 64

    def test_mapping_order_independent(self):
        """Test column order does not change the hash."""
        a = NormalizedSchema(tables={"t": Table(columns={
            "x": Column(type="text"), "y": Column(type="integer"),
        })})
        b = NormalizedSchema(tables={"t": Table(columns={
            "y": Column(type="integer"), "x": Column(type="text"),
        })})
        assert schema_hash(a) == schema_hash(b)

    def test_content_sensitive(self):
        """Test attribute changes change the hash."""
        a = NormalizedSchema(tables={"t": Table(columns={"x": Column(type="text")})})
        b = NormalizedSchema(tables={"t": Table(columns={"x": Column(type="text", nullable=False)})})
        assert schema_hash(a) != schema_hash(b)


class TestSchemaService:
    """Service operation tests."""

    def setup_method(self):
        """Set up a service with a small input limit."""
        self.service = SchemaService(max_input_bytes=2000)

    @pytest.mark.parametrize("dialect", ["sql", "SQL", " prisma ", "drizzle"])
    def test_resolve_dialect(self, dialect):
        """Test dialect names are case- and whitespace-insensitive."""
        assert self.service.resolve_dialect(dialect).value == dialect.strip().lower()

    def test_default_dialect(self):
        """Test a missing dialect falls back to the configured default."""
        service = SchemaService(default_dialect="prisma")
        result = service.parse("model A {\n  id Int @id\n}")
        assert result.input_type.value == "prisma"
        assert result.stats.table_count == 1

    def test_unsupported_dialect(self):
        """Test unknown dialects raise a coded error."""
        with pytest.raises(UnsupportedDialectError) as exc_info:
            self.service.parse("CREATE TABLE t (id int);", "mysql")
        assert exc_info.value.code == ErrorCode.UNSUPPORTED_DIALECT
        assert exc_info.value.to_dict()["error"]["details"] == {"dialect": "mysql"}

    def test_disallowed_dialect(self):
        """Test dialects can be switched off."""
        service = SchemaService(allowed_dialects=["sql"])
        with pytest.raises(UnsupportedDialectError):
            service.parse("model A { id Int @id }", "prisma")

    def test_input_too_large(self):
        """Test the size limit is measured in UTF-8 bytes."""
        text = "-- " + "é" * 1000
        with pytest.raises(InputTooLargeError) as exc_info:
            self.service.parse(text, "sql")
        assert exc_info.value.details["limit"] == 2000
        assert exc_info.value.details["size"] > 2000

    def test_parse_delegates(self, blog_sql):
        """Test parse returns the parser result unchanged in kind."""
        result = self.service.parse(blog_sql, "sql")
        assert result.status == ParseStatus.SUCCESS
        assert result.stats.table_count == 3

    def test_require_schema_raises_on_errors(self):
        """Test require_schema turns error results into exceptions."""
        with pytest.raises(SchemaParseError) as exc_info:
            self.service.require_schema("SELECT 1;", "sql")
        assert exc_info.value.code == ErrorCode.SCHEMA_PARSE_FAILED
        assert exc_info.value.details["errors"] == ["No tables found in input."]

    def test_load_schema(self, blog_sql):
        """Test persisted JSON reloads, and bad payloads are rejected."""
        schema = self.service.require_schema(blog_sql, "sql")
        assert self.service.load_schema(schema.to_json_dict()) == schema
        with pytest.raises(InvalidSchemaError):
            self.service.load_schema({"tables": {"t": {"columns": {"a": {"nullable": "maybe"}}}}})

    def test_convert(self, blog_sql):
        """Test conversion dispatches on the target dialect."""
        schema = self.service.require_schema(blog_sql, "sql")
        assert "CREATE TABLE users" in self.service.convert(schema, "sql")
        assert "model Users {" in self.service.convert(schema, "prisma")
        assert "pgTable(" in self.service.convert(schema, "drizzle")
        with pytest.raises(UnsupportedDialectError):
            self.service.convert(schema, "graphql")

    def test_diff_and_analyze(self, blog_sql):
        """Test diff and review pass through to the core functions."""
        schema = self.service.require_schema(blog_sql, "sql")
        assert self.service.diff(schema, schema) == []
        assert self.service.analyze(schema).critical == []

    def test_threshold_forwarded(self):
        """Test the configured large-table threshold is used."""
        service = SchemaService(large_table_threshold=1)
        schema = service.require_schema("CREATE TABLE t (id int PRIMARY KEY, a int);", "sql")
        assert [f.issue for f in service.analyze(schema).warnings] == ["Large table detected (2 columns)"]
