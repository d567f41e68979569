"""Service modules for schemadoc."""

from schemadoc.services.builder import SchemaBuilder, TableDraft
from schemadoc.services.sql_parser import parse_sql, normalize_sql_type
from schemadoc.services.prisma_parser import parse_prisma
from schemadoc.services.drizzle_parser import parse_drizzle
from schemadoc.services.relationships import infer_relationships
from schemadoc.services.generators import (
    generate_sql,
    generate_prisma,
    generate_drizzle,
)
from schemadoc.services.differ import diff_schemas
from schemadoc.services.analyzer import analyze_schema
from schemadoc.services.schema import SchemaService, schema_hash
from schemadoc.services.versions import SchemaVersionStore

__all__ = [
    # Parsing
    "SchemaBuilder",
    "TableDraft",
    "parse_sql",
    "normalize_sql_type",
    "parse_prisma",
    "parse_drizzle",
    "infer_relationships",
    # Generation
    "generate_sql",
    "generate_prisma",
    "generate_drizzle",
    # Comparison and review
    "diff_schemas",
    "analyze_schema",
    # Service
    "SchemaService",
    "schema_hash",
    "SchemaVersionStore",
]
