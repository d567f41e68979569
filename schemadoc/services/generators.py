# schemadoc/services/generators.py
"""Emit dialect source from a normalized schema.

Generators are total: unmapped types fall back to the dialect's generic text
type and nothing here raises for a well-formed schema. Column order follows
the schema's mapping order.
"""

import logging
from typing import Optional

import sqlglot
from sqlglot.errors import SqlglotError

from schemadoc.models.schema import Column, NormalizedSchema, RelationType, Table

logger = logging.getLogger("schema-generators")

# Scalar types that reach the normalized schema unmapped from Prisma.
_SQL_TYPE_FALLBACKS: dict[str, str] = {
    "BigInt": "bigint",
    "Float": "double precision",
    "Decimal": "numeric",
    "Bytes": "bytea",
}

_PRISMA_HEADER = (
    'datasource db {\n'
    '  provider = "postgresql"\n'
    '  url      = env("DATABASE_URL")\n'
    '}\n\n'
    'generator client {\n'
    '  provider = "prisma-client-js"\n'
    '}\n\n'
)

_DRIZZLE_BUILDERS: dict[str, str] = {
    "uuid": "uuid",
    "int": "integer",
    "integer": "integer",
    "serial": "serial",
    "text": "text",
    "varchar": "text",
    "timestamp": "timestamp",
    "timestamptz": "timestamp",
    "boolean": "boolean",
    "json": "jsonb",
    "jsonb": "jsonb",
}

_UUID_DEFAULTS = ("uuid_generate_v4()", "gen_random_uuid()", "uuid()")


def _split_endpoint(endpoint: str) -> tuple[str, str]:
    table, _, column = endpoint.partition(".")
    return table, column


def _model_name(table: str) -> str:
    return table[:1].upper() + table[1:]


# SQL

def _sql_type(col: Column) -> str:
    col_type = col.type.strip()
    if not col_type:
        return "text"
    return _SQL_TYPE_FALLBACKS.get(col_type, col_type)


def _sql_column(name: str, col: Column, inline_primary: bool) -> str:
    line = f"  {name} {_sql_type(col)}"
    if col.primary and inline_primary:
        line += " PRIMARY KEY"
    if not col.nullable:
        line += " NOT NULL"
    if col.unique and not col.primary:
        line += " UNIQUE"
    if col.default:
        line += f" DEFAULT {col.default}"
    return line


def _sql_create_table(name: str, table: Table) -> str:
    primary = table.primary_columns()
    inline_primary = len(primary) == 1
    lines = [
        _sql_column(col_name, col, inline_primary)
        for col_name, col in table.columns.items()
    ]
    if len(primary) > 1:
        lines.append(f"  PRIMARY KEY ({', '.join(primary)})")
    return f"CREATE TABLE {name} (\n" + ",\n".join(lines) + "\n);"


def _sql_statements(schema: NormalizedSchema) -> list[str]:
    statements = [
        _sql_create_table(name, table) for name, table in schema.tables.items()
    ]

    for name, table in schema.tables.items():
        for index in table.indexes:
            unique = "UNIQUE " if index.unique else ""
            statements.append(
                f"CREATE {unique}INDEX {index.name} ON {name} ({', '.join(index.columns)});"
            )

    # Foreign keys go last so every referenced table already exists.
    for name, table in schema.tables.items():
        for rel in table.relations:
            if rel.type != RelationType.MANY_TO_ONE:
                continue
            _, from_col = _split_endpoint(rel.from_)
            to_table, to_col = _split_endpoint(rel.to)
            if from_col and to_table and to_col:
                statements.append(
                    f"ALTER TABLE {name} ADD CONSTRAINT fk_{name}_{from_col} "
                    f"FOREIGN KEY ({from_col}) REFERENCES {to_table}({to_col});"
                )
    return statements


def _transpile(statement: str, dialect: str) -> str:
    try:
        converted = sqlglot.transpile(
            statement, read="postgres", write=dialect, pretty=True
        )
    except SqlglotError as e:
        logger.warning("Could not transpile statement to %s: %s", dialect, e)
        return statement
    if not converted:
        return statement
    return ";\n".join(converted) + ";"


def generate_sql(schema: NormalizedSchema, dialect: str = "postgres") -> str:
    """Generate SQL DDL.

    Args:
        schema: The schema to emit.
        dialect: Target sqlglot dialect. ``"postgres"`` (or empty) emits the
            native PostgreSQL-flavoured DDL; anything else is transpiled
            statement by statement.

    Returns:
        The DDL text.
    """
    statements = _sql_statements(schema)
    if dialect and dialect != "postgres":
        statements = [_transpile(statement, dialect) for statement in statements]

    creates = [s for s in statements if not s.startswith("ALTER TABLE")]
    alters = [s for s in statements if s.startswith("ALTER TABLE")]
    output = "\n\n".join(creates)
    if creates:
        output += "\n\n"
    if alters:
        output += "\n".join(alters) + "\n"
    return output


# Prisma

def _prisma_type(col: Column) -> tuple[str, list[str]]:
    """Return the Prisma scalar type plus any type-driven attributes."""
    col_type = col.type.lower()
    if col_type == "uuid":
        return "String", ["@db.Uuid"]
    if col_type == "serial":
        return "Int", ["@default(autoincrement())"]
    if col_type in ("int", "integer"):
        return "Int", []
    if col_type in ("text", "varchar"):
        return "String", []
    if col_type in ("timestamp", "timestamptz"):
        return "DateTime", []
    if col_type == "boolean":
        return "Boolean", []
    if col_type in ("json", "jsonb"):
        return "Json", []
    return "String", []


def _prisma_default(default: Optional[str]) -> Optional[str]:
    if not default:
        return None
    lowered = default.lower()
    if "now()" in lowered or lowered == "current_timestamp":
        return "@default(now())"
    if lowered in _UUID_DEFAULTS:
        return "@default(uuid())"
    if lowered in ("true", "false") or default.lstrip("-").replace(".", "", 1).isdigit():
        return f"@default({lowered})"
    if len(default) >= 2 and default[0] == default[-1] == "'":
        return f'@default("{default[1:-1]}")'
    return None


def _prisma_model(name: str, table: Table) -> str:
    lines = [f"model {_model_name(name)} {{"]
    primary = table.primary_columns()
    used_names = set(table.columns)

    for col_name, col in table.columns.items():
        prisma_type, attributes = _prisma_type(col)
        optional = "?" if col.nullable and not col.primary else ""
        line = f"  {col_name} {prisma_type}{optional}"
        if col.primary and len(primary) == 1:
            line += " @id"
        if col.unique and not col.primary:
            line += " @unique"
        if "@default(autoincrement())" not in attributes:
            default = _prisma_default(col.default)
            if default:
                line += f" {default}"
        for attribute in attributes:
            line += f" {attribute}"
        lines.append(line)

    for rel in table.relations:
        if rel.type == RelationType.MANY_TO_ONE:
            _, source_col = _split_endpoint(rel.from_)
            target_table, target_col = _split_endpoint(rel.to)
            field = _unique_field(target_table, source_col, used_names)
            lines.append(
                f"  {field} {_model_name(target_table)} "
                f"@relation(fields: [{source_col}], references: [{target_col}])"
            )
        elif rel.type == RelationType.ONE_TO_MANY:
            target_table, _ = _split_endpoint(rel.to)
            field = _unique_field(target_table, "list", used_names)
            lines.append(f"  {field} {_model_name(target_table)}[]")

    if len(primary) > 1:
        lines.append(f"\n  @@id([{', '.join(primary)}])")
    for index in table.indexes:
        kind = "unique" if index.unique else "index"
        lines.append(f"  @@{kind}([{', '.join(index.columns)}])")

    lines.append("}")
    return "\n".join(lines)


def _unique_field(preferred: str, qualifier: str, used_names: set[str]) -> str:
    field = preferred if preferred not in used_names else f"{preferred}_{qualifier}"
    counter = 2
    candidate = field
    while candidate in used_names:
        candidate = f"{field}{counter}"
        counter += 1
    used_names.add(candidate)
    return candidate


def generate_prisma(schema: NormalizedSchema) -> str:
    """Generate a Prisma schema with datasource and client generator blocks."""
    models = [_prisma_model(name, table) for name, table in schema.tables.items()]
    return _PRISMA_HEADER + "".join(f"{model}\n\n" for model in models)


# Drizzle

def _drizzle_builder(col: Column) -> str:
    return _DRIZZLE_BUILDERS.get(col.type.lower(), "text")


def _drizzle_column(name: str, col: Column) -> str:
    builder_fn = _drizzle_builder(col)
    chain = f'{builder_fn}("{name}")'
    if col.primary:
        chain += ".primaryKey()"
    if not col.nullable:
        chain += ".notNull()"
    if col.unique and not col.primary:
        chain += ".unique()"
    chain += _drizzle_default(col.default, builder_fn)
    return f"  {name}: {chain},"


def _drizzle_default(default: Optional[str], builder_fn: str) -> str:
    """Literal defaults are kept; other SQL expressions are dropped."""
    if not default:
        return ""
    lowered = default.lower()
    if "now()" in lowered or lowered == "current_timestamp":
        return ".defaultNow()"
    if builder_fn == "uuid" and lowered in _UUID_DEFAULTS:
        return ".defaultRandom()"
    if lowered in ("true", "false"):
        return f".default({lowered})"
    if default.lstrip("-").replace(".", "", 1).isdigit():
        return f".default({default})"
    if len(default) >= 2 and default[0] == default[-1] and default[0] in "'\"`":
        return f".default({default})"
    return ""


def generate_drizzle(schema: NormalizedSchema) -> str:
    """Generate Drizzle ``pgTable`` definitions with a matching import line."""
    used = sorted(
        {
            _drizzle_builder(col)
            for table in schema.tables.values()
            for col in table.columns.values()
        }
    )
    imports = ", ".join(["pgTable", *used])
    output = f'import {{ {imports} }} from "drizzle-orm/pg-core";\n\n'

    for name, table in schema.tables.items():
        output += f'export const {name} = pgTable("{name}", {{\n'
        for col_name, col in table.columns.items():
            output += _drizzle_column(col_name, col) + "\n"
        output += "});\n\n"
    return output
