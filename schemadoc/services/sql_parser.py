# schemadoc/services/sql_parser.py
"""SQL DDL parser.

A tolerant textual extractor, not a SQL grammar. Comments are stripped and
whitespace collapsed before scanning, so messages carry no line numbers.
Composite foreign keys are reduced to their first column pair.
"""

import logging
import re
from typing import NamedTuple, Optional

from schemadoc.models.parsing import Dialect, ParsingResult
from schemadoc.services.builder import SchemaBuilder
from schemadoc.utils.constants import NO_TABLES_SQL, SQL_TYPE_ALIASES
from schemadoc.utils.lexical import (
    clean_sql,
    find_closing,
    split_identifier_list,
    split_statements,
    split_top_level,
    strip_identifier,
)

logger = logging.getLogger("sql-parser")

# Optionally schema-qualified, optionally quoted identifier; captures the bare name.
_IDENT = r'(?:[`"\[]?\w+[`"\]]?\.)?[`"\[]?(\w+)[`"\]]?'

_CREATE_TABLE = re.compile(
    r"^create\s+(?:(?:global|local)\s+)?(?:(?:temp|temporary|unlogged)\s+)?table\s+"
    r"(?:if\s+not\s+exists\s+)?" + _IDENT + r"\s*\(",
    re.IGNORECASE,
)
_ALTER_TABLE = re.compile(
    r"^alter\s+table\s+(?:if\s+exists\s+)?(?:only\s+)?" + _IDENT + r"\s+(.*)$",
    re.IGNORECASE | re.DOTALL,
)
_ALTER_ADD = re.compile(
    r'^add\s+(?:constraint\s+[`"]?\w+[`"]?\s+)?(.*)$',
    re.IGNORECASE | re.DOTALL,
)
_CREATE_INDEX = re.compile(
    r"^create\s+(unique\s+)?index\s+(?:concurrently\s+)?(?:if\s+not\s+exists\s+)?"
    r'(?:[`"]?(\w+)[`"]?\s+)?on\s+(?:only\s+)?' + _IDENT
    + r"\s*(?:using\s+\w+\s*)?\(([^)]*(?:\([^)]*\)[^)]*)*)\)",
    re.IGNORECASE | re.DOTALL,
)

_FOREIGN_KEY = re.compile(
    r"foreign\s+key\s*\(([^)]*)\)\s*references\s+" + _IDENT + r"\s*\(([^)]*)\)",
    re.IGNORECASE,
)
_PRIMARY_KEY = re.compile(r"primary\s+key\s*\(([^)]*)\)", re.IGNORECASE)
_UNIQUE_CONSTRAINT = re.compile(
    r'^(?:constraint\s+[`"]?(\w+)[`"]?\s+)?unique\s*(?:nulls\s+(?:not\s+)?distinct\s*)?\(([^)]*)\)',
    re.IGNORECASE,
)
_INLINE_INDEX = re.compile(
    r'^(unique\s+)?(?:index|key)\s*(?:[`"]?(\w+)[`"]?\s+)?\(([^)]*)\)',
    re.IGNORECASE,
)
_ALTER_ADD_COLUMN = re.compile(r"^column\s+(?:if\s+not\s+exists\s+)?(.*)$", re.IGNORECASE | re.DOTALL)
_IGNORED_CONSTRAINT = re.compile(r"^(?:check|exclude|like|constraint)\b", re.IGNORECASE)

_COLUMN = re.compile(r'^[`"\[]?(\w+)[`"\]]?\s+(.+)$', re.DOTALL)
_COLUMN_TYPE = re.compile(
    r"^(\w+(?:\s*\([^)]*\))?"
    r"(?:\s+(?:varying|precision|with\s+time\s+zone|without\s+time\s+zone)(?:\s*\([^)]*\))?)?"
    r"(?:\s*\[\])*)",
    re.IGNORECASE,
)
_DEFAULT = re.compile(
    r"\bdefault\s+('(?:[^']|'')*'(?:::\w+)?|[\w.]+\s*\([^)]*\)(?:::\w+)?|[^\s]+)",
    re.IGNORECASE,
)
_UNIQUE_WORD = re.compile(r"\bunique\b", re.IGNORECASE)
_INLINE_REFERENCES = re.compile(
    r"\breferences\s+" + _IDENT + r"(?:\s*\(([^)]*)\))?",
    re.IGNORECASE,
)


class PendingRelation(NamedTuple):
    """A foreign key seen mid-scan, resolved once every table is known."""
    from_table: str
    from_col: str
    to_table: str
    to_col: str


def normalize_sql_type(raw: str) -> str:
    """Map a raw SQL type onto the normalized vocabulary, else pass it through."""
    return SQL_TYPE_ALIASES.get(raw.strip().lower(), raw.strip())


def parse_sql(sql: str) -> ParsingResult:
    """Parse SQL DDL into a normalized schema.

    Args:
        sql: Raw DDL text, possibly containing several statements.

    Returns:
        The parsing result. Never raises for bad input.
    """
    builder = SchemaBuilder(Dialect.SQL)
    try:
        pending: list[PendingRelation] = []
        statements = split_statements(clean_sql(sql))
        for statement in statements:
            if statement:
                _parse_statement(statement, builder, pending)

        resolved = sum(1 for rel in pending if builder.add_foreign_key(*rel))
        logger.debug(
            "Resolved %d of %d pending relations", resolved, len(pending)
        )
        return builder.result(NO_TABLES_SQL)
    except Exception as e:
        logger.exception("SQL parsing failed")
        return builder.failure(e)


def _parse_statement(
    statement: str,
    builder: SchemaBuilder,
    pending: list[PendingRelation],
) -> None:
    create = _CREATE_TABLE.match(statement)
    if create:
        open_paren = create.end() - 1
        close_paren = find_closing(statement, open_paren, "(", ")")
        if close_paren == -1:
            close_paren = len(statement)
        body = statement[open_paren + 1:close_paren]
        _parse_create_table(create.group(1), body, builder, pending)
        return

    index = _CREATE_INDEX.match(statement)
    if index:
        unique, name, table, columns = index.groups()
        builder.add_index(
            table, split_identifier_list(columns), unique=bool(unique), name=name
        )
        return

    alter = _ALTER_TABLE.match(statement)
    if alter:
        _parse_alter_table(alter.group(1), alter.group(2), builder, pending)


def _parse_create_table(
    table: str,
    body: str,
    builder: SchemaBuilder,
    pending: list[PendingRelation],
) -> None:
    builder.add_table(table)

    for part in split_top_level(body):
        upper = part.upper()

        if "FOREIGN KEY" in upper:
            fk = _FOREIGN_KEY.search(part)
            relation = _foreign_key_relation(table, fk) if fk else None
            if relation:
                pending.append(relation)
            else:
                builder.skip(f"Skipped unrecognized foreign key in table {table}: {part}")
            continue

        if upper.startswith("PRIMARY KEY") or (
            upper.startswith("CONSTRAINT") and "PRIMARY KEY" in upper
        ):
            pk = _PRIMARY_KEY.search(part)
            if pk:
                builder.mark_primary(table, split_identifier_list(pk.group(1)))
            continue

        inline_index = _INLINE_INDEX.match(part)
        if inline_index:
            unique, name, columns = inline_index.groups()
            builder.add_index(
                table, split_identifier_list(columns), unique=bool(unique), name=name
            )
            continue

        unique = _UNIQUE_CONSTRAINT.match(part)
        if unique:
            builder.mark_unique(table, split_identifier_list(unique.group(2)), name=unique.group(1))
            continue

        if _IGNORED_CONSTRAINT.match(part):
            continue

        if not _parse_column(table, part, builder, pending):
            builder.skip(f"Skipped unrecognized definition in table {table}: {part}")


def _parse_column(
    table: str,
    definition: str,
    builder: SchemaBuilder,
    pending: list[PendingRelation],
) -> bool:
    match = _COLUMN.match(definition)
    if not match:
        return False

    name, rest = match.group(1), match.group(2).strip()
    type_match = _COLUMN_TYPE.match(rest)
    raw_type = type_match.group(1) if type_match else rest.split(" ", 1)[0]
    modifiers = rest[len(raw_type):]
    upper = modifiers.upper()

    is_primary = "PRIMARY KEY" in upper
    not_null = "NOT NULL" in upper
    default = _DEFAULT.search(modifiers)

    foreign_key: Optional[str] = None
    ref = _INLINE_REFERENCES.search(modifiers)
    if ref:
        target_columns = split_identifier_list(ref.group(2) or "")
        target_col = target_columns[0] if target_columns else "id"
        target_table = ref.group(1)
        foreign_key = f"{target_table}.{target_col}"
        pending.append(PendingRelation(table, name, target_table, target_col))

    builder.add_column(
        table,
        name,
        normalize_sql_type(raw_type),
        nullable=not (not_null or is_primary),
        primary=is_primary,
        unique=bool(_UNIQUE_WORD.search(modifiers)),
        default=default.group(1) if default else None,
        foreign_key=foreign_key,
    )
    return True


def _parse_alter_table(
    table: str,
    actions: str,
    builder: SchemaBuilder,
    pending: list[PendingRelation],
) -> None:
    for action in split_top_level(actions):
        add = _ALTER_ADD.match(action)
        if not add:
            continue
        constraint = add.group(1)

        fk = _FOREIGN_KEY.match(constraint)
        if fk:
            relation = _foreign_key_relation(table, fk)
            if relation:
                pending.append(relation)
            continue

        pk = _PRIMARY_KEY.match(constraint)
        if pk:
            builder.mark_primary(table, split_identifier_list(pk.group(1)))
            continue

        unique = _UNIQUE_CONSTRAINT.match(constraint)
        if unique:
            builder.mark_unique(table, split_identifier_list(unique.group(2)))
            continue

        column = _ALTER_ADD_COLUMN.match(constraint)
        if column and builder.has_table(table):
            _parse_column(table, column.group(1), builder, pending)


def _foreign_key_relation(table: str, match: re.Match) -> Optional[PendingRelation]:
    # Composite keys collapse to the first column pair.
    source_cols = split_identifier_list(match.group(1))
    if not source_cols:
        return None
    target_cols = split_identifier_list(match.group(3))
    return PendingRelation(
        table,
        source_cols[0],
        strip_identifier(match.group(2)),
        target_cols[0] if target_cols else "id",
    )
