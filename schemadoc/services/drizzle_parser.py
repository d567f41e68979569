# schemadoc/services/drizzle_parser.py
"""Drizzle ORM table-builder parser."""

import logging
import re
from typing import Optional

from schemadoc.models.parsing import Dialect, ParsingResult
from schemadoc.services.builder import SchemaBuilder
from schemadoc.services.relationships import infer_relationships
from schemadoc.utils.constants import DRIZZLE_BUILDER_MAP, NO_TABLES_DRIZZLE
from schemadoc.utils.lexical import find_closing, split_top_level, strip_js_comments

logger = logging.getLogger("drizzle-parser")

_TABLE = re.compile(
    r"export\s+const\s+\w+\s*=\s*(?:pg|mysql|sqlite)Table\s*\(\s*"
    r"[\"'`](\w+)[\"'`]\s*,\s*\{"
)
_COLUMN = re.compile(r"^[\"']?(\w+)[\"']?\s*:\s*(\w+)\s*\(")
_INDEX = re.compile(
    r"\b(uniqueIndex|index|unique)\s*\(\s*(?:[\"'`](\w*)[\"'`])?\s*\)\s*\.on\s*\(([^)]*)\)"
)
_COMPOSITE_PK = re.compile(
    r"\bprimaryKey\s*\(\s*(?:\{\s*(?:name\s*:\s*[\"'`]\w*[\"'`]\s*,\s*)?columns\s*:\s*\[([^\]]*)\]|([^){]*)\))"
)


def parse_drizzle(drizzle: str) -> ParsingResult:
    """Parse Drizzle ``pgTable`` definitions into a normalized schema.

    Table bodies are bounded by brace counting. Each column definition may
    span several lines; modifiers are detected anywhere in the definition.

    Args:
        drizzle: TypeScript source containing table definitions.

    Returns:
        The parsing result. Never raises for bad input.
    """
    builder = SchemaBuilder(Dialect.DRIZZLE)
    try:
        source = strip_js_comments(drizzle)
        for match in _TABLE.finditer(source):
            _parse_table(source, match, builder)

        inferred = infer_relationships(builder, prefer_plural=True)
        logger.debug("Inferred %d relationships", inferred)
        return builder.result(NO_TABLES_DRIZZLE)
    except Exception as e:
        logger.exception("Drizzle parsing failed")
        return builder.failure(e, prefix="Parser error")


def _parse_table(source: str, match: re.Match, builder: SchemaBuilder) -> None:
    table = match.group(1)
    builder.add_table(table)

    open_brace = match.end() - 1
    close_brace = find_closing(source, open_brace, "{", "}")
    if close_brace == -1:
        builder.skip(f"Unterminated definition for table {table}")
        close_brace = len(source)

    for fragment in split_top_level(source[open_brace + 1:close_brace]):
        _parse_column(table, " ".join(fragment.split()), builder)

    # Optional third argument: (t) => ({ ...indexes and composite keys })
    open_paren = match.start() + match.group(0).index("(")
    call_end = find_closing(source, open_paren, "(", ")")
    if call_end > close_brace:
        _parse_extras(table, source[close_brace + 1:call_end], builder)


def _parse_column(table: str, definition: str, builder: SchemaBuilder) -> None:
    column = _COLUMN.match(definition)
    if not column:
        return
    name, builder_fn = column.groups()

    is_primary = ".primaryKey()" in definition
    not_null = ".notNull()" in definition
    builder.add_column(
        table,
        name,
        DRIZZLE_BUILDER_MAP.get(builder_fn, builder_fn),
        nullable=not not_null and not is_primary,
        primary=is_primary,
        unique=".unique()" in definition,
        default=_default_value(definition),
    )


def _default_value(definition: str) -> Optional[str]:
    if ".defaultNow()" in definition:
        return "now()"
    if ".defaultRandom()" in definition:
        return "gen_random_uuid()"
    start = definition.find(".default(")
    if start == -1:
        return None
    open_paren = start + len(".default")
    close_paren = find_closing(definition, open_paren, "(", ")")
    if close_paren == -1:
        return None
    return definition[open_paren + 1:close_paren].strip() or None


def _column_refs(raw: str) -> list[str]:
    """``t.email, t.name`` -> ``["email", "name"]``."""
    return [part.rsplit(".", 1)[-1].strip() for part in split_top_level(raw)]


def _parse_extras(table: str, extras: str, builder: SchemaBuilder) -> None:
    for kind, name, columns in _INDEX.findall(extras):
        builder.add_index(
            table,
            _column_refs(columns),
            unique=kind != "index",
            name=name or None,
        )

    for object_form, call_form in _COMPOSITE_PK.findall(extras):
        builder.mark_primary(table, _column_refs(object_form or call_form))
