# schemadoc/services/prisma_parser.py
"""Prisma schema parser."""

import logging
import re
from typing import Optional

from schemadoc.models.parsing import Dialect, ParsingResult
from schemadoc.services.builder import SchemaBuilder
from schemadoc.services.relationships import infer_relationships
from schemadoc.utils.constants import NO_MODELS_PRISMA, PRISMA_TYPE_MAP
from schemadoc.utils.lexical import find_closing, split_top_level, strip_js_comments

logger = logging.getLogger("prisma-parser")

_MODEL = re.compile(r"\bmodel\s+(\w+)\s*\{")
_FIELD_NAME = re.compile(r"^\w+$")
_ID_ATTR = re.compile(r"@id\b")
_UNIQUE_ATTR = re.compile(r"@unique\b")
_BLOCK_ATTR = re.compile(r"^@@(id|unique|index)\s*\(\s*(?:fields\s*:\s*)?\[([^\]]*)\]")
_LEADING_NAME = re.compile(r"\w+")


def parse_prisma(prisma: str) -> ParsingResult:
    """Parse a Prisma schema into a normalized schema.

    Fields are required unless their type carries ``?``. Relation fields
    (typed with another model, or carrying ``@relation``) are not columns;
    foreign keys come from naming inference only.

    Args:
        prisma: Prisma schema source.

    Returns:
        The parsing result. Never raises for bad input.
    """
    builder = SchemaBuilder(Dialect.PRISMA)
    try:
        source = strip_js_comments(prisma)
        models = list(_MODEL.finditer(source))
        model_names = {m.group(1) for m in models}

        for model in models:
            _parse_model(model.group(1), _model_body(source, model, builder), model_names, builder)

        inferred = infer_relationships(builder, lowercase=True)
        logger.debug("Inferred %d relationships", inferred)
        return builder.result(NO_MODELS_PRISMA)
    except Exception as e:
        logger.exception("Prisma parsing failed")
        return builder.failure(e)


def _model_body(source: str, match: re.Match, builder: SchemaBuilder) -> str:
    open_brace = match.end() - 1
    close_brace = find_closing(source, open_brace, "{", "}")
    if close_brace == -1:
        builder.skip(f"Unterminated definition for model {match.group(1)}")
        close_brace = len(source)
    return source[open_brace + 1:close_brace]


def _parse_model(
    model_name: str,
    body: str,
    model_names: set[str],
    builder: SchemaBuilder,
) -> None:
    table = model_name.lower()
    builder.add_table(table)
    block_attributes = []

    for raw_line in body.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("@@"):
            block_attributes.append(line)
            continue

        parts = line.split()
        if len(parts) < 2 or not _FIELD_NAME.match(parts[0]):
            continue

        field, type_raw = parts[0], parts[1]
        attributes = " ".join(parts[2:])
        base_type = type_raw.rstrip("?")
        is_list = base_type.endswith("[]")
        if is_list:
            base_type = base_type[:-2]

        if base_type in model_names or "@relation" in attributes:
            continue

        default = _default_value(attributes)
        col_type = PRISMA_TYPE_MAP.get(base_type, base_type)
        if "@db.Uuid" in attributes:
            col_type = "uuid"
        elif base_type == "Int" and default == "autoincrement()":
            col_type, default = "serial", None
        if is_list:
            col_type += "[]"

        is_primary = bool(_ID_ATTR.search(attributes))
        builder.add_column(
            table,
            field,
            col_type,
            nullable=type_raw.endswith("?"),
            primary=is_primary,
            unique=bool(_UNIQUE_ATTR.search(attributes)),
            default=default,
        )

    for line in block_attributes:
        _apply_block_attribute(table, line, builder)


def _default_value(attributes: str) -> Optional[str]:
    start = attributes.find("@default(")
    if start == -1:
        return None
    open_paren = start + len("@default")
    close_paren = find_closing(attributes, open_paren, "(", ")")
    if close_paren == -1:
        return None
    return attributes[open_paren + 1:close_paren].strip() or None


def _apply_block_attribute(table: str, line: str, builder: SchemaBuilder) -> None:
    match = _BLOCK_ATTR.match(line)
    if not match:
        return
    kind = match.group(1)
    columns = []
    for part in split_top_level(match.group(2)):
        name = _LEADING_NAME.match(part)
        if name:
            columns.append(name.group(0))

    if kind == "id":
        builder.mark_primary(table, columns)
    else:
        builder.add_index(table, columns, unique=kind == "unique")
