# schemadoc/services/relationships.py
"""Foreign key inference from column naming conventions.

Used for dialects whose relation syntax is not modeled (Prisma, Drizzle).
A column named ``<stem>_id`` or ``<stem>Id`` points at ``<table>.id`` when a
table named after the stem exists. The heuristic misses unconventional names
and can match a table by coincidence; both behaviours are kept as they are.
"""

import logging
from typing import Optional

from schemadoc.services.builder import SchemaBuilder

logger = logging.getLogger("relationship-inference")


def foreign_key_stem(column: str) -> Optional[str]:
    """Return the referenced-table stem for an FK-shaped column name."""
    if column == "id":
        return None
    if column.endswith("_id"):
        stem = column[:-3]
    elif column.endswith("Id"):
        stem = column[:-2]
    else:
        return None
    return stem or None


def candidate_tables(stem: str, lowercase: bool = False, prefer_plural: bool = False) -> list[str]:
    """Table names to try for a stem, in priority order."""
    if lowercase:
        stem = stem.lower()
    if prefer_plural:
        return [f"{stem}s", stem]
    return [stem]


def infer_relationships(
    builder: SchemaBuilder,
    lowercase: bool = False,
    prefer_plural: bool = False,
) -> int:
    """Add inferred many-to-one relations (and their mirrors) to a builder.

    Args:
        builder: The builder holding every parsed table.
        lowercase: Lower-case the stem before lookup (Prisma table names are
            lower-cased model names).
        prefer_plural: Try ``<stem>s`` before ``<stem>`` (snake_case schemas).

    Returns:
        Number of relations inferred.
    """
    inferred = 0
    for table_name, draft in list(builder.tables.items()):
        for col_name, col in list(draft.columns.items()):
            if col.get("foreign_key"):
                continue
            stem = foreign_key_stem(col_name)
            if stem is None:
                continue
            for candidate in candidate_tables(stem, lowercase, prefer_plural):
                if builder.has_table(candidate):
                    logger.debug(
                        "Found relationship: %s.%s -> %s.id",
                        table_name, col_name, candidate,
                    )
                    builder.add_foreign_key(table_name, col_name, candidate, "id")
                    inferred += 1
                    break
    return inferred
