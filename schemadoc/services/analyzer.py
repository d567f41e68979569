# schemadoc/services/analyzer.py
"""Rule-based schema review."""

import logging
import re

from schemadoc.models.review import Finding, ReviewResults, Severity
from schemadoc.models.schema import NormalizedSchema, Table

logger = logging.getLogger("schema-analyzer")

_CAMEL_CASE = re.compile(r"[a-z][A-Z]")

MISSING_PK_IMPACT = (
    "Rows cannot be identified uniquely, which allows duplicates and "
    "hurts indexing performance."
)
LARGE_TABLE_IMPACT = (
    "Wide tables are hard to maintain and slow to scan. Consider splitting "
    "this table into smaller logical entities."
)
UNINDEXED_FK_IMPACT = (
    "Joins on this column fall back to full table scans as data grows."
)
NULLABLE_FK_IMPACT = (
    "Allows orphan records or optional relationships. Make sure this is "
    "intentional."
)
MIXED_NAMING_IMPACT = "Inconsistent naming makes the schema harder to read."
CAMEL_CASE_IMPACT = (
    "Most SQL databases prefer snake_case; check that the ORM quotes "
    "identifiers correctly."
)


def _is_indexed(table: Table, column: str) -> bool:
    col = table.columns[column]
    if col.primary or col.unique:
        return True
    return any(column in index.columns for index in table.indexes)


def analyze_schema(
    schema: NormalizedSchema,
    large_table_threshold: int = 30,
) -> ReviewResults:
    """Review a schema for common design problems.

    Args:
        schema: The schema to review.
        large_table_threshold: Column count above which a table is flagged.

    Returns:
        Findings grouped into critical, warnings and suggestions.
    """
    results = ReviewResults()

    for table_name, table in schema.tables.items():
        if not table.primary_columns():
            results.critical.append(Finding(
                entity=table_name,
                issue="Missing primary key",
                impact=MISSING_PK_IMPACT,
                severity=Severity.CRITICAL,
            ))

        column_count = len(table.columns)
        if column_count > large_table_threshold:
            results.warnings.append(Finding(
                entity=table_name,
                issue=f"Large table detected ({column_count} columns)",
                impact=LARGE_TABLE_IMPACT,
                severity=Severity.MEDIUM,
            ))

        for col_name, col in table.columns.items():
            entity = f"{table_name}.{col_name}"
            if col.foreign_key:
                if not _is_indexed(table, col_name):
                    results.warnings.append(Finding(
                        entity=entity,
                        issue="Foreign key without index",
                        impact=UNINDEXED_FK_IMPACT,
                        severity=Severity.HIGH,
                    ))
                if col.nullable:
                    results.suggestions.append(Finding(
                        entity=entity,
                        issue="Nullable foreign key",
                        impact=NULLABLE_FK_IMPACT,
                        severity=Severity.MEDIUM,
                    ))

            camel = bool(_CAMEL_CASE.search(col_name))
            if camel and "_" in col_name:
                results.suggestions.append(Finding(
                    entity=entity,
                    issue="Mixed naming convention",
                    impact=MIXED_NAMING_IMPACT,
                    severity=Severity.LOW,
                ))
            elif camel:
                results.suggestions.append(Finding(
                    entity=entity,
                    issue="CamelCase naming",
                    impact=CAMEL_CASE_IMPACT,
                    severity=Severity.LOW,
                ))

    logger.debug(
        "Review found %d critical, %d warnings, %d suggestions",
        len(results.critical), len(results.warnings), len(results.suggestions),
    )
    return results
