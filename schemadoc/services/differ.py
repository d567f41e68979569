# schemadoc/services/differ.py
"""Structural diff between two normalized schemas."""

import logging

from schemadoc.models.changes import Change, ChangeType
from schemadoc.models.schema import Column, NormalizedSchema, Relation

logger = logging.getLogger("schema-differ")

COMPARED_ATTRIBUTES = ("type", "nullable", "primary", "unique", "default", "foreign_key")


def _changed_attributes(before: Column, after: Column) -> list[str]:
    return [
        attr for attr in COMPARED_ATTRIBUTES
        if getattr(before, attr) != getattr(after, attr)
    ]


def _relation_change(change_type: ChangeType, table: str, rel: Relation) -> Change:
    return Change(
        change_type=change_type,
        entity_name=f"{rel.from_}->{rel.to}",
        details={
            "table": table,
            "relation": rel.model_dump(mode="json", by_alias=True),
        },
    )


def diff_schemas(before: NormalizedSchema, after: NormalizedSchema) -> list[Change]:
    """Compute the changes that turn ``before`` into ``after``.

    Changes are grouped by kind (table, column, relation; added before
    removed), then ordered by table name and by column or relation key, so
    the output is deterministic. Relations are compared as sets keyed by
    ``(type, from, to)`` and only for tables present in both snapshots.
    Diffing a schema against itself yields an empty list.

    Args:
        before: The older snapshot.
        after: The newer snapshot.

    Returns:
        The ordered list of changes.
    """
    buckets: dict[ChangeType, list[Change]] = {kind: [] for kind in ChangeType}

    before_tables = set(before.tables)
    after_tables = set(after.tables)

    for name in sorted(after_tables - before_tables):
        buckets[ChangeType.TABLE_ADDED].append(Change(
            change_type=ChangeType.TABLE_ADDED,
            entity_name=name,
            details={"table": after.tables[name].model_dump(mode="json", by_alias=True)},
        ))

    for name in sorted(before_tables - after_tables):
        buckets[ChangeType.TABLE_REMOVED].append(Change(
            change_type=ChangeType.TABLE_REMOVED,
            entity_name=name,
            details={"table": before.tables[name].model_dump(mode="json", by_alias=True)},
        ))

    for name in sorted(before_tables & after_tables):
        old_table = before.tables[name]
        new_table = after.tables[name]
        old_cols = old_table.columns
        new_cols = new_table.columns

        for col_name in sorted(set(new_cols) - set(old_cols)):
            buckets[ChangeType.COLUMN_ADDED].append(Change(
                change_type=ChangeType.COLUMN_ADDED,
                entity_name=f"{name}.{col_name}",
                details={
                    "table": name,
                    "column": col_name,
                    "definition": new_cols[col_name].model_dump(mode="json"),
                },
            ))

        for col_name in sorted(set(old_cols) - set(new_cols)):
            buckets[ChangeType.COLUMN_REMOVED].append(Change(
                change_type=ChangeType.COLUMN_REMOVED,
                entity_name=f"{name}.{col_name}",
                details={
                    "table": name,
                    "column": col_name,
                    "definition": old_cols[col_name].model_dump(mode="json"),
                },
            ))

        for col_name in sorted(set(old_cols) & set(new_cols)):
            changed = _changed_attributes(old_cols[col_name], new_cols[col_name])
            if changed:
                buckets[ChangeType.COLUMN_MODIFIED].append(Change(
                    change_type=ChangeType.COLUMN_MODIFIED,
                    entity_name=f"{name}.{col_name}",
                    details={
                        "table": name,
                        "column": col_name,
                        "from": old_cols[col_name].model_dump(mode="json"),
                        "to": new_cols[col_name].model_dump(mode="json"),
                        "changed": changed,
                    },
                ))

        old_rels = {rel.key: rel for rel in old_table.relations}
        new_rels = {rel.key: rel for rel in new_table.relations}

        for key in sorted(set(new_rels) - set(old_rels)):
            buckets[ChangeType.RELATION_ADDED].append(
                _relation_change(ChangeType.RELATION_ADDED, name, new_rels[key])
            )
        for key in sorted(set(old_rels) - set(new_rels)):
            buckets[ChangeType.RELATION_REMOVED].append(
                _relation_change(ChangeType.RELATION_REMOVED, name, old_rels[key])
            )

    changes = [change for kind in ChangeType for change in buckets[kind]]
    logger.debug("Computed %d schema changes", len(changes))
    return changes
