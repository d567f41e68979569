# schemadoc/services/builder.py
"""Mutable accumulator that parsers fill in and then freeze."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from schemadoc.models.parsing import Dialect, ParseStatus, ParsingResult
from schemadoc.models.schema import (
    Column,
    Index,
    NormalizedSchema,
    Relation,
    RelationType,
    Table,
)
from schemadoc.utils.constants import NO_COLUMNS_WARNING, NO_RELATIONS_WARNING

logger = logging.getLogger("schema-builder")


@dataclass
class TableDraft:
    """In-progress table; column attributes stay plain dicts until build()."""
    columns: dict[str, dict[str, Any]] = field(default_factory=dict)
    relations: list[tuple[RelationType, str, str]] = field(default_factory=list)
    indexes: list[Index] = field(default_factory=list)

    def add_relation(self, rel_type: RelationType, source: str, target: str) -> bool:
        entry = (rel_type, source, target)
        if entry in self.relations:
            return False
        self.relations.append(entry)
        return True


class SchemaBuilder:
    """Function-scoped builder for a NormalizedSchema.

    Parsers call the ``add_*`` methods while scanning and finish with
    :meth:`build` or :meth:`result`. Nothing handed out by ``build`` shares
    state with the builder.
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.tables: dict[str, TableDraft] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.partial = False

    def add_table(self, name: str) -> TableDraft:
        """Start a table. A repeated definition replaces the earlier one."""
        if name in self.tables:
            self.warnings.append(
                f"Table {name} is defined more than once; the last definition wins."
            )
            logger.warning("Duplicate table definition: %s", name)
        draft = TableDraft()
        self.tables[name] = draft
        logger.debug("Found table: %s", name)
        return draft

    def has_table(self, name: str) -> bool:
        return name in self.tables

    def add_column(
        self,
        table: str,
        name: str,
        col_type: str,
        nullable: bool = True,
        primary: bool = False,
        unique: bool = False,
        default: Optional[str] = None,
        foreign_key: Optional[str] = None,
    ) -> None:
        self.tables[table].columns[name] = {
            "type": col_type,
            "nullable": nullable,
            "primary": primary,
            "unique": unique,
            "default": default,
            "foreign_key": foreign_key,
        }

    def mark_primary(self, table: str, columns: list[str]) -> None:
        """Flag already-defined columns as primary; unknown names are ignored."""
        draft = self.tables.get(table)
        if draft is None:
            return
        for name in columns:
            col = draft.columns.get(name)
            if col is not None:
                col["primary"] = True
                col["nullable"] = False

    def mark_unique(self, table: str, columns: list[str], name: Optional[str] = None) -> None:
        """Flag a single column unique, or record a multi-column unique index."""
        draft = self.tables.get(table)
        if draft is None or not columns:
            return
        if len(columns) == 1:
            col = draft.columns.get(columns[0])
            if col is not None:
                col["unique"] = True
            return
        self.add_index(table, columns, unique=True, name=name)

    def add_index(
        self,
        table: str,
        columns: list[str],
        unique: bool = False,
        name: Optional[str] = None,
    ) -> None:
        draft = self.tables.get(table)
        if draft is None or not columns:
            return
        suffix = "key" if unique else "idx"
        index_name = name or f"{table}_{'_'.join(columns)}_{suffix}"
        draft.indexes.append(Index(name=index_name, columns=columns, unique=unique))

    def add_foreign_key(
        self,
        from_table: str,
        from_col: str,
        to_table: str,
        to_col: str,
    ) -> bool:
        """Resolve one pending relation.

        Sets ``foreign_key`` on the source column, appends ``many_to_one`` to
        the source table and the mirrored ``one_to_many`` to the target table
        when it exists.

        Returns:
            True if the source table exists and the relation was recorded.
        """
        source_table = self.tables.get(from_table)
        if source_table is None:
            logger.debug(
                "Dropping relation from unknown table %s.%s", from_table, from_col
            )
            return False

        source = f"{from_table}.{from_col}"
        target = f"{to_table}.{to_col}"

        col = source_table.columns.get(from_col)
        if col is not None:
            col["foreign_key"] = target
        source_table.add_relation(RelationType.MANY_TO_ONE, source, target)

        target_table = self.tables.get(to_table)
        if target_table is not None:
            target_table.add_relation(RelationType.ONE_TO_MANY, target, source)
        return True

    def skip(self, message: str) -> None:
        """Record an unrecognized fragment; the result becomes partial."""
        self.partial = True
        self.warnings.append(message)

    def build(self) -> NormalizedSchema:
        """Freeze the accumulated state into a NormalizedSchema."""
        tables = {}
        for name, draft in self.tables.items():
            tables[name] = Table(
                columns={
                    col_name: Column(**attrs)
                    for col_name, attrs in draft.columns.items()
                },
                relations=[
                    Relation(type=rel_type, from_=source, to=target)
                    for rel_type, source, target in draft.relations
                ],
                indexes=list(draft.indexes),
            )
        return NormalizedSchema(tables=tables)

    def result(self, empty_error: str, warn_no_relations: bool = True) -> ParsingResult:
        """Build the final ParsingResult, applying the shared error policy.

        Args:
            empty_error: Message used when no table was found.
            warn_no_relations: Add the no-relations warning when applicable.
        """
        schema = self.build()
        if self.errors:
            return ParsingResult(
                status=ParseStatus.ERROR,
                input_type=self.dialect,
                errors=list(self.errors),
                warnings=list(self.warnings),
                schema=schema,
            )
        if schema.table_count == 0:
            return ParsingResult(
                status=ParseStatus.ERROR,
                input_type=self.dialect,
                errors=[empty_error],
                schema=schema,
            )

        warnings = list(self.warnings)
        if schema.column_count == 0:
            warnings.append(NO_COLUMNS_WARNING)
        if warn_no_relations and schema.relation_count == 0:
            warnings.append(NO_RELATIONS_WARNING)
        status = ParseStatus.PARTIAL if self.partial else ParseStatus.SUCCESS
        return ParsingResult(
            status=status,
            input_type=self.dialect,
            warnings=warnings,
            schema=schema,
        )

    def failure(self, exc: Exception, prefix: str = "Parsing Exception") -> ParsingResult:
        """Convert an unexpected exception into an error result."""
        message = f"{prefix}: {exc}"
        return ParsingResult(
            status=ParseStatus.ERROR,
            input_type=self.dialect,
            errors=[message],
            warnings=list(self.warnings),
            schema=self._safe_build(),
        )

    def _safe_build(self) -> NormalizedSchema:
        try:
            return self.build()
        except Exception:
            logger.debug("Partial schema could not be built", exc_info=True)
            return NormalizedSchema()
