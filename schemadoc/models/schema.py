# schemadoc/models/schema.py
"""Normalized schema data models."""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from enum import Enum


class RelationType(str, Enum):
    """Relation cardinality enumeration."""

    ONE_TO_ONE = "one_to_one"
    ONE_TO_MANY = "one_to_many"
    MANY_TO_ONE = "many_to_one"
    MANY_TO_MANY = "many_to_many"


class Column(BaseModel):
    """Column definition model."""

    type: str
    nullable: bool = True
    primary: bool = False
    unique: bool = False
    default: Optional[str] = None
    foreign_key: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Index(BaseModel):
    """Index definition model."""

    name: str
    columns: list[str]
    unique: bool = False

    model_config = ConfigDict(frozen=True)


class Relation(BaseModel):
    """Relation between two ``table.column`` endpoints."""

    type: RelationType
    from_: str = Field(alias="from")
    to: str

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity used when comparing relation sets."""
        return (self.type.value, self.from_, self.to)


class Table(BaseModel):
    """Table model: columns keyed by name plus discovered relations and indexes."""

    columns: dict[str, Column] = Field(default_factory=dict)
    relations: list[Relation] = Field(default_factory=list)
    indexes: list[Index] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def primary_columns(self) -> list[str]:
        """Names of primary key columns, in column order."""
        return [name for name, col in self.columns.items() if col.primary]


class NormalizedSchema(BaseModel):
    """Dialect-independent relational model produced by every parser.

    Instances are never modified after construction; a new schema version is
    always a new object. Parsers assemble one through
    :class:`schemadoc.services.builder.SchemaBuilder`.

    ``frozen`` only blocks attribute assignment. The ``tables``, ``columns``,
    ``relations`` and ``indexes`` containers are plain dicts and lists, so
    code that needs a modified schema must build a new one with
    ``model_copy(update=...)`` instead of editing them in place. Every
    ``SchemaBuilder.build`` call returns fresh containers.
    """

    tables: dict[str, Table] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def table_count(self) -> int:
        return len(self.tables)

    @property
    def column_count(self) -> int:
        return sum(len(table.columns) for table in self.tables.values())

    @property
    def relation_count(self) -> int:
        """Number of many-to-one relations; mirrored sides are not counted."""
        return sum(
            1
            for table in self.tables.values()
            for rel in table.relations
            if rel.type == RelationType.MANY_TO_ONE
        )

    def to_json_dict(self) -> dict:
        """Serialize to the persisted JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
