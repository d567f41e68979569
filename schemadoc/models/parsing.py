# schemadoc/models/parsing.py
"""Parser result models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from schemadoc.models.schema import NormalizedSchema


class Dialect(str, Enum):
    """Schema source dialect enumeration."""

    SQL = "sql"
    PRISMA = "prisma"
    DRIZZLE = "drizzle"


class ParseStatus(str, Enum):
    """Parse status enumeration."""

    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


class ParsingStats(BaseModel):
    """Counts derived from a parsed schema."""

    table_count: int = 0
    column_count: int = 0
    relation_count: int = 0


class ParsingResult(BaseModel):
    """Parser output contract.

    ``stats`` is computed from the schema and ignored on input. Any error
    forces ``status`` to ``error``; the schema is then best-effort and must not
    be persisted.
    """

    status: ParseStatus = ParseStatus.SUCCESS
    input_type: Dialect
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    normalized_schema: NormalizedSchema = Field(
        default_factory=NormalizedSchema, alias="schema"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _errors_force_error_status(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("errors"):
            data = {**data, "status": ParseStatus.ERROR}
        return data

    @computed_field
    @property
    def stats(self) -> ParsingStats:
        schema = self.normalized_schema
        return ParsingStats(
            table_count=schema.table_count,
            column_count=schema.column_count,
            relation_count=schema.relation_count,
        )

    @property
    def ok(self) -> bool:
        """Whether the schema may be persisted."""
        return self.status != ParseStatus.ERROR
