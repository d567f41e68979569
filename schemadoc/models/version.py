# schemadoc/models/version.py
"""Schema version models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemadoc.models.changes import Change
from schemadoc.models.parsing import Dialect, ParsingResult
from schemadoc.models.schema import NormalizedSchema


class IngestStatus(str, Enum):
    """Outcome of a schema submission."""

    CREATED = "created"
    NO_CHANGES = "no_changes"
    REJECTED = "rejected"


class SchemaVersion(BaseModel):
    """An immutable stored schema snapshot."""

    project_id: str
    version: int
    dialect: Dialect
    raw_schema: str
    normalized_schema: NormalizedSchema = Field(alias="schema")
    schema_hash: str
    created_at: datetime
    changes: list[Change] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class IngestOutcome(BaseModel):
    """Result of submitting schema source to the version store."""

    status: IngestStatus
    version: Optional[int] = None
    result: ParsingResult
    changes: list[Change] = Field(default_factory=list)
